from sales_control.core.logging import get_logger
from sales_control.data_access.db import SessionScope, session_scope
from sales_control.domain.entities import User, UserInput
from sales_control.domain.interfaces.repositories import IUserRepository
from sales_control.domain.interfaces.services import IUserService

logger = get_logger(__name__)


class UserService(IUserService):
    """Administrators; the recipients of the admin-wide daily report."""

    def __init__(self, user_repository: IUserRepository, transaction: SessionScope = session_scope):
        self._user_repository = user_repository
        self._transaction = transaction

    def create_user(self, user: UserInput) -> User:
        with self._transaction() as session:
            created = self._user_repository.create(session, user)
        logger.info(f"Created user: {created.id}", extra={"user_email": created.email})
        return created

    def get_all_users(self) -> list[User]:
        with self._transaction() as session:
            return self._user_repository.get_all(session)

    def find_user(self, user_id: int) -> User | None:
        with self._transaction() as session:
            return self._user_repository.find_by_id(session, user_id)
