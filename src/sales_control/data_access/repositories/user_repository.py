from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from sales_control.core.exceptions import DuplicateRecordException
from sales_control.data_access.models import UserRecord
from sales_control.domain.entities import User, UserInput
from sales_control.domain.interfaces.repositories import IUserRepository


class SqlUserRepository(IUserRepository):
    def create(self, session: Session, user: UserInput) -> User:
        record = UserRecord(name=user.name, email=user.email)
        session.add(record)
        try:
            session.flush()
        except IntegrityError as e:
            raise DuplicateRecordException("User", "email", user.email) from e
        return User.model_validate(record)

    def get_all(self, session: Session) -> list[User]:
        records = session.exec(select(UserRecord).order_by(UserRecord.id)).all()
        return [User.model_validate(record) for record in records]

    def find_by_id(self, session: Session, user_id: int) -> User | None:
        record = session.get(UserRecord, user_id)
        return User.model_validate(record) if record else None
