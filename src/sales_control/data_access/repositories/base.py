"""Shared pagination helper for the SQL repositories."""

from typing import Any, TypeVar

from pydantic import BaseModel
from sqlalchemy import func
from sqlmodel import Session, select

from sales_control.core.exceptions import ValidationException
from sales_control.domain.entities import Page

EntityT = TypeVar("EntityT", bound=BaseModel)


def paginate(
    session: Session,
    statement: Any,
    entity: type[EntityT],
    page_size: int,
    page: int,
) -> Page[EntityT]:
    """Run an ordered select for one page and count the unpaged rows."""
    if page_size < 1:
        raise ValidationException(
            f"page_size must be positive, got: {page_size}", field="page_size", value=page_size
        )
    if page < 1:
        raise ValidationException(f"page must be positive, got: {page}", field="page", value=page)

    # Count on the filtered query without ORDER BY
    count_stmt = select(func.count()).select_from(statement.order_by(None).subquery())
    total = int(session.exec(count_stmt).one())

    rows = session.exec(statement.offset((page - 1) * page_size).limit(page_size)).all()

    return Page[entity](  # type: ignore[valid-type]
        items=[entity.model_validate(row) for row in rows],
        total=total,
        page=page,
        page_size=page_size,
    )
