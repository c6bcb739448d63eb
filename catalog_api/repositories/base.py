"""
Pagination primitives shared by the repositories.

A list query is described by a filter specification (a dataclass that knows
which WHERE clauses it contributes) and a ``PageParams`` value. ``paginate``
runs the count and the page query for any statement built that way.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, TypeVar

from sqlalchemy import func
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import Session, select
from sqlmodel.sql.expression import SelectOfScalar

from catalog_api.core.config import settings

T = TypeVar("T")


@dataclass(frozen=True)
class PageParams:
    page: int = 1
    limit: int = 20

    @classmethod
    def from_query(
        cls,
        page: Optional[int],
        limit: Optional[int],
        default_limit: int,
        max_limit: Optional[int] = None,
    ) -> "PageParams":
        """Floor ``page`` at 1 and clamp ``limit`` into ``[1, max_limit]``."""
        max_limit = max_limit or settings.MAX_PAGE_SIZE
        page = max(1, page if page is not None else 1)
        limit = min(max_limit, max(1, limit if limit is not None else default_limit))
        return cls(page=page, limit=limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page(Generic[T]):
    items: List[T]
    total: int
    params: PageParams = field(default_factory=PageParams)

    @property
    def page(self) -> int:
        return self.params.page

    @property
    def limit(self) -> int:
        return self.params.limit

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def contains(column: Any, term: str) -> ColumnElement:
    """Case-insensitive substring match with LIKE wildcards escaped."""
    return column.icontains(term, autoescape=True)


def paginate(
    session: Session,
    statement: SelectOfScalar,
    params: PageParams,
    order_by: tuple,
) -> Page:
    """
    Count the filtered statement, then fetch one ordered page of it.

    The count runs over the statement before ordering and slicing so
    ``total`` reflects the whole filtered set. A page starting at or past
    ``total`` is returned empty without running the page query.
    """
    count_statement = select(func.count()).select_from(statement.subquery())
    total = session.exec(count_statement).one()
    if params.offset >= total:
        # Past the end; also keeps huge offsets away from the driver
        return Page(items=[], total=total, params=params)

    rows = session.exec(
        statement.order_by(*order_by).offset(params.offset).limit(params.limit)
    ).all()
    return Page(items=list(rows), total=total, params=params)
