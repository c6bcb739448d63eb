"""Repository for tenant-scoped user operations.

Every query takes the owning client's id explicitly; there is no lookup of
the current principal inside this module.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import Session, col, select

from catalog_api.core.errors import DuplicateEmailError
from catalog_api.models.user import User, normalize_email
from catalog_api.repositories.base import Page, PageParams, contains, paginate
from catalog_api.schemas.user import UserCreate

logger = logging.getLogger(__name__)


def _tenant_clauses(client_id: int, include_deleted: bool = False) -> List[ColumnElement]:
    clauses = [col(User.client_id) == client_id]
    if not include_deleted:
        clauses.append(col(User.deleted_at).is_(None))
    return clauses


@dataclass(frozen=True)
class UserFilter:
    """Tenant scope plus an optional search over names and email."""
    client_id: int
    search: Optional[str] = None

    def clauses(self) -> List[ColumnElement]:
        clauses = _tenant_clauses(self.client_id)
        if self.search:
            clauses.append(
                or_(
                    contains(col(User.first_name), self.search),
                    contains(col(User.last_name), self.search),
                    contains(col(User.email), self.search),
                )
            )
        return clauses


class UserRepository:
    """Repository for User CRUD operations within one client."""

    ORDERING = (col(User.created_at).desc(), col(User.id).desc())

    def __init__(self, session: Session):
        self.session = session

    def list(self, filters: UserFilter, params: PageParams) -> Page[User]:
        statement = select(User).where(*filters.clauses())
        return paginate(self.session, statement, params, self.ORDERING)

    def get_for_client(self, user_id: int, client_id: int) -> Optional[User]:
        """Get a live user by id, only if it belongs to ``client_id``."""
        statement = select(User).where(col(User.id) == user_id, *_tenant_clauses(client_id))
        return self.session.exec(statement).first()

    def find_by_email(self, email: str, client_id: int, include_deleted: bool = False) -> Optional[User]:
        statement = select(User).where(
            col(User.email) == normalize_email(email),
            *_tenant_clauses(client_id, include_deleted=include_deleted),
        )
        return self.session.exec(statement).first()

    def create(self, user_in: UserCreate, client_id: int) -> User:
        """
        Persist a user for ``client_id``.

        A soft-deleted user with the same email is restored in place.

        Raises:
            DuplicateEmailError: A live user of this client already has the email
        """
        existing = self.find_by_email(user_in.email, client_id, include_deleted=True)
        if existing is not None and not existing.is_deleted:
            raise DuplicateEmailError(user_in.email)

        if existing is not None:
            user = existing
            user.first_name = user_in.first_name
            user.last_name = user_in.last_name
            user.restore()
        else:
            user = User(
                first_name=user_in.first_name,
                last_name=user_in.last_name,
                email=user_in.email,
                client_id=client_id,
            )

        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as exc:
            # A concurrent create won the unique_email_client constraint
            self.session.rollback()
            raise DuplicateEmailError(user_in.email) from exc
        self.session.refresh(user)

        if existing is not None:
            logger.info("Restored user %s for client %s", user.id, client_id)
        else:
            logger.info("Created user %s for client %s", user.id, client_id)
        return user

    def delete(self, user: User) -> None:
        """Soft-delete ``user``; it disappears from every tenant query."""
        user.soft_delete()
        self.session.add(user)
        self.session.commit()
        logger.info("Deleted user %s for client %s", user.id, user.client_id)
