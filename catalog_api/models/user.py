"""
User Model Module

Users are the customers a client manages. Every user belongs to exactly one
client, and an email may only appear once per client.
"""
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from catalog_api.models.client import utcnow

if TYPE_CHECKING:
    from catalog_api.models.client import Client


EMAIL_MAX_LENGTH = 180


def normalize_email(email: str) -> str:
    return email.strip().lower()


class User(SQLModel, table=True):
    """
    User model representing a customer of one client.

    Attributes:
        id: Auto-incrementing primary key
        first_name: Given name (letters, spaces, hyphens, apostrophes)
        last_name: Family name (same rules as first_name)
        email: Contact email, lowercased and trimmed; unique per client
        client_id: Owning client (tenant); required
        created_at: UTC timestamp set on construction and again on restore
        deleted_at: Set when the user is soft-deleted, None otherwise
    """
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", "client_id", name="unique_email_client"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str = Field(max_length=100, nullable=False)
    last_name: str = Field(max_length=100, nullable=False)
    email: str = Field(max_length=EMAIL_MAX_LENGTH, nullable=False)

    client_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("clients.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    deleted_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )

    client: Optional["Client"] = Relationship(back_populates="users")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        self.deleted_at = utcnow()

    def restore(self) -> None:
        """Bring a soft-deleted user back as if newly created."""
        self.deleted_at = None
        self.created_at = utcnow()

    def __str__(self) -> str:
        return self.full_name
