"""
Client Model Module

This module defines the Client model: the vendor account that authenticates
against the API and acts as the tenant owning a set of users.
"""
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Column, DateTime
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from catalog_api.models.user import User


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Client(SQLModel, table=True):
    """
    Client model representing a vendor account (a tenant).

    Clients authenticate with email and password and only ever see their own
    users. Deleting a client deletes its users.

    Attributes:
        id: Auto-incrementing primary key
        name: Display name of the vendor (2-255 characters)
        email: Login email, unique across all clients
        password: bcrypt hash of the client's password
        is_active: Inactive clients cannot log in and their tokens are refused
        created_at: UTC timestamp set when the object is constructed
        users: Users owned by this client
    """
    __tablename__ = "clients"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, nullable=False)
    email: str = Field(max_length=180, unique=True, index=True, nullable=False)
    password: str = Field(max_length=255, nullable=False)
    is_active: bool = Field(default=True, nullable=False)

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    users: List["User"] = Relationship(
        back_populates="client",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True},
    )

    def __str__(self) -> str:
        return self.name
