from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_serializer, field_validator

from catalog_api.models.user import EMAIL_MAX_LENGTH, normalize_email
from catalog_api.schemas.common import CamelModel, as_utc

NAME_PATTERN = r"^[a-zA-ZÀ-ÿ\s'-]+$"


# Properties to receive via API on creation
class UserCreate(CamelModel):
    first_name: str = Field(min_length=2, max_length=100, pattern=NAME_PATTERN)
    last_name: str = Field(min_length=2, max_length=100, pattern=NAME_PATTERN)
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        if isinstance(value, str):
            return normalize_email(value)
        return value

    @field_validator("email")
    @classmethod
    def _limit_email_length(cls, value: str) -> str:
        if len(value) > EMAIL_MAX_LENGTH:
            raise ValueError(f"must be at most {EMAIL_MAX_LENGTH} characters")
        return value


# Shape of a user inside a paginated list
class UserListItem(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    full_name: str


# Full user representation
class UserRead(UserListItem):
    created_at: datetime

    @field_serializer("created_at")
    def _serialize_timestamp(self, value: datetime) -> Optional[str]:
        return as_utc(value)
