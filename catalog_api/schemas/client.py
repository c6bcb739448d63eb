from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from catalog_api.models.user import EMAIL_MAX_LENGTH, normalize_email


# Properties to receive when registering a client account
class ClientCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(min_length=1)
    is_active: bool = True

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
