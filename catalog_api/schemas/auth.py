from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: str
    password: Optional[str] = None


class Token(BaseModel):
    token: str


class TokenData(BaseModel):
    email: str
    client_id: int
    active: bool = True
