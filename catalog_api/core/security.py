"""
Security Module

Password hashing (passlib/bcrypt) and bearer token issuance/decoding
(python-jose, HS256). Tokens identify a client account and carry its
active-status claim.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from catalog_api.core.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PASSWORD_HASH_ROUNDS,
)


class TokenExpired(Exception):
    pass


class TokenInvalid(Exception):
    pass


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognised hash
        return False


def create_access_token(
    subject: str,
    client_id: int,
    active: bool = True,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Issue a signed JWT for a client account.

    Args:
        subject: The client's email, stored in the ``sub`` claim
        client_id: Primary key of the client, used to resolve the tenant
        active: Active-status claim at issuance time
        expires_delta: Token lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        str: The encoded token
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"sub": subject, "client_id": client_id, "active": active, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify a token's signature and expiry and return its claims.

    Raises:
        TokenExpired: The ``exp`` claim is in the past
        TokenInvalid: Bad signature, malformed token or missing claims
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError as exc:
        raise TokenExpired() from exc
    except JWTError as exc:
        raise TokenInvalid() from exc

    if payload.get("sub") is None or not isinstance(payload.get("client_id"), int):
        raise TokenInvalid()
    return payload
