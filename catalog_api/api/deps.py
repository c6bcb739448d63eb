"""
API Dependencies Module

This module provides FastAPI dependency functions for bearer-token
authentication. The resolved Client is the tenant: handlers pass it
explicitly into every tenant-scoped repository call.
"""
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from catalog_api.core.config import settings
from catalog_api.core.errors import Unauthenticated
from catalog_api.core.security import TokenExpired, TokenInvalid, decode_access_token
from catalog_api.db.session import get_db
from catalog_api.models.client import Client
from catalog_api.repositories.client_repository import ClientRepository
from catalog_api.schemas.auth import TokenData

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported with our own envelope
reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/login",
    auto_error=False,
)


def get_token_data(token: Optional[str] = Depends(reusable_oauth2)) -> TokenData:
    """
    Dependency that extracts and verifies the bearer token.

    Raises:
        Unauthenticated: Token missing, malformed, badly signed or expired
    """
    if not token:
        raise Unauthenticated("JWT Token not found")

    try:
        payload = decode_access_token(token)
    except TokenExpired:
        raise Unauthenticated("Expired JWT Token")
    except TokenInvalid:
        raise Unauthenticated("Invalid JWT Token")

    return TokenData(
        email=payload["sub"],
        client_id=payload["client_id"],
        active=bool(payload.get("active", True)),
    )


def get_current_client(
    token_data: TokenData = Depends(get_token_data),
    db: Session = Depends(get_db),
) -> Client:
    """
    Dependency that resolves the authenticated Client from its token.

    The account is re-read on every request so a client deactivated after
    token issuance is refused immediately.

    Raises:
        Unauthenticated: The client no longer exists or is inactive
    """
    client = ClientRepository(db).get(token_data.client_id)
    if client is None or not client.is_active or not token_data.active:
        logger.warning("Refused token for client %s", token_data.client_id)
        raise Unauthenticated("Client not found or inactive")
    return client
