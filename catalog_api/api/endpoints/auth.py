"""
Authentication Endpoints Module

Clients exchange their credentials for a bearer token here. The token is
then sent as ``Authorization: Bearer <token>`` on every other route.
"""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError
from sqlmodel import Session

from catalog_api.core.config import settings
from catalog_api.core.errors import BadRequest, Unauthenticated, errors_from
from catalog_api.core.security import create_access_token, verify_password
from catalog_api.db.session import get_db
from catalog_api.repositories.client_repository import ClientRepository
from catalog_api.schemas.auth import LoginRequest, Token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=Token)
def login(
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
):
    """
    Authenticate a client and issue an access token.

    Expects a JSON object with ``email`` and, unless AUTH_REQUIRE_PASSWORD is
    disabled, ``password``. A password that is supplied is always checked.

    Returns:
        Token: ``{"token": "<jwt>"}``

    Raises:
        BadRequest: Email (or required password) missing, or a field of
            the wrong type
        Unauthenticated: Unknown or inactive client, or wrong password
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("email"), str) or not payload["email"].strip():
        raise BadRequest("Email required")
    if settings.AUTH_REQUIRE_PASSWORD and not isinstance(payload.get("password"), str):
        raise BadRequest("Password required")

    try:
        credentials = LoginRequest(email=payload["email"], password=payload.get("password"))
    except ValidationError as exc:
        raise BadRequest(errors_from(exc))

    client = ClientRepository(db).find_active_by_email(credentials.email)
    if client is None:
        logger.warning("Login refused: no active client for %s", credentials.email)
        raise Unauthenticated("Client not found or inactive")

    if credentials.password is not None and not verify_password(credentials.password, client.password):
        logger.warning("Login refused: bad password for client %s", client.id)
        raise Unauthenticated("Invalid credentials")

    token = create_access_token(subject=client.email, client_id=client.id, active=client.is_active)
    logger.info("Issued token for client %s", client.id)
    return {"token": token}
