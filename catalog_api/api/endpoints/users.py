"""
User Management Endpoints Module

CRUD endpoints for the users owned by the authenticated client. Every query
is scoped to that client: ids belonging to other clients behave exactly like
ids that do not exist.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlmodel import Session

from catalog_api.api import deps
from catalog_api.api.links import cached_json, envelope, resource_url
from catalog_api.core.config import settings
from catalog_api.core.errors import BadRequest, Conflict, DuplicateEmailError, NotFound, errors_from
from catalog_api.db.session import get_db
from catalog_api.models.client import Client
from catalog_api.models.user import User
from catalog_api.repositories.base import PageParams
from catalog_api.repositories.user_repository import UserFilter, UserRepository
from catalog_api.schemas.user import UserCreate, UserListItem, UserRead

logger = logging.getLogger(__name__)

router = APIRouter()

DUPLICATE_EMAIL = "Email already exists for this client"


def _user_url(request: Request, user: User) -> str:
    return resource_url(request, f"{settings.API_PREFIX}/users/{user.id}")


def _list_url(request: Request) -> str:
    return resource_url(request, f"{settings.API_PREFIX}/users")


def _user_detail(request: Request, user: User, include_delete: bool = True) -> Dict[str, Any]:
    links = {"self": _user_url(request, user), "list": _list_url(request)}
    if include_delete:
        links["delete"] = _user_url(request, user)
    return {
        **UserRead.model_validate(user).model_dump(mode="json", by_alias=True),
        "_links": links,
    }


@router.get("")
def list_users(
    request: Request,
    page: Optional[int] = Query(default=None, description="Page number, starting at 1"),
    limit: Optional[int] = Query(default=None, description="Items per page (1-100)"),
    search: Optional[str] = Query(default=None, description="Substring of first name, last name or email"),
    db: Session = Depends(get_db),
    current_client: Client = Depends(deps.get_current_client),
):
    """
    Retrieve a page of the current client's users, newest first.

    Args:
        page: Page number (defaults to 1, values below 1 count as 1)
        limit: Page size (defaults to 10, clamped to 1..100)
        search: Case-insensitive substring matched literally against
            first name, last name or email

    Returns:
        Paginated envelope with data, meta and _links
    """
    params = PageParams.from_query(page, limit, default_limit=settings.USER_PAGE_SIZE)
    filters = UserFilter(client_id=current_client.id, search=search)
    result = UserRepository(db).list(filters, params)

    data = [
        {
            **UserListItem.model_validate(user).model_dump(mode="json", by_alias=True),
            "_links": {"self": _user_url(request, user), "delete": _user_url(request, user)},
        }
        for user in result.items
    ]
    content = envelope(request, result, data, {"search": search})
    return cached_json(content, settings.USER_LIST_MAX_AGE, private=True)


@router.get("/{user_id:int}")
def read_user(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_client: Client = Depends(deps.get_current_client),
):
    """
    Get one of the current client's users.

    Raises:
        NotFound: No such user for this client
    """
    user = UserRepository(db).get_for_client(user_id, current_client.id)
    if user is None:
        raise NotFound("User not found")
    return cached_json(_user_detail(request, user), settings.USER_SHOW_MAX_AGE, private=True)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(
    request: Request,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    current_client: Client = Depends(deps.get_current_client),
):
    """
    Create a user for the current client.

    Expects a JSON object with firstName, lastName and email.

    Returns:
        201 with the created user and its links

    Raises:
        BadRequest: Empty, malformed or non-object body, or field validation
            failures
        Conflict: The client already has a user with this email
    """
    if not payload or not isinstance(payload, dict):
        raise BadRequest("Invalid JSON")

    repository = UserRepository(db)
    email = payload.get("email")
    if isinstance(email, str) and repository.find_by_email(email, current_client.id) is not None:
        raise Conflict(DUPLICATE_EMAIL)

    try:
        user_in = UserCreate.model_validate(payload)
    except ValidationError as exc:
        raise BadRequest(errors_from(exc))

    try:
        user = repository.create(user_in, current_client.id)
    except DuplicateEmailError:
        raise Conflict(DUPLICATE_EMAIL)

    content = _user_detail(request, user, include_delete=False)
    return JSONResponse(
        content=content,
        status_code=status.HTTP_201_CREATED,
        headers={"Location": content["_links"]["self"]},
    )


@router.delete("/{user_id:int}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_client: Client = Depends(deps.get_current_client),
):
    """
    Delete one of the current client's users.

    Raises:
        NotFound: No such user for this client
    """
    repository = UserRepository(db)
    user = repository.get_for_client(user_id, current_client.id)
    if user is None:
        raise NotFound("User not found")

    repository.delete(user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
