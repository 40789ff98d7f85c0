"""Users API router with CRUD and search operations."""

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel

from src.users_api.api.http.deps import get_pagination_config, get_user_service
from src.users_api.core.services import UserService
from src.users_api.entities.core.user import User, UserCreate, UserQuery, UserUpdate
from src.users_api.runtime.config.config_data import PaginationConfig

router = APIRouter(prefix="/users", tags=["users"])


class PageMeta(BaseModel):
    total: int
    limit: int
    offset: int


class UserPage(BaseModel):
    data: list[User]
    meta: PageMeta


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    service: UserService = Depends(get_user_service),
) -> User:
    """Create a new user."""
    return service.create_user(payload)


@router.get("", response_model=UserPage)
def list_users(
    q: str | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    min_age: str | None = Query(default=None, alias="minAge"),
    max_age: str | None = Query(default=None, alias="maxAge"),
    limit: str | None = None,
    offset: str | None = None,
    service: UserService = Depends(get_user_service),
    pagination: PaginationConfig = Depends(get_pagination_config),
) -> UserPage:
    """Search users.

    Numeric parameters are accepted as raw strings; values that do not parse
    are ignored instead of failing the request.
    """
    query = UserQuery.from_params(
        q=q,
        status=status_filter,
        min_age=min_age,
        max_age=max_age,
        limit=limit,
        offset=offset,
        default_limit=pagination.default_limit,
        max_limit=pagination.max_limit,
    )
    users, total = service.list_users(query)
    return UserPage(
        data=users,
        meta=PageMeta(total=total, limit=query.limit, offset=query.offset),
    )


@router.get("/{user_id}", response_model=User)
def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> User:
    """Get a user by ID."""
    return service.get_user(user_id)


@router.put("/{user_id}", response_model=User)
def update_user(
    user_id: str,
    payload: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> User:
    """Update the supplied fields of a user."""
    return service.update_user(user_id, payload)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> Response:
    """Delete a user."""
    service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
