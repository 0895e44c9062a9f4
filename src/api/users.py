"""User API endpoints."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, Response, status

from src.api.dependencies import get_user_service
from src.config import get_settings
from src.exceptions import UserNotFoundError
from src.models.user import User
from src.schemas.user import UserPayload, UserResponse
from src.services.realtime import publish_user_event
from src.services.user_service import UserDirectory

router = APIRouter(prefix="/api/users", tags=["users"])
settings = get_settings()


def get_user_or_404(service: UserDirectory, user_id: int) -> User:
    """Get a user by id or raise ``UserNotFoundError``."""
    user = service.get_by_id(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


@router.get("", response_model=list[UserResponse])
def get_users(
    service: Annotated[UserDirectory, Depends(get_user_service)],
    search: str | None = Query(default=None, description="Match name or email, ignoring case"),
):
    """List users, or search them by name/email. At most ``max_results`` are returned."""
    if search and search.strip():
        return service.search(search, limit=settings.max_results)
    return service.list_all(limit=settings.max_results)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    service: Annotated[UserDirectory, Depends(get_user_service)],
):
    """Get a single user."""
    return get_user_or_404(service, user_id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserPayload,
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
    service: Annotated[UserDirectory, Depends(get_user_service)],
):
    """Create a user and notify connected clients."""
    user = service.create(user_data)
    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    background_tasks.add_task(publish_user_event)
    return user


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    user_data: UserPayload,
    background_tasks: BackgroundTasks,
    service: Annotated[UserDirectory, Depends(get_user_service)],
):
    """Replace a user and notify connected clients."""
    user = service.update(user_id, user_data)
    if user is None:
        raise UserNotFoundError(user_id)

    background_tasks.add_task(publish_user_event)
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    background_tasks: BackgroundTasks,
    service: Annotated[UserDirectory, Depends(get_user_service)],
):
    """Delete a user and notify connected clients."""
    if not service.delete(user_id):
        raise UserNotFoundError(user_id)

    background_tasks.add_task(publish_user_event)
