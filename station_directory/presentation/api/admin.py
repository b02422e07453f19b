"""
Admin API Router - User management.

Any authenticated session may call these endpoints; there is no separate
admin role.
"""

from logging import getLogger
from typing import Optional

from fastapi import APIRouter, Depends, status
from dishka.integrations.fastapi import FromDishka, inject
from pydantic import BaseModel

from station_directory.application.dto.user import UserView
from station_directory.application.services.auth_gate import AuthGate
from station_directory.application.services.user_directory import UserDirectory
from station_directory.domain.value_objects.auth_identity import AuthIdentity
from station_directory.domain.value_objects.username import Username
from station_directory.presentation.api.auth import SignupRequest
from station_directory.presentation.dependencies.auth import get_current_user

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class CreateUserRequest(SignupRequest):
    """Same body as signup; the caller's session is left alone."""


class AssignStationsRequest(BaseModel):
    station_ids: list[str]
    station_titles: Optional[dict[str, str]] = None


class DeleteUserResponse(BaseModel):
    success: bool
    user: UserView
    sessions_closed: int


# ==================== ROUTER ====================

router = APIRouter(prefix="/admin", tags=["admin"])


# ==================== ENDPOINTS ====================


@router.get("/users", response_model=list[UserView])
@inject
async def list_users(
    directory: FromDishka[UserDirectory],
    current_user: AuthIdentity = Depends(get_current_user),
):
    return await directory.list_all()


@router.post(
    "/users",
    response_model=UserView,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_user(
    request: CreateUserRequest,
    directory: FromDishka[UserDirectory],
    current_user: AuthIdentity = Depends(get_current_user),
):
    user = await directory.register(
        username=request.username,
        phone=request.phone,
        password=request.password,
        password_confirmation=request.password2,
        station_ids=request.station_ids,
    )
    logger.info(f"[Admin] {current_user.username} created user {user.username}")
    return user


@router.put("/users/{user_id}/stations", response_model=UserView)
@inject
async def assign_stations(
    user_id: int,
    request: AssignStationsRequest,
    directory: FromDishka[UserDirectory],
    current_user: AuthIdentity = Depends(get_current_user),
):
    """Replace the station assignments of a user."""
    return await directory.assign_stations(
        user_id, request.station_ids, request.station_titles
    )


@router.delete("/users/{user_id}", response_model=DeleteUserResponse)
@inject
async def delete_user(
    user_id: int,
    directory: FromDishka[UserDirectory],
    auth_gate: FromDishka[AuthGate],
    current_user: AuthIdentity = Depends(get_current_user),
):
    """
    Delete a user.

    Chat history involving the user stops being listed; the messages
    themselves stay readable by id. The user's sessions are closed.
    """
    user = await directory.remove(user_id)
    closed = await auth_gate.close_all_sessions(Username(user.username))
    logger.info(f"[Admin] {current_user.username} deleted user {user.username}")
    return DeleteUserResponse(success=True, user=user, sessions_closed=closed)
