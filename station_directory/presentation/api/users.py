"""Users API Router - The acting user's profile and the other users."""

from fastapi import APIRouter, Depends
from dishka.integrations.fastapi import FromDishka, inject

from station_directory.application.dto.user import UserView
from station_directory.application.services.user_directory import UserDirectory
from station_directory.domain.value_objects.auth_identity import AuthIdentity
from station_directory.presentation.dependencies.auth import get_current_user

router = APIRouter(tags=["users"])


@router.get("/me", response_model=UserView)
@inject
async def me(
    directory: FromDishka[UserDirectory],
    current_user: AuthIdentity = Depends(get_current_user),
):
    return await directory.profile(current_user)


@router.get("/users", response_model=list[UserView])
@inject
async def list_other_users(
    directory: FromDishka[UserDirectory],
    current_user: AuthIdentity = Depends(get_current_user),
):
    """Every user except the caller, ordered by username."""
    return await directory.others(current_user)
