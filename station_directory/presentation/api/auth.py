"""
Auth API Router - Signup, login, logout and session check.

The session token is returned in the body (for Bearer clients) and set as
an HTTP-only cookie (for browsers). Max-Age follows the idle timeout; the
server-side expiry is what actually counts.
"""

from logging import getLogger
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from dishka.integrations.fastapi import FromDishka, inject
from pydantic import BaseModel, Field, field_validator

from station_directory.application.dto.user import UserView
from station_directory.application.services.auth_gate import AuthGate
from station_directory.application.services.user_directory import UserDirectory
from station_directory.config.settings import Config
from station_directory.domain.exceptions import UnauthorizedError
from station_directory.domain.value_objects.auth_identity import AuthIdentity
from station_directory.domain.value_objects.username import Username
from station_directory.presentation.dependencies.auth import get_session_token

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class SignupRequest(BaseModel):
    """
    Request body for creating an account.

    ``station_ids`` takes a list or a comma-separated string
    ("A1, B2" → ["A1", "B2"]).
    """

    username: str = ""
    phone: str = ""
    password: str = ""
    password2: str = ""
    station_ids: list[str] = Field(default_factory=list)

    @field_validator("station_ids", mode="before")
    @classmethod
    def split_station_ids(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class SessionResponse(BaseModel):
    """Response for signup/login."""

    success: bool = True
    token: str
    user: UserView


class LogoutResponse(BaseModel):
    success: bool


class SessionStatusResponse(BaseModel):
    logged_in: bool
    username: Optional[str] = None


# ==================== COOKIE HELPERS ====================


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=Config.SESSION_COOKIE_NAME,
        value=token,
        max_age=Config.SESSION_IDLE_TIMEOUT,
        httponly=True,
        secure=Config.SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=Config.SESSION_COOKIE_NAME, path="/")


# ==================== ROUTER ====================

router = APIRouter(tags=["auth"])


# ==================== ENDPOINTS ====================


@router.post(
    "/signup",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def signup(
    request: SignupRequest,
    response: Response,
    directory: FromDishka[UserDirectory],
    auth_gate: FromDishka[AuthGate],
):
    """Create an account and log it in."""
    user = await directory.register(
        username=request.username,
        phone=request.phone,
        password=request.password,
        password_confirmation=request.password2,
        station_ids=request.station_ids,
    )
    identity = await auth_gate.open_session(
        AuthIdentity(username=Username(user.username))
    )
    set_session_cookie(response, identity.session_token)
    return SessionResponse(token=identity.session_token, user=user)


@router.post("/login", response_model=SessionResponse)
@inject
async def login(
    request: LoginRequest,
    response: Response,
    directory: FromDishka[UserDirectory],
    auth_gate: FromDishka[AuthGate],
):
    """
    Authenticate with username and password.

    Unknown user and wrong password give the same 401 body.
    """
    identity = await directory.authenticate(request.username, request.password)
    identity = await auth_gate.open_session(identity)
    user = await directory.profile(identity)
    set_session_cookie(response, identity.session_token)
    return SessionResponse(token=identity.session_token, user=user)


@router.post("/logout", response_model=LogoutResponse)
@inject
async def logout(
    response: Response,
    auth_gate: FromDishka[AuthGate],
    token: Optional[str] = Depends(get_session_token),
):
    """Destroy the caller's session, if any, and clear the cookie."""
    closed = await auth_gate.close_session(token)
    clear_session_cookie(response)
    return LogoutResponse(success=closed)


@router.get("/session", response_model=SessionStatusResponse)
@inject
async def session_status(
    response: Response,
    auth_gate: FromDishka[AuthGate],
    token: Optional[str] = Depends(get_session_token),
):
    """Report whether the caller holds a live session."""
    if not token:
        return SessionStatusResponse(logged_in=False)
    try:
        identity = await auth_gate.resolve(token)
    except UnauthorizedError:
        clear_session_cookie(response)
        return SessionStatusResponse(logged_in=False)
    return SessionStatusResponse(logged_in=True, username=identity.username.value)
