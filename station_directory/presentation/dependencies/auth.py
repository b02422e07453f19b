"""
Authentication Dependency for FastAPI.

- Reads the session token from the session cookie or an
  ``Authorization: Bearer`` header (header wins)
- Resolves it through AuthGate; failures surface as UnauthorizedError
  and are turned into 401 by the app's DomainError handler
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from station_directory.application.services.auth_gate import AuthGate
from station_directory.config.settings import Config
from station_directory.domain.value_objects.auth_identity import AuthIdentity

# auto_error=False: a missing header falls back to the cookie
security = HTTPBearer(auto_error=False)


def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(Config.SESSION_COOKIE_NAME)


async def get_auth_gate(request: Request) -> AuthGate:
    # AuthGate is app-scoped, so the root container can build it
    return await request.app.state.dishka_container.get(AuthGate)


async def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    auth_gate: AuthGate = Depends(get_auth_gate),
) -> AuthIdentity:
    """
    Resolve the acting user for a protected route.

    Raises:
        UnauthorizedError: Missing, unknown or expired session
    """
    return await auth_gate.resolve(token)
