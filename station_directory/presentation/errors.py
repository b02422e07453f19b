"""Maps DomainError kinds to HTTP responses."""

from fastapi import status
from fastapi.responses import JSONResponse

from station_directory.domain.exceptions import DomainError

STATUS_BY_KIND = {
    "Unauthorized": status.HTTP_401_UNAUTHORIZED,
    "ValidationError": status.HTTP_400_BAD_REQUEST,
    "UsernameTaken": status.HTTP_409_CONFLICT,
    "InvalidCredentials": status.HTTP_401_UNAUTHORIZED,
    "NotFound": status.HTTP_404_NOT_FOUND,
    "ConflictOrRace": status.HTTP_409_CONFLICT,
    "StorageUnavailable": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(exc: DomainError) -> int:
    return STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_body(kind: str, message: str, **extra) -> dict:
    return {"error": {"kind": kind, "message": message, **extra}}


def domain_error_response(exc: DomainError) -> JSONResponse:
    return JSONResponse(status_code=status_for(exc), content={"error": exc.to_dict()})
