"""User DTOs for API responses."""

from datetime import datetime
from pydantic import BaseModel, Field

from station_directory.domain.entities.user import User


class UserView(BaseModel):
    """Safe projection of a user: everything except the password hash."""

    id: int
    username: str
    phone: str
    station_ids: list[str] = Field(default_factory=list)
    station_titles: dict[str, str] = Field(default_factory=dict)
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserView":
        return cls(
            id=user.id.value,
            username=user.username.value,
            phone=user.phone,
            station_ids=list(user.station_ids),
            station_titles=dict(user.station_titles),
            created_at=user.created_at,
        )


class DirectoryStats(BaseModel):
    user_count: int
    users_with_stations: int
    station_assignments: int
    distinct_stations: int
