"""
User Entity - A registered account with its assigned stations.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional

from station_directory.domain.value_objects.user_id import UserId
from station_directory.domain.value_objects.username import Username


def normalize_station_ids(station_ids: Iterable[str]) -> list[str]:
    """Strip, drop blanks and de-duplicate while keeping the given order."""
    seen: list[str] = []
    for station_id in station_ids:
        station_id = str(station_id).strip()
        if station_id and station_id not in seen:
            seen.append(station_id)
    return seen


@dataclass
class User:
    # Required fields (no defaults) - must come first
    id: Optional[UserId]  # None until the backend assigns one
    username: Username
    phone: str
    password_hash: str
    created_at: datetime
    # Optional fields (with defaults) - must come last
    station_ids: list[str] = field(default_factory=list)
    station_titles: dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        username: Username,
        phone: str,
        password_hash: str,
        station_ids: Iterable[str] = (),
        station_titles: Optional[Mapping[str, str]] = None,
    ) -> User:
        """Factory for a not-yet-persisted user."""
        user = cls(
            id=None,
            username=username,
            phone=phone,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc),
        )
        user.assign_stations(station_ids, station_titles)
        return user

    def assign_stations(
        self,
        station_ids: Iterable[str],
        station_titles: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Replace station assignments; titles for unassigned stations are dropped."""
        self.station_ids = normalize_station_ids(station_ids)
        titles = self.station_titles if station_titles is None else station_titles
        self.station_titles = {
            station_id: str(title)
            for station_id, title in titles.items()
            if station_id in self.station_ids
        }

    def change_password_hash(self, password_hash: str) -> None:
        if not password_hash:
            raise ValueError("Password hash cannot be empty")
        self.password_hash = password_hash
