"""
ConcurrentModificationError - Storage changed between read and write.

Raised by the file backend instead of silently discarding another
writer's update.
Maps to: HTTP 409 Conflict
"""

from station_directory.domain.exceptions.base import DomainError


class ConcurrentModificationError(DomainError):
    kind = "ConflictOrRace"
    default_message = "Data was modified concurrently, retry the operation"
