"""
DTOs - Data Transfer Objects

DTOs for transferring data between layers:
- user.py → UserView, DirectoryStats
- chat.py → MessageDTO

Note: These are different from domain entities.
DTOs are for API output, entities are for business logic. No DTO
carries a password hash.
"""

from station_directory.application.dto.user import UserView, DirectoryStats
from station_directory.application.dto.chat import MessageDTO

__all__ = [
    "UserView",
    "DirectoryStats",
    "MessageDTO",
]
