"""
API Routers - FastAPI endpoints

Each router handles one area:
- auth.py  → /signup, /login, /logout, /session
- users.py → /me, /users
- chat.py  → /chat/*
- admin.py → /admin/*
"""

from station_directory.presentation.api.auth import router as auth_router
from station_directory.presentation.api.users import router as users_router
from station_directory.presentation.api.chat import router as chat_router
from station_directory.presentation.api.admin import router as admin_router

__all__ = [
    "auth_router",
    "users_router",
    "chat_router",
    "admin_router",
]
