"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


class Config:
    APP_NAME = os.getenv("APP_NAME", "Station Directory API")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH", "") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s [%(levelname)s] [%(correlation_id)s] %(name)s: %(message)s",
    )

    # Storage backend: "file" (whole-file JSON) or "redis" (key/value)
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "file").lower()

    # File backend
    DATA_DIR: str = os.getenv("DATA_DIR", "data")
    USERS_FILE: str = os.getenv("USERS_FILE", "users.json")
    MESSAGES_FILE: str = os.getenv("MESSAGES_FILE", "messages.json")
    # Refuse a write when another process changed the file since it was read.
    # Turning this off brings back plain last-writer-wins.
    FILE_CONFLICT_CHECK: bool = _env_flag("FILE_CONFLICT_CHECK", "true")

    # Redis backend
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    REDIS_KEY_PREFIX: str = os.getenv("REDIS_KEY_PREFIX", "stationdir:")

    # Sessions
    SESSION_IDLE_TIMEOUT: int = int(os.getenv("SESSION_IDLE_TIMEOUT", str(24 * 60 * 60)))
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "session")
    SESSION_COOKIE_SECURE: bool = _env_flag("SESSION_COOKIE_SECURE", "false")
    # Origins allowed to send the session cookie cross-site (comma separated)
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
        if origin.strip()
    ]

    # Passwords
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Chat
    MESSAGE_MAX_LENGTH: int = int(os.getenv("MESSAGE_MAX_LENGTH", "2000"))

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))

