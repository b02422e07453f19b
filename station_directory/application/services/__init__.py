from station_directory.application.services.auth_gate import AuthGate
from station_directory.application.services.message_store import MessageStore
from station_directory.application.services.user_directory import UserDirectory

__all__ = ["AuthGate", "MessageStore", "UserDirectory"]
