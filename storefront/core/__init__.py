# Core modules

from .config import settings
from .session import SessionManager, UserSession

__all__ = ["settings", "SessionManager", "UserSession"]
