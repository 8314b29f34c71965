"""Core services exports."""

from .database import DbManageService, DbSessionService
from .user import UserGenerator, UserStore

__all__ = [
    "DbManageService",
    "DbSessionService",
    "UserGenerator",
    "UserStore",
]
