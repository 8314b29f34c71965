"""User generation and persistence services."""

from .user_generator import GenerationReport, UserGenerator, UserRejected
from .user_store import SaveOutcome, SaveReport, SaveResult, UserStore

__all__ = [
    "GenerationReport",
    "SaveOutcome",
    "SaveReport",
    "SaveResult",
    "UserGenerator",
    "UserRejected",
    "UserStore",
]
