"""User entity module.

This module contains all User-related classes organized by responsibility:
- User: Domain entity with the derived age
- UserTable: Database persistence model for the ``Users`` table
- UserRepository: Data access layer
"""

from .entity import User, age_on
from .repository import UserRepository
from .table import UserTable

__all__ = ["User", "UserTable", "UserRepository", "age_on"]
