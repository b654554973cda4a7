"""
Data Access Object (DAO) package.

WHY: DAOs provide a clean separation between database operations and business logic,
making the codebase more testable and maintainable.
"""

from petowners.dao.base import BaseDAO
from petowners.dao.owner import OwnerDAO
from petowners.dao.pet import PetDAO

__all__ = [
    "BaseDAO",
    "OwnerDAO",
    "PetDAO",
]
