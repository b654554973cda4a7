"""
Database models package.

WHY: Importing every model here registers it on Base.metadata, so
create_all() at startup and in tests sees all tables.
"""

from petowners.models.base import Base
from petowners.models.owner import Owner
from petowners.models.pet import Pet, PetHealth

__all__ = [
    "Base",
    "Owner",
    "Pet",
    "PetHealth",
]
