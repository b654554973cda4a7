"""Database package"""

from petowners.db.session import (
    AsyncSessionLocal,
    build_engine,
    build_session_factory,
    engine,
    init_db,
)
from petowners.models.base import Base

__all__ = [
    "Base",
    "AsyncSessionLocal",
    "build_engine",
    "build_session_factory",
    "engine",
    "init_db",
]
