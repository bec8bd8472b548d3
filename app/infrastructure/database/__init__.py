"""Database infrastructure helpers (engine, sessions, migrations)."""

from .base import Base
from .session import atomic, get_engine, get_session, init_db

__all__ = ["Base", "atomic", "get_engine", "get_session", "init_db"]
