"""Database infrastructure helpers (engine, sessions, migrations)."""

from .base import Base
from .session import dispose_engine, get_engine, get_session, init_db, reset_db

__all__ = ["Base", "dispose_engine", "get_engine", "get_session", "init_db", "reset_db"]
