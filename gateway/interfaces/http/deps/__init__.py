"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .scripts import get_namespace_client, get_script_service

__all__ = [
    "get_db_session",
    "get_namespace_client",
    "get_script_service",
]
