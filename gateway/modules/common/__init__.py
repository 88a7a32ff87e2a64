"""Shared abstractions used across domain modules."""

from .exceptions import StoreUnavailableError

__all__ = ["StoreUnavailableError"]
