"""Errors shared by every domain module."""


class StoreUnavailableError(Exception):
    """Raised when the metadata store cannot be read or written."""
