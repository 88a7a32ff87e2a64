"""Multi-tenant script registry and dispatch gateway."""

__version__ = "0.1.0"
