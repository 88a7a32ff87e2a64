"""Script registry specific exceptions."""

from __future__ import annotations

from typing import Any

from gateway.infrastructure.namespace.exceptions import DispatchError, NamespaceError


class ScriptError(Exception):
    """Base class for script registry errors."""


class InvalidScriptNameError(ScriptError):
    """Raised when a script name is not a valid namespace identifier."""


class ScriptBodyError(ScriptError):
    """Raised when an upload body is not the expected JSON document."""


class ScriptNameReservedError(ScriptError):
    """Raised when the script name is already tagged with another customer."""


class OwnershipLookupError(ScriptError):
    """Raised when the existing tags of a script cannot be read."""


class UpstreamRejectedError(ScriptError):
    """Raised when the execution platform refuses a script upload."""

    def __init__(self, status_code: int, payload: Any) -> None:
        super().__init__(f"platform rejected upload with status {status_code}")
        self.status_code = status_code
        self.payload = payload


__all__ = [
    "DispatchError",
    "InvalidScriptNameError",
    "NamespaceError",
    "OwnershipLookupError",
    "ScriptBodyError",
    "ScriptError",
    "ScriptNameReservedError",
    "UpstreamRejectedError",
]
