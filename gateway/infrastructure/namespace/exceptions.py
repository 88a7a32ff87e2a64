"""Errors raised by the dispatch namespace client."""

from __future__ import annotations


class NamespaceError(Exception):
    """Raised when the namespace API cannot be reached or answers with a failure."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DispatchError(Exception):
    """Raised when a script cannot be invoked: missing, faulting or unreachable."""

    def __init__(self, script_name: str, reason: str = "dispatch failed") -> None:
        super().__init__(f"{script_name}: {reason}")
        self.script_name = script_name
        self.reason = reason
