"""Client for the execution platform's dispatch namespace."""

from .client import DispatchNamespaceClient, ScriptHandle
from .exceptions import DispatchError, NamespaceError

__all__ = ["DispatchNamespaceClient", "ScriptHandle", "DispatchError", "NamespaceError"]
