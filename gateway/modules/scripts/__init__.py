"""Script registry and dispatch workflow."""

from .models import DispatchLimits, ForwardedRequest, OutboundWorker, ScriptUpload, is_valid_script_name
from .exceptions import (
    DispatchError,
    InvalidScriptNameError,
    NamespaceError,
    OwnershipLookupError,
    ScriptBodyError,
    ScriptError,
    ScriptNameReservedError,
    UpstreamRejectedError,
)
from .service import ScriptRegistryService

__all__ = [
    "DispatchError",
    "DispatchLimits",
    "ForwardedRequest",
    "InvalidScriptNameError",
    "NamespaceError",
    "OutboundWorker",
    "OwnershipLookupError",
    "ScriptBodyError",
    "ScriptError",
    "ScriptNameReservedError",
    "ScriptRegistryService",
    "ScriptUpload",
    "UpstreamRejectedError",
    "is_valid_script_name",
]
