"""Domain models for uploaded scripts and their dispatch configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Optional

SCRIPT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,63}$")


def is_valid_script_name(name: str) -> bool:
    return bool(SCRIPT_NAME_PATTERN.fullmatch(name))


@dataclass(slots=True, frozen=True)
class DispatchLimits:
    script_id: str
    cpu_ms: Optional[int] = None
    memory: Optional[int] = None

    def is_set(self) -> bool:
        """A zero or missing pair means platform defaults and is never stored."""
        return bool(self.cpu_ms or self.memory)

    def as_platform_limits(self) -> dict[str, Any]:
        limits: dict[str, Any] = {}
        if self.cpu_ms is not None:
            limits["cpuMs"] = self.cpu_ms
        if self.memory is not None:
            limits["memory"] = self.memory
        return limits


@dataclass(slots=True, frozen=True)
class OutboundWorker:
    script_id: str
    outbound_script_id: str


@dataclass(slots=True, frozen=True)
class ScriptUpload:
    name: str
    content: str
    limits: DispatchLimits


@dataclass(slots=True, frozen=True)
class ForwardedRequest:
    """The parts of an inbound request that are replayed against a script."""

    method: str
    path: str
    query: str = ""
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""
