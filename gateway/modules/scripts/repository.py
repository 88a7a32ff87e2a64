"""Repository protocol for per-script dispatch configuration."""

from __future__ import annotations

from typing import Protocol

from .models import DispatchLimits, OutboundWorker


class DispatchConfigRepository(Protocol):
    async def add_dispatch_limits(self, limits: DispatchLimits) -> None:
        ...

    async def get_dispatch_limits(self, script_id: str) -> DispatchLimits | None:
        ...

    async def add_outbound_worker(self, worker: OutboundWorker) -> None:
        ...

    async def get_outbound_worker(self, script_id: str) -> OutboundWorker | None:
        ...
