"""SQLAlchemy implementation of the dispatch configuration repository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.db.models import DispatchLimits as DispatchLimitsModel
from gateway.db.models import OutboundWorker as OutboundWorkerModel
from gateway.infrastructure.database.errors import store_errors
from gateway.modules.scripts.models import DispatchLimits, OutboundWorker


class SqlDispatchConfigRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add_dispatch_limits(self, limits: DispatchLimits) -> None:
        model = DispatchLimitsModel(
            script_id=limits.script_id,
            cpu_ms=limits.cpu_ms,
            memory=limits.memory,
        )
        with store_errors("saving dispatch limits"):
            await self.session.merge(model)
            await self.session.flush()

    async def get_dispatch_limits(self, script_id: str) -> DispatchLimits | None:
        stmt = select(DispatchLimitsModel).where(DispatchLimitsModel.script_id == script_id)
        with store_errors("loading dispatch limits"):
            result = await self.session.execute(stmt)
            model = result.scalar_one_or_none()
        if model is None:
            return None
        return DispatchLimits(script_id=model.script_id, cpu_ms=model.cpu_ms, memory=model.memory)

    async def add_outbound_worker(self, worker: OutboundWorker) -> None:
        model = OutboundWorkerModel(
            script_id=worker.script_id,
            outbound_script_id=worker.outbound_script_id,
        )
        with store_errors("saving outbound worker"):
            await self.session.merge(model)
            await self.session.flush()

    async def get_outbound_worker(self, script_id: str) -> OutboundWorker | None:
        stmt = select(OutboundWorkerModel).where(OutboundWorkerModel.script_id == script_id)
        with store_errors("loading outbound worker"):
            result = await self.session.execute(stmt)
            model = result.scalar_one_or_none()
        if model is None:
            return None
        return OutboundWorker(script_id=model.script_id, outbound_script_id=model.outbound_script_id)
