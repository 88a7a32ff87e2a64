"""SQLAlchemy implementation of the customer repository."""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.db.models import Customer as CustomerModel
from gateway.db.models import CustomerToken as CustomerTokenModel
from gateway.infrastructure.database.base import Base
from gateway.infrastructure.database.errors import store_errors
from gateway.modules.customers.models import Customer

# Tables the debug page is allowed to dump.
VISIBLE_TABLES = ("customers", "customer_tokens", "dispatch_limits", "outbound_workers")


class SqlCustomerRepository:
    """Customer repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, customer_id: str) -> Customer | None:
        stmt = select(CustomerModel).where(CustomerModel.id == customer_id)
        with store_errors("loading customer"):
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        return self._to_domain(model)

    async def get_by_token(self, token: str) -> Customer | None:
        stmt = (
            select(CustomerModel)
            .join(CustomerTokenModel, CustomerTokenModel.customer_id == CustomerModel.id)
            .where(CustomerTokenModel.token == token)
        )
        with store_errors("resolving customer token"):
            result = await self._session.execute(stmt)
            model = result.scalars().first()
        return self._to_domain(model)

    async def list_customers(self) -> Sequence[Customer]:
        stmt = select(CustomerModel).order_by(CustomerModel.id)
        with store_errors("listing customers"):
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        return [self._to_domain(model) for model in models]

    async def create_customer(self, *, customer_id: str | None, name: str, plan_type: str) -> Customer:
        model = CustomerModel(name=name, plan_type=plan_type)
        if customer_id is not None:
            model.id = customer_id
        with store_errors("creating customer"):
            self._session.add(model)
            await self._session.flush()
            await self._session.refresh(model)
        return self._to_domain(model)

    async def add_token(self, customer_id: str, token: str) -> None:
        with store_errors("adding customer token"):
            self._session.add(CustomerTokenModel(customer_id=customer_id, token=token))
            await self._session.flush()

    async def fetch_table(self, table: str) -> list[dict[str, Any]]:
        if table not in VISIBLE_TABLES:
            raise ValueError(f"Table is not visible: {table}")
        stmt = select(Base.metadata.tables[table])
        with store_errors(f"fetching table {table}"):
            result = await self._session.execute(stmt)
            return [dict(row) for row in result.mappings().all()]

    @staticmethod
    def _to_domain(model: CustomerModel | None) -> Customer | None:
        if model is None:
            return None
        return Customer(
            id=str(model.id),
            name=model.name,
            plan_type=model.plan_type or "free",
            created_at=model.created_at,
        )
