"""Domain services for customer lookup and provisioning."""

from __future__ import annotations

import secrets
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from .exceptions import CustomerAlreadyExistsError, CustomerNotFoundError
from .models import SEED_CUSTOMERS, Customer, CustomerCreateInput
from .repository import CustomerRepository


class CustomerService:
    """Encapsulates customer use cases."""

    def __init__(self, repository: CustomerRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "CustomerService":
        from gateway.infrastructure.database.repositories.customer_repository import SqlCustomerRepository

        return cls(SqlCustomerRepository(session))

    async def authenticate(self, token: str) -> Customer | None:
        """Resolve an API token to its customer.

        Returns ``None`` when no customer owns the token. Store failures are
        raised as :class:`StoreUnavailableError` so callers can tell the two apart.
        """
        if not token:
            return None
        return await self._repository.get_by_token(token)

    async def get_by_id(self, customer_id: str) -> Customer | None:
        return await self._repository.get_by_id(customer_id)

    async def list_customers(self) -> Sequence[Customer]:
        return await self._repository.list_customers()

    async def create_customer(self, payload: CustomerCreateInput) -> tuple[Customer, str]:
        if payload.id is not None:
            existing = await self._repository.get_by_id(payload.id)
            if existing is not None:
                raise CustomerAlreadyExistsError(f"Customer already exists: {payload.id}")

        customer = await self._repository.create_customer(
            customer_id=payload.id,
            name=payload.name,
            plan_type=payload.plan_type,
        )
        token = payload.token or secrets.token_urlsafe(24)
        await self._repository.add_token(customer.id, token)
        return customer, token

    async def issue_token(self, customer_id: str) -> str:
        if await self._repository.get_by_id(customer_id) is None:
            raise CustomerNotFoundError(customer_id)
        token = secrets.token_urlsafe(24)
        await self._repository.add_token(customer_id, token)
        return token

    async def seed(self) -> None:
        for customer_id, name, plan_type, token in SEED_CUSTOMERS:
            await self._repository.create_customer(customer_id=customer_id, name=name, plan_type=plan_type)
            await self._repository.add_token(customer_id, token)

    async def fetch_table(self, table: str) -> list[dict[str, Any]]:
        return await self._repository.fetch_table(table)
