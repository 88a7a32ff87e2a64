"""Repository protocol for customers."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from .models import Customer


class CustomerRepository(Protocol):
    """Abstract repository interface for customer persistence."""

    async def get_by_id(self, customer_id: str) -> Customer | None:
        ...

    async def get_by_token(self, token: str) -> Customer | None:
        ...

    async def list_customers(self) -> Sequence[Customer]:
        ...

    async def create_customer(self, *, customer_id: str | None, name: str, plan_type: str) -> Customer:
        ...

    async def add_token(self, customer_id: str, token: str) -> None:
        ...

    async def fetch_table(self, table: str) -> list[dict[str, Any]]:
        ...
