"""Domain models for customers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True, frozen=True)
class Customer:
    id: str
    name: str
    plan_type: str
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class CustomerCreateInput:
    name: str
    plan_type: str = "free"
    id: Optional[str] = None
    token: Optional[str] = None


# Customers and tokens written by a store reset.
SEED_CUSTOMERS: tuple[tuple[str, str, str, str], ...] = (
    ("A", "Customer A", "free", "a-token"),
    ("B", "Customer B", "pro", "b-token"),
    ("C", "Customer C", "enterprise", "c-token"),
)
