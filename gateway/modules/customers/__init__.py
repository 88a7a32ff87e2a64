"""Customer domain services and models."""

from .models import SEED_CUSTOMERS, Customer, CustomerCreateInput
from .service import CustomerService
from .exceptions import (
    CustomerError,
    CustomerAlreadyExistsError,
    CustomerNotFoundError,
)

__all__ = [
    "Customer",
    "CustomerCreateInput",
    "CustomerService",
    "CustomerError",
    "CustomerAlreadyExistsError",
    "CustomerNotFoundError",
    "SEED_CUSTOMERS",
]
