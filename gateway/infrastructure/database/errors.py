"""Translation of driver level failures into domain errors."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from gateway.modules.common.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Re-raise any SQLAlchemy failure inside the block as StoreUnavailableError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Metadata store failure while %s: %s", action, exc)
        raise StoreUnavailableError(action) from exc
