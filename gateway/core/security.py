"""Bearer token authentication for customer endpoints."""
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.interfaces.http.deps import get_db_session
from gateway.modules.common import StoreUnavailableError
from gateway.modules.customers import Customer, CustomerService

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_customer(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db_session),
) -> Customer:
    if credentials is None:
        raise _unauthorized()

    service = CustomerService.with_session(db)
    try:
        customer = await service.authenticate(credentials.credentials)
    except StoreUnavailableError as exc:
        logger.error("Customer lookup failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not complete request",
        ) from exc

    if customer is None:
        raise _unauthorized()
    return customer
