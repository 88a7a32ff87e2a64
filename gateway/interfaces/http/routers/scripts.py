"""Customer endpoints for uploading and listing scripts."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.core.security import get_current_customer
from gateway.interfaces.http.deps import get_db_session, get_script_service
from gateway.modules.customers import Customer
from gateway.modules.scripts import (
    InvalidScriptNameError,
    OwnershipLookupError,
    ScriptBodyError,
    ScriptNameReservedError,
    ScriptRegistryService,
    UpstreamRejectedError,
)
from gateway.schemas import MessageResponse

router = APIRouter()


@router.get("", response_model=list[str], summary="List scripts owned by the current customer")
async def list_scripts(
    customer: Customer = Depends(get_current_customer),
    service: ScriptRegistryService = Depends(get_script_service),
) -> list[str]:
    return await service.list_customer_scripts(customer)


@router.put(
    "/{name}",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload or replace a script",
)
async def upload_script(
    request: Request,
    name: str = Path(..., description="Script name, unique across the dispatch namespace"),
    customer: Customer = Depends(get_current_customer),
    service: ScriptRegistryService = Depends(get_script_service),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        await service.upload_script(customer, name, await request.body())
    except InvalidScriptNameError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Script name must be 1-63 letters, digits, '-' or '_'",
        ) from exc
    except OwnershipLookupError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not complete request",
        ) from exc
    except ScriptNameReservedError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Script name already reserved") from exc
    except ScriptBodyError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except UpstreamRejectedError as exc:
        return JSONResponse(exc.payload, status_code=status.HTTP_400_BAD_REQUEST)

    await db.commit()
    return MessageResponse(message="Success")
