"""Debug pages: state dump and reset of the store and the dispatch namespace."""
import asyncio
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from gateway.infrastructure.database import reset_db
from gateway.infrastructure.database.session import get_session_factory
from gateway.infrastructure.namespace import DispatchNamespaceClient, NamespaceError
from gateway.interfaces.http.deps import get_namespace_client
from gateway.modules.common import StoreUnavailableError
from gateway.modules.customers import CustomerService

logger = logging.getLogger(__name__)

router = APIRouter()

DUMPED_TABLES = ("customers", "customer_tokens")


@router.get("/", response_class=HTMLResponse, summary="Dump store tables and namespace scripts")
async def dump_state(
    request: Request,
    namespace: DispatchNamespaceClient = Depends(get_namespace_client),
):
    tables: list[tuple[str, list[dict]]] | None = []
    async with get_session_factory()() as session:
        service = CustomerService.with_session(session)
        try:
            for table in DUMPED_TABLES:
                tables.append((table, await service.fetch_table(table)))
        except StoreUnavailableError:
            tables = None

    try:
        scripts = await namespace.list_scripts()
    except NamespaceError as exc:
        logger.warning("Listing dispatch namespace %s failed: %s", namespace.namespace, exc)
        scripts = None

    return request.app.state.templates.TemplateResponse(
        request,
        "index.html",
        {
            "tables": tables,
            "scripts": scripts,
            "namespace": namespace.namespace,
        },
    )


@router.get("/init", summary="Reset the store to seed data and empty the namespace")
async def initialize(
    request: Request,
    namespace: DispatchNamespaceClient = Depends(get_namespace_client),
):
    scripts = await namespace.list_scripts()
    await asyncio.gather(*(namespace.delete_script(script["id"]) for script in scripts))

    await reset_db()
    async with get_session_factory()() as session:
        await CustomerService.with_session(session).seed()
        await session.commit()

    logger.info("Reset store and removed %d scripts from %s", len(scripts), namespace.namespace)
    return RedirectResponse(url=str(request.url_for("dump_state")), status_code=status.HTTP_302_FOUND)
