"""Script registry dependency providers."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.infrastructure.namespace import DispatchNamespaceClient
from gateway.modules.scripts import ScriptRegistryService

from .database import get_db_session


def get_namespace_client(request: Request) -> DispatchNamespaceClient:
    return request.app.state.namespace


def get_script_service(
    db: AsyncSession = Depends(get_db_session),
    namespace: DispatchNamespaceClient = Depends(get_namespace_client),
) -> ScriptRegistryService:
    return ScriptRegistryService.with_session(db, namespace)


__all__ = [
    "get_namespace_client",
    "get_script_service",
]
