"""Script registry and dispatch workflow.

Ownership of a script name is never stored in the metadata store. It is
derived from the tag set the namespace keeps for the script: an untagged
script is unclaimed, and a script tagged with a customer id belongs to that
customer.

The ownership check and the tagging that follows a successful upload are
separate round trips with no lock around them. Two customers uploading the
same unclaimed name at the same time can both pass the check and both end up
tagged as owners.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.infrastructure.namespace.exceptions import DispatchError, NamespaceError
from gateway.modules.common.exceptions import StoreUnavailableError
from gateway.modules.customers.models import Customer
from gateway.schemas import UPLOAD_BODY_SHAPE, ScriptUploadRequest

from .exceptions import (
    InvalidScriptNameError,
    OwnershipLookupError,
    ScriptBodyError,
    ScriptNameReservedError,
    UpstreamRejectedError,
)
from .models import DispatchLimits, ForwardedRequest, ScriptUpload, is_valid_script_name
from .repository import DispatchConfigRepository

if TYPE_CHECKING:
    from gateway.infrastructure.namespace.client import DispatchNamespaceClient, ScriptHandle

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScriptRegistryService:
    namespace: "DispatchNamespaceClient"
    repository: DispatchConfigRepository

    @classmethod
    def with_session(cls, session: AsyncSession, namespace: "DispatchNamespaceClient") -> "ScriptRegistryService":
        # Repositories import the domain models, so they are resolved lazily.
        from gateway.infrastructure.database.repositories.dispatch_repository import SqlDispatchConfigRepository

        return cls(namespace, SqlDispatchConfigRepository(session))

    async def upload_script(self, customer: Customer, name: str, raw_body: bytes) -> None:
        if not is_valid_script_name(name):
            raise InvalidScriptNameError(name)

        await self.ensure_claimable(customer, name)
        upload = self.parse_upload(name, raw_body)

        response = await self.namespace.put_script(name, upload.content)
        if not response.is_success:
            raise UpstreamRejectedError(response.status_code, _response_payload(response))

        if upload.limits.is_set():
            await self.repository.add_dispatch_limits(upload.limits)

        await self._tag_script(customer, name)

    async def ensure_claimable(self, customer: Customer, name: str) -> None:
        """Allow unclaimed names and names already tagged with ``customer``."""
        try:
            tags = await self.namespace.get_tags(name)
        except NamespaceError as exc:
            raise OwnershipLookupError(name) from exc

        if tags and customer.id not in tags:
            raise ScriptNameReservedError(name)

    @staticmethod
    def parse_upload(name: str, raw_body: bytes) -> ScriptUpload:
        try:
            payload = ScriptUploadRequest.model_validate_json(raw_body or b"")
        except ValidationError as exc:
            raise ScriptBodyError(f"Expected json: {UPLOAD_BODY_SHAPE}") from exc

        limits = payload.dispatch_config.limits
        return ScriptUpload(
            name=name,
            content=payload.script,
            limits=DispatchLimits(
                script_id=name,
                cpu_ms=limits.cpu_ms if limits else None,
                memory=limits.memory if limits else None,
            ),
        )

    async def list_customer_scripts(self, customer: Customer) -> list[str]:
        scripts = await self.namespace.list_scripts_by_tags([(customer.id, True)])
        return [script["id"] for script in scripts]

    async def resolve(self, name: str) -> "ScriptHandle":
        """Build a lazy handle; missing configuration rows mean platform defaults."""
        limits = await self.repository.get_dispatch_limits(name)
        outbound = await self.repository.get_outbound_worker(name)
        return self.namespace.get(name, limits=limits, outbound=outbound)

    async def dispatch(self, name: str, request: ForwardedRequest) -> httpx.Response:
        try:
            if not is_valid_script_name(name):
                raise DispatchError(name, "invalid script name")
            try:
                handle = await self.resolve(name)
            except StoreUnavailableError as exc:
                raise DispatchError(name, "dispatch configuration unavailable") from exc
            return await handle.fetch(request)
        except DispatchError as exc:
            logger.warning("Dispatch to %s failed: %s", name, exc.reason)
            raise

    async def _tag_script(self, customer: Customer, name: str) -> None:
        # Tagging failures leave the uploaded script in place.
        for tag in (customer.id, customer.plan_type):
            try:
                response = await self.namespace.add_tag(name, tag)
            except NamespaceError as exc:
                logger.error("Tagging script %s with %s failed: %s", name, tag, exc)
                continue
            if not response.is_success:
                logger.error(
                    "Tagging script %s failed: %s %s %s",
                    name,
                    response.url,
                    response.status_code,
                    response.text,
                )


def _response_payload(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return {"success": False, "errors": [{"message": response.text}]}
