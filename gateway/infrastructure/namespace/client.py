"""HTTP client for the execution platform's dispatch namespace API.

The namespace stores every tenant's script under a globally unique name and
keeps a tag set per script. Script bodies and tags are managed through the
platform's REST API; invocation goes through the platform's dispatch endpoint.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

import httpx

from gateway.core.config import NamespaceSettings
from gateway.modules.scripts.models import DispatchLimits, ForwardedRequest, OutboundWorker

from .exceptions import DispatchError, NamespaceError

logger = logging.getLogger(__name__)

MAIN_MODULE = "worker.js"
LIMITS_HEADER = "X-Dispatch-Limits"
# Set by the platform's dispatcher when the target script is absent or raised.
DISPATCH_ERROR_HEADER = "X-Dispatch-Error"

_HOP_BY_HOP_HEADERS = {
    "connection",
    "content-length",
    "host",
    "keep-alive",
    "transfer-encoding",
    "upgrade",
}


@dataclass(slots=True)
class ScriptHandle:
    """Lazy reference to a script in the namespace.

    Creating a handle never touches the network. Whether the script exists is
    only known once :meth:`fetch` is awaited.
    """

    name: str
    url: str
    http: httpx.AsyncClient = field(repr=False)
    limits: DispatchLimits | None = None
    outbound: OutboundWorker | None = None

    async def fetch(self, request: ForwardedRequest) -> httpx.Response:
        headers = [(key, value) for key, value in request.headers if key.lower() not in _HOP_BY_HOP_HEADERS]
        if self.limits is not None:
            headers.append((LIMITS_HEADER, json.dumps(self.limits.as_platform_limits())))

        try:
            response = await self.http.request(
                request.method,
                self.url + request.path,
                params=request.query or None,
                headers=headers,
                content=request.body or None,
            )
        except httpx.HTTPError as exc:
            raise DispatchError(self.name, f"transport failure: {exc}") from exc

        reason = response.headers.get(DISPATCH_ERROR_HEADER)
        if reason:
            raise DispatchError(self.name, reason)
        if response.status_code == 404:
            raise DispatchError(self.name, "not found")
        return response


class DispatchNamespaceClient:
    """Manages script bodies and tags in one dispatch namespace."""

    def __init__(
        self,
        *,
        api_base_url: str,
        account_id: str,
        api_token: str,
        namespace: str,
        dispatch_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.namespace = namespace
        self._dispatch_url = dispatch_url
        self._scripts_path = f"/accounts/{account_id}/workers/dispatch/namespaces/{namespace}/scripts"
        self._api = httpx.AsyncClient(
            base_url=api_base_url,
            headers={"Authorization": f"Bearer {api_token}"},
            timeout=timeout,
            transport=transport,
        )
        self._dispatcher = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls,
        settings: NamespaceSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "DispatchNamespaceClient":
        return cls(
            api_base_url=settings.api_base_url,
            account_id=settings.account_id,
            api_token=settings.api_token,
            namespace=settings.name,
            dispatch_url=settings.dispatch_url,
            timeout=settings.timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._api.aclose()
        await self._dispatcher.aclose()

    async def list_scripts(self) -> list[dict[str, Any]]:
        response = await self._request("GET", self._scripts_path)
        return self._result(response) or []

    async def list_scripts_by_tags(self, filters: Iterable[tuple[str, bool]]) -> list[dict[str, Any]]:
        """List scripts matching every ``(tag, allow)`` filter."""
        tags = ",".join(f"{tag}:{'yes' if allow else 'no'}" for tag, allow in filters)
        response = await self._request("GET", self._scripts_path, params={"tags": tags})
        return self._result(response) or []

    async def get_tags(self, name: str) -> list[str]:
        response = await self._request("GET", f"{self._scripts_path}/{name}/tags")
        if response.status_code == 404:
            return []
        return list(self._result(response) or [])

    async def add_tag(self, name: str, tag: str) -> httpx.Response:
        """Add one tag to a script, leaving its other tags in place."""
        return await self._request("PUT", f"{self._scripts_path}/{name}/tags/{tag}")

    async def put_script(self, name: str, content: str) -> httpx.Response:
        """Create or replace a script. The raw response is returned so callers can relay rejections."""
        metadata = {"main_module": MAIN_MODULE}
        return await self._request(
            "PUT",
            f"{self._scripts_path}/{name}",
            data={"metadata": json.dumps(metadata)},
            files={MAIN_MODULE: (MAIN_MODULE, content.encode("utf-8"), "application/javascript+module")},
        )

    async def delete_script(self, name: str) -> None:
        response = await self._request("DELETE", f"{self._scripts_path}/{name}", params={"force": "true"})
        if response.status_code != 404:
            self._result(response)

    def get(
        self,
        name: str,
        limits: DispatchLimits | None = None,
        outbound: OutboundWorker | None = None,
    ) -> ScriptHandle:
        return ScriptHandle(
            name=name,
            url=self._dispatch_url.format(script=name).rstrip("/"),
            http=self._dispatcher,
            limits=limits,
            outbound=outbound,
        )

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._api.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Namespace API %s %s failed: %s", method, url, exc)
            raise NamespaceError(f"{method} {url} failed: {exc}") from exc

    @staticmethod
    def _result(response: httpx.Response) -> Any:
        try:
            payload = response.json()
        except ValueError as exc:
            raise NamespaceError("Namespace API returned invalid JSON", response.status_code) from exc

        if not isinstance(payload, dict):
            raise NamespaceError("Namespace API returned an unexpected payload", response.status_code)
        if not response.is_success or not payload.get("success", False):
            errors = payload.get("errors")
            logger.error("Namespace API %s returned %s: %s", response.url, response.status_code, errors)
            raise NamespaceError(f"Namespace API error: {errors}", response.status_code)
        return payload.get("result")
