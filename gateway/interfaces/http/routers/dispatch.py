"""Public endpoint forwarding requests to a tenant script by name."""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import Response

from gateway.interfaces.http.deps import get_script_service
from gateway.modules.scripts import DispatchError, ForwardedRequest, ScriptRegistryService

router = APIRouter()

# httpx has already decoded and de-chunked the body.
_STRIPPED_RESPONSE_HEADERS = {"connection", "content-encoding", "content-length", "transfer-encoding"}


@router.get("/{name}", summary="Invoke a script by name")
async def dispatch_script(
    name: str,
    request: Request,
    service: ScriptRegistryService = Depends(get_script_service),
) -> Response:
    forwarded = ForwardedRequest(
        method=request.method,
        path=request.url.path,
        query=request.url.query,
        headers=list(request.headers.items()),
        body=await request.body(),
    )
    try:
        upstream = await service.dispatch(name, forwarded)
    except DispatchError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Script not found or failed to dispatch",
        ) from exc

    response = Response(content=upstream.content, status_code=upstream.status_code)
    for key, value in upstream.headers.multi_items():
        if key.lower() not in _STRIPPED_RESPONSE_HEADERS:
            response.headers.append(key, value)
    return response
