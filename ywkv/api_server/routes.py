"""
FastAPI router: GET /{key} reads, POST /{key} writes the raw request body.

Both routes depend on the bearer-token gate. The key is the single path
segment after "/", percent-unescaped to bytes from the raw request path, so
escapes that are not valid UTF-8 (e.g. /%FF vs /%FE) stay distinct keys.
Other methods get 405 from the router.
"""

from __future__ import annotations

from urllib.parse import unquote_to_bytes

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from ywkv.api_server.middleware import require_bearer_token
from ywkv.api_server.responses import KeyValueResponse, render_result
from ywkv.operations import KeyValueService

router = APIRouter(dependencies=[Depends(require_bearer_token)], tags=["kv"])

_RESPONSES = {
    404: {"model": KeyValueResponse, "description": "Key absent from an existing table"},
    500: {"model": KeyValueResponse, "description": "Storage failure; value holds the diagnostic"},
    401: {"description": "Missing or invalid bearer token"},
}


def get_service(request: Request) -> KeyValueService:
    """Dependency: app-scoped operation layer."""
    return request.app.state.kv_service


def key_bytes(request: Request, key: str) -> bytes:
    """
    Key as bytes from the last raw path segment.

    The decoded `key` parameter is lossy for non-UTF-8 escapes; it is only used
    when the server does not provide raw_path.
    """
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return key.encode("utf-8")
    segment = raw_path.split(b"?", 1)[0].rsplit(b"/", 1)[-1]
    return unquote_to_bytes(segment)


@router.get("/{key}", response_model=KeyValueResponse, responses=_RESPONSES)
def read_key(
    key: str,
    request: Request,
    service: KeyValueService = Depends(get_service),
) -> JSONResponse:
    """Return the value stored under key (Found), or Missing / Failure."""
    return render_result(service.read(key_bytes(request, key)))


@router.post("/{key}", response_model=KeyValueResponse, responses=_RESPONSES)
async def write_key(
    key: str,
    request: Request,
    service: KeyValueService = Depends(get_service),
) -> JSONResponse:
    """Store the request body under key; SuccessNew, SuccessOverwrite (old value) or Failure."""
    value = await request.body()
    result = await run_in_threadpool(service.write, key_bytes(request, key), value)
    return render_result(result)
