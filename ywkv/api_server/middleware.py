"""
HTTP auth gate: single shared bearer token.

Every key-value route depends on require_bearer_token, which runs before the
handler reads the body or touches storage. Missing, malformed or wrong
credentials are rejected with 401 and a WWW-Authenticate challenge.
"""

from __future__ import annotations

import hmac

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ywkv.config import Settings
from ywkv.ywkv_logging import get_logger

logger = get_logger(__name__)

# auto_error=False: we raise our own 401 (HTTPBearer's default status varies by FastAPI version)
_bearer_scheme = HTTPBearer(auto_error=False)


def token_matches(presented: str, expected: str) -> bool:
    """Exact match in constant time."""
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def require_bearer_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    settings: Settings = Depends(get_settings_dep),
) -> None:
    """Dependency: reject the request unless Authorization: Bearer <token> matches."""
    if credentials is None:
        reason = "missing"
    elif not token_matches(credentials.credentials, settings.token):
        reason = "mismatch"
    else:
        return
    logger.warning(
        "auth_rejected",
        method=request.method,
        path=request.url.path,
        reason=reason,
        client=request.client.host if request.client else None,
    )
    raise HTTPException(
        status_code=401,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )
