"""
Response serializer: Result -> JSON body + HTTP status code.

Body is always {"value": <string>, "status": <StatusName>}, including for
Failure, where value holds the diagnostic.
"""

from __future__ import annotations

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ywkv.database import Result, Status


class KeyValueResponse(BaseModel):
    """Body of every GET/POST /{key} response."""

    value: str = Field(..., description="Stored, previous or diagnostic value depending on status")
    status: Status = Field(..., description="Outcome: Found, Missing, SuccessNew, SuccessOverwrite or Failure")


def render_result(result: Result) -> JSONResponse:
    body = KeyValueResponse(value=result.text, status=result.status)
    return JSONResponse(
        status_code=result.http_status,
        content=body.model_dump(mode="json"),
    )
