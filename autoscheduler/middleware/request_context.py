from __future__ import annotations

import uuid

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from autoscheduler.core.response import err

MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Injects request.state.request_id and binds it to the structlog context.

    Rules:
      - X-Request-Id is REQUIRED on mutating requests
      - safe requests get a generated id when the header is absent
      - the id is echoed back in every response
    """

    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get("X-Request-Id")
        if not req_id:
            if request.method in MUTATING_METHODS:
                return JSONResponse(
                    status_code=400,
                    content=err(request, "missing_request_id", "X-Request-Id header is required"),
                )
            req_id = str(uuid.uuid4())

        request.state.request_id = req_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=req_id, path=request.url.path)

        response: Response = await call_next(request)
        response.headers["X-Request-Id"] = req_id
        return response
