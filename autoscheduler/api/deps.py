from __future__ import annotations

import uuid

from fastapi import Header, HTTPException, Request

from autoscheduler.core.response import err


async def get_current_user_id(
    request: Request,
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> uuid.UUID:
    """Identity is established upstream; the gateway forwards it as X-User-Id."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail=err(request, "unauthorized", "X-User-Id header is required"))
    try:
        return uuid.UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail=err(request, "unauthorized", "Invalid X-User-Id header"))
