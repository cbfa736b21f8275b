from __future__ import annotations

import uuid

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from autoscheduler.api.router import api_router
from autoscheduler.core.config import settings
from autoscheduler.core.logging import configure_logging, log
from autoscheduler.db.init_db import init_db
from autoscheduler.db.session import engine
from autoscheduler.middleware.request_context import RequestContextMiddleware

configure_logging()

app = FastAPI(
    title="Autoscheduler",
    version="0.1.0",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    redoc_url=f"{settings.API_V1_PREFIX}/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-Id"],
)
# Adds request_id context, returns request_id in all responses
app.add_middleware(RequestContextMiddleware)

app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.on_event("startup")
async def on_startup() -> None:
    log.info("startup", env=settings.APP_ENV, api_prefix=settings.API_V1_PREFIX)
    if settings.APP_ENV == "dev":
        # dev convenience: create tables automatically
        await init_db(engine)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await engine.dispose()


@app.get("/health")
async def health():
    return {"status": "ok"}


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    # Ensure we always return a request_id for tracing, even on unexpected errors
    request_id = _request_id(request)
    log.exception("unhandled_exception", request_id=request_id, path=str(request.url))
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "internal_error",
                "message": "Internal server error",
            },
            "request_id": request_id,
        },
        headers={"X-Request-Id": request_id},
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    request_id = _request_id(request)
    payload = exc.detail if isinstance(exc.detail, dict) else {
        "error": {"code": "http_error", "message": str(exc.detail)},
        "request_id": request_id,
    }
    # hard-enforce request_id
    if payload.get("request_id") is None:
        payload["request_id"] = request_id
    return JSONResponse(status_code=exc.status_code, content=payload, headers={"X-Request-Id": request_id})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    request_id = _request_id(request)
    return JSONResponse(
        status_code=422,
        content={
            "error": {
                "code": "validation_error",
                "message": "Request validation failed",
                "details": _validation_errors(exc),
            },
            "request_id": request_id,
        },
        headers={"X-Request-Id": request_id},
    )


def _validation_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(item.get("loc", ())), "msg": item.get("msg"), "type": item.get("type")}
        for item in exc.errors()
    ]
