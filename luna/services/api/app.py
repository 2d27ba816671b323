# luna/services/api/app.py
from __future__ import annotations

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from luna.common.errors import RecordIntegrityError
from luna.common.logging import get_logger
from luna.common.settings import get_settings
from luna.services.api.routers import health, records, lookups, stats

cfg = get_settings()
dev = cfg.app_env.lower() == "development"
logger = get_logger()


async def _integrity_error_handler(request: Request, exc: RecordIntegrityError) -> JSONResponse:
    # corrupted references are a server fault, never a 404
    logger.error("Integrity fault on %s %s: %r", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        content={
            "detail": str(exc),
            "record_id": exc.record_id,
            "kind": exc.kind,
            "missing_id": exc.missing_id,
        },
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Luna Catalog API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
    )

    allow_origins = ["*"] if dev else cfg.api.cors_allow_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    app.add_exception_handler(RecordIntegrityError, _integrity_error_handler)

    # records and stats before the catch-all /{kind} routes
    app.include_router(health.router)
    app.include_router(records.router)
    app.include_router(stats.router)
    app.include_router(lookups.router)
    return app


app = create_app()
