"""Application entrypoint for the LeadInk API."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.v1._authz import map_error
from app.api.v1.router import get_api_router
from app.core.config import get_config
from app.core.exceptions import LeadInkException
from app.core.startup import bootstrap
from app.schemas.common import ErrorEnvelope

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error_code: str, detail: str) -> JSONResponse:
    body = ErrorEnvelope(error_code=error_code, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app() -> FastAPI:
    cfg = get_config()
    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION)
    app.include_router(get_api_router())

    @app.exception_handler(LeadInkException)
    async def domain_exception_handler(request: Request, exc: LeadInkException) -> JSONResponse:
        status_code, error_code = map_error(exc)
        log = logger.warning if status_code < 500 else logger.error
        log(
            "api.request_failed",
            extra={
                "event": "api.request_failed",
                "path": request.url.path,
                "status_code": status_code,
                "error_code": error_code,
            },
        )
        return _error_response(status_code, error_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        messages = []
        for error in exc.errors():
            loc = error.get("loc", [])
            field = ".".join(str(part) for part in loc if part not in {"body", "query", "path"}) or "body"
            messages.append(f"{field}: {error.get('msg', 'Invalid value')}")
        return _error_response(422, "validation_error", "; ".join(messages) or "Request validation failed")

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return _error_response(exc.status_code, "http_error", detail)

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


# Expose ASGI app for `uvicorn app.main:app`.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    bootstrap()
    cfg = get_config()
    uvicorn.run("app.main:app", host=cfg.API_HOST, port=cfg.API_PORT)
