"""FastAPI application entrypoint for votehook."""

from __future__ import annotations

from time import perf_counter
from typing import Optional
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from src.core.config import get_settings
from src.core.logger import bind_request_context, clear_request_context, get_logger
from src.core.metrics import record_http_request, render_prometheus_metrics
from src.core.observability import init_sentry, sentry_scope
from src.votes.handler import LoggingVoteHandler, VoteHandler
from src.votes.router import create_vote_router


logger = get_logger("votehook.api")


def create_app(handler: Optional[VoteHandler] = None) -> FastAPI:
    """Build the webhook application around ``handler`` (logs votes by default)."""

    settings = get_settings()
    app = FastAPI(title=settings.app_name, version=settings.app_version)

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        started_at = perf_counter()
        request_id = request.headers.get("x-request-id", str(uuid4()))
        bind_request_context(request_id=request_id)

        status_code = 500
        try:
            with sentry_scope(request_id=request_id):
                response = await call_next(request)
            status_code = int(response.status_code)
        finally:
            if get_settings().metrics_enabled:
                record_http_request(
                    method=request.method,
                    path=request.url.path,
                    status_code=status_code,
                    duration_seconds=perf_counter() - started_at,
                )
            clear_request_context()

        response.headers["x-request-id"] = request_id
        return response

    @app.on_event("startup")
    def on_startup() -> None:
        current = get_settings()
        sentry_enabled = init_sentry()
        logger.info(
            "application_startup",
            env=current.env,
            version=current.app_version,
            sentry_enabled=sentry_enabled,
            metrics_enabled=current.metrics_enabled,
            vote_webhook_path=current.vote_webhook_path,
            vote_webhook_require_auth=current.vote_webhook_require_auth,
        )
        if current.vote_webhook_require_auth and not current.vote_webhook_password.strip():
            logger.warning("vote_webhook_password_missing")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "env": get_settings().env}

    @app.get("/version")
    def version() -> dict[str, str]:
        current = get_settings()
        return {
            "name": current.app_name,
            "version": current.app_version,
            "env": current.env,
        }

    @app.get("/metrics")
    def metrics() -> PlainTextResponse:
        current = get_settings()
        if not current.metrics_enabled:
            return PlainTextResponse("metrics disabled\n", status_code=404)

        payload = render_prometheus_metrics(
            app_name=current.app_name,
            app_version=current.app_version,
            env=current.env,
        )
        return PlainTextResponse(
            payload,
            media_type="text/plain; version=0.0.4; charset=utf-8",
        )

    app.include_router(create_vote_router(handler or LoggingVoteHandler()))
    return app


app = create_app()
