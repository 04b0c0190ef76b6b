# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# Every request passes the request-context middleware first, then the API key stage, then routing.
# Keeping bootstrap logic centralized makes deployment and testing more predictable.

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

from price_api.api.api_config import ApiConfig, load_api_config
from price_api.api.auth import Reject, authenticate
from price_api.api.db_access import DatabaseClient
from price_api.api.error_handlers import register_error_handlers
from price_api.api.routers.bundles import router as bundles_router
from price_api.api.routers.health import router as health_router
from price_api.api.routers.prices import router as prices_router
from price_api.common.logging import configure_logging

LOGGER = logging.getLogger("price_api.api")

UNMATCHED_PATH_LABEL = "unmatched"

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method"],
)


def route_path_label(request: Request) -> str:
    """Return the matched route template, or a fixed label when no route matched.

    Raw URL paths are never used as label values so the number of series stays bounded.
    """

    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path if isinstance(path, str) and path else UNMATCHED_PATH_LABEL


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    try:
        app.state.db_connected_at_startup = app.state.db.can_connect()
    except Exception:
        LOGGER.exception("database connectivity check failed at startup")
        app.state.db_connected_at_startup = False
    if not app.state.db_connected_at_startup:
        LOGGER.warning("database is not reachable at startup; queries will return 500")

    yield

    app.state.db.dispose()


def create_app(
    config: ApiConfig | None = None,
    *,
    db_client: DatabaseClient | None = None,
) -> FastAPI:
    """Create configured FastAPI application instance.

    `config` defaults to `load_api_config()`; pass one explicitly to build the
    app from a known configuration (tests, embedding).
    """

    resolved_config = config or load_api_config()
    configure_logging(resolved_config.log_level)

    app = FastAPI(
        title=resolved_config.api_name,
        description=(
            "Read-only lookups over priced treatments and bundle contents. "
            f"Every request must send the `{resolved_config.api_key_header}` header."
        ),
        version=resolved_config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness, readiness, and version metadata."},
            {"name": "prices", "description": "Treatment price lookups by area, size, and bundle."},
            {"name": "bundles", "description": "Treatments contained in a bundle product."},
        ],
        lifespan=lifespan,
    )
    app.state.config = resolved_config
    app.state.db = db_client or DatabaseClient(database_url=resolved_config.database_url)

    @app.middleware("http")
    async def api_key_middleware(request: Request, call_next: RequestResponseEndpoint) -> Response:
        decision = authenticate(
            request,
            header_name=resolved_config.api_key_header,
            expected_key=resolved_config.api_key,
        )
        if isinstance(decision, Reject):
            return decision.to_response()
        return await call_next(decision.request)

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"
            LOGGER.debug(
                "request completed method=%s path=%s status=%s duration_ms=%.2f request_id=%s",
                method_label,
                request.url.path,
                status_code,
                duration_ms,
                request_id,
            )
            return response
        finally:
            # the router stores the matched route in the shared scope during call_next
            path_label = route_path_label(request)
            duration_s = time.perf_counter() - started
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).dec()

    if resolved_config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=resolved_config.allowed_origins,
            allow_credentials=True,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(prices_router)
    app.include_router(bundles_router)

    return app
