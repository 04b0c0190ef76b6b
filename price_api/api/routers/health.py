# This file defines liveness, readiness, and version endpoints for API operations.
# It exists so orchestration and monitoring systems can verify service health quickly.
# The readiness check confirms database connectivity and that both source tables exist.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from price_api.api.api_config import ApiConfig
from price_api.api.db_access import DatabaseClient
from price_api.api.dependencies import get_config, get_database_client
from price_api.api.schemas.health_schemas import HealthResponse, ReadinessResponse, VersionResponse

router = APIRouter(tags=["health"])
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@router.get("/health", response_model=HealthResponse)
def health(
    request: Request,
    config: ConfigDep,
) -> dict[str, object]:
    return {
        "request_id": request.state.request_id,
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
        "timestamp": _utc_now(),
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(
    request: Request,
    config: ConfigDep,
    db: DBDep,
) -> dict[str, object]:
    db_connected = db.can_connect()
    price_source_ready = db_connected and db.table_exists(config.treatment_table)
    pack_source_ready = db_connected and db.table_exists(config.pack_table)

    return {
        "request_id": request.state.request_id,
        "db_connected": db_connected,
        "price_source_ready": price_source_ready,
        "pack_source_ready": pack_source_ready,
        "ready": db_connected and price_source_ready and pack_source_ready,
        "database": "reachable" if db_connected else "unreachable",
        "timestamp": _utc_now(),
    }


@router.get("/version", response_model=VersionResponse)
def version(config: ConfigDep) -> dict[str, object]:
    return {
        "project": config.api_name,
        "version": config.app_version,
        "timestamp": _utc_now(),
    }
