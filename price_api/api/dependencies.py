# This file provides dependency factories for FastAPI routes.
# It exists so handlers receive the configuration and database client the app was built with.
# Both objects are attached to `app.state` once by `create_app`; nothing here reads the environment.
# The setup keeps routers thin and makes endpoint tests easy to override.

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from price_api.api.api_config import ApiConfig
from price_api.api.db_access import DatabaseClient
from price_api.api.services.bundle_service import BundleService
from price_api.api.services.price_service import PriceService


def get_config(request: Request) -> ApiConfig:
    return request.app.state.config


def get_database_client(request: Request) -> DatabaseClient:
    return request.app.state.db


def get_price_service(
    config: Annotated[ApiConfig, Depends(get_config)],
    db: Annotated[DatabaseClient, Depends(get_database_client)],
) -> PriceService:
    return PriceService(config=config, db=db)


def get_bundle_service(
    config: Annotated[ApiConfig, Depends(get_config)],
    db: Annotated[DatabaseClient, Depends(get_database_client)],
) -> BundleService:
    return BundleService(config=config, db=db)
