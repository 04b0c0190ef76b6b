# This file defines the treatment price lookup endpoints.
# It exists so clients can find the closest treatment by area, list prices by size, and fetch the top bundle.
# Parameters are validated before any query runs; database failures are logged and reduced to a generic 500.

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError

from price_api.api.dependencies import get_price_service
from price_api.api.error_handlers import APIError, NotFoundError
from price_api.api.schemas.price_schemas import BundleListResponseV1, TreatmentPriceV1
from price_api.api.services.price_service import PriceService

LOGGER = logging.getLogger("price_api.api")

router = APIRouter(prefix="/prices", tags=["prices"])
PriceServiceDep = Annotated[PriceService, Depends(get_price_service)]


def _database_error(endpoint: str) -> APIError:
    LOGGER.exception("database query failed endpoint=%s", endpoint)
    return APIError(status_code=500, error_code="DATABASE_ERROR", message="Database error")


@router.get("", response_model=list[TreatmentPriceV1])
def closest_price(
    service: PriceServiceDep,
    area: str | None = Query(default=None),
    bundle: str | None = Query(default=None),
    sex: str | None = Query(default=None),
) -> list[TreatmentPriceV1]:
    if not area or not bundle or not sex:
        raise APIError(
            status_code=400,
            error_code="MISSING_QUERY_PARAM",
            message="Please supply all of 'area' and 'bundle' and 'sex' query parameters",
        )

    try:
        match = service.find_closest_price(area=area, bundle=bundle, sex=sex)
    except SQLAlchemyError as exc:
        raise _database_error("prices") from exc

    if match is None:
        raise NotFoundError("No close match found for this area/bundle/sex")
    return [match]


@router.get("/by-size", response_model=list[TreatmentPriceV1])
def prices_by_size(
    service: PriceServiceDep,
    size: str | None = Query(default=None),
) -> list[TreatmentPriceV1]:
    if not size:
        raise APIError(
            status_code=400,
            error_code="MISSING_QUERY_PARAM",
            message="Size parameter is required",
        )

    try:
        rows = service.list_prices_by_size(size=size)
    except SQLAlchemyError as exc:
        raise _database_error("prices/by-size") from exc

    if not rows:
        raise NotFoundError("No prices found for this size")
    return rows


@router.get("/bundles", response_model=BundleListResponseV1)
def top_bundle(service: PriceServiceDep) -> dict[str, object]:
    try:
        bundle = service.get_top_bundle()
    except SQLAlchemyError as exc:
        raise _database_error("prices/bundles") from exc

    if bundle is None:
        raise NotFoundError("No bundles found")
    return {"data": [bundle]}
