# This file defines the bundle contents endpoint.
# It exists so clients can list every treatment packed into one bundle product.

from __future__ import annotations

import logging
import re
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from price_api.api.dependencies import get_bundle_service
from price_api.api.error_handlers import APIError, NotFoundError
from price_api.api.schemas.price_schemas import BundleContentsResponseV1
from price_api.api.services.bundle_service import BundleService

LOGGER = logging.getLogger("price_api.api")

router = APIRouter(prefix="/bundles", tags=["bundles"])
BundleServiceDep = Annotated[BundleService, Depends(get_bundle_service)]

_PRODUCT_ID_RE = re.compile(r"[+-]?[0-9]+")


def parse_product_id(raw: str) -> int | None:
    """Return the integer product id in `raw`, or None when it is not a whole number.

    Only ASCII digits with an optional sign are accepted, so `1_0` and non-ASCII digits are rejected.
    """

    candidate = raw.strip()
    if not _PRODUCT_ID_RE.fullmatch(candidate):
        return None
    return int(candidate)


@router.get("/{product_id}", response_model=BundleContentsResponseV1)
def bundle_contents(product_id: str, service: BundleServiceDep) -> dict[str, object]:
    parsed_id = parse_product_id(product_id)
    if parsed_id is None:
        raise APIError(status_code=400, error_code="INVALID_PRODUCT_ID", message="Invalid product id")

    try:
        items = service.get_bundle_items(product_id=parsed_id)
    except SQLAlchemyError as exc:
        LOGGER.exception("database query failed endpoint=bundles product_id=%s", parsed_id)
        raise APIError(
            status_code=500,
            error_code="DATABASE_ERROR",
            message="Database query failed",
        ) from exc

    if not items:
        raise NotFoundError("No products found for this bundle")

    return {
        "product_id": parsed_id,
        "total_items": len(items),
        "items": items,
    }
