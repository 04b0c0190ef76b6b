# This file implements read services for the treatment price endpoints.
# It exists so routers can stay transport-focused while SQL and row shaping live in one layer.
# Every lookup is a single parameterized statement with an explicit column list and a deterministic order.
# Rows are mapped to typed records here so internal column types never leak into responses.

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from price_api.api.api_config import ApiConfig
from price_api.api.db_access import DatabaseClient
from price_api.api.schemas.price_schemas import TreatmentPriceV1

_TREATMENT_COLUMNS = "id, name, product_bundle, customer_type, size, price"


def to_treatment_price(row: Mapping[str, Any]) -> TreatmentPriceV1:
    """Map one treatment table row to its response record."""

    return TreatmentPriceV1(
        id=row["id"],
        name=row["name"],
        product_bundle=row.get("product_bundle"),
        customer_type=row.get("customer_type"),
        size=row.get("size"),
        price=row.get("price"),
    )


class PriceService:
    """Data retrieval and shaping for treatment price routes."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db
        self.treatment_table = self.config.treatment_table

    def find_closest_price(self, *, area: str, bundle: str, sex: str) -> TreatmentPriceV1 | None:
        """Return the treatment whose name best matches `area` for one bundle and customer type.

        Candidates below the configured trigram similarity are ignored; equal
        scores fall back to the lowest id so repeated calls agree.
        """

        query = f"""
        SELECT {_TREATMENT_COLUMNS}
        FROM {self.treatment_table}
        WHERE similarity(name, :area) >= :min_similarity
          AND CAST(product_bundle AS TEXT) = :bundle
          AND customer_type = :sex
        ORDER BY similarity(name, :area) DESC, id ASC
        LIMIT 1
        """
        row = self.db.fetch_one(
            query,
            {
                "area": area,
                "bundle": bundle,
                "sex": sex,
                "min_similarity": self.config.min_similarity,
            },
        )
        return to_treatment_price(row) if row is not None else None

    def list_prices_by_size(self, *, size: str) -> list[TreatmentPriceV1]:
        query = f"""
        SELECT {_TREATMENT_COLUMNS}
        FROM {self.treatment_table}
        WHERE LOWER(size) = LOWER(:size)
        ORDER BY name ASC, product_bundle ASC, id ASC
        """
        rows = self.db.fetch_all(query, {"size": size})
        return [to_treatment_price(row) for row in rows]

    def get_top_bundle(self) -> TreatmentPriceV1 | None:
        """Return the highest-priced row flagged as a bundled product."""

        query = f"""
        SELECT {_TREATMENT_COLUMNS}
        FROM {self.treatment_table}
        WHERE CAST(product_bundle AS TEXT) = :bundle_flag
        ORDER BY price DESC NULLS LAST, id ASC
        LIMIT 1
        """
        row = self.db.fetch_one(query, {"bundle_flag": self.config.bundle_flag})
        return to_treatment_price(row) if row is not None else None
