# This file implements the read service behind the bundle contents endpoint.
# It joins pack items to their treatments so each item carries the treatment name.

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from price_api.api.api_config import ApiConfig
from price_api.api.db_access import DatabaseClient
from price_api.api.schemas.price_schemas import PackItemV1


def to_pack_item(row: Mapping[str, Any]) -> PackItemV1:
    return PackItemV1(
        product_id=row["product_id"],
        treatment_id=row["treatment_id"],
        name=row["name"],
    )


class BundleService:
    """Data retrieval and shaping for bundle routes."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db
        self.pack_table = self.config.pack_table
        self.treatment_table = self.config.treatment_table

    def get_bundle_items(self, *, product_id: int) -> list[PackItemV1]:
        query = f"""
        SELECT
            lp.product_id,
            lp.treatment_id,
            l.name
        FROM {self.pack_table} lp
        INNER JOIN {self.treatment_table} l ON l.id = lp.treatment_id
        WHERE lp.product_id = :product_id
        ORDER BY l.name ASC, lp.treatment_id ASC
        """
        rows = self.db.fetch_all(query, {"product_id": product_id})
        return [to_pack_item(row) for row in rows]
