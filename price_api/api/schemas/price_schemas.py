# This file defines typed records for treatment prices and bundle pack items.
# It exists so database rows are mapped to an explicit contract instead of being serialized as-is.
# The response wrappers mirror the JSON shapes clients already consume for each endpoint.
# Keeping these models explicit helps catch accidental payload drift during development.

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TreatmentPriceV1(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    product_bundle: str | bool | None = None
    customer_type: str | None = None
    size: str | None = None
    price: float | None = None


class PackItemV1(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: int
    treatment_id: int
    name: str


class BundleListResponseV1(BaseModel):
    data: list[TreatmentPriceV1]


class BundleContentsResponseV1(BaseModel):
    product_id: int
    total_items: int
    items: list[PackItemV1]
