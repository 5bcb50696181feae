"""Pydantic models for catalog records and request payloads."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Product(BaseModel):
    """A stored catalog entry.

    Field aliases match the camelCase keys used in ``products.json`` and in
    API responses. Unknown keys found in the file are kept so that a rewrite
    does not silently drop them.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    name: str
    slug: str
    description: str
    price: float
    category: str
    inventory: int
    last_updated: str = Field(..., alias="lastUpdated")
    image_url: str = Field("", alias="imageUrl")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        # Older files may carry numeric ids.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("image_url", mode="before")
    @classmethod
    def blank_image(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)


class ProductDraft(BaseModel):
    """Fields supplied when adding a product; the store fills in the rest."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    description: str
    price: float
    category: str
    inventory: int
    image_url: str = Field("", alias="imageUrl")
    slug: Optional[str] = None


class ProductForm(BaseModel):
    """Validation for admin form and API payloads."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    price: float = Field(..., gt=0, allow_inf_nan=False)
    category: str = Field(..., min_length=1, max_length=120)
    inventory: int = Field(..., ge=0)
    image_url: str = Field("", alias="imageUrl", max_length=2048)

    @field_validator("image_url", mode="before")
    @classmethod
    def blank_image(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_draft(self) -> ProductDraft:
        return ProductDraft(**self.model_dump())


class DashboardStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_products: int = Field(..., alias="totalProducts")
    low_stock_items: int = Field(..., alias="lowStockItems")
    total_value: float = Field(..., alias="totalValue")
    categories: list[str]
