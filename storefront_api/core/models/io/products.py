"""
Product I/O models for API requests.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import Field, field_validator, model_validator

from storefront_api.core.models.io.base import CreatePayload, UpdatePayload
from storefront_api.core.models.io.rules import as_text, check_product_numbers


class ProductCreate(CreatePayload):
    """Schema for creating a product via API."""

    required_fields = ("name", "price", "category", "stock")

    name: str = Field(description="Product name")
    price: Any = Field(description="Unit price, a number >= 0")
    category: str = Field(description="Category label")
    stock: Any = Field(description="Units in stock, a number >= 0")
    description: Optional[str] = Field(default="", description="Free-text description")
    image: Optional[str] = Field(default="", description="Image URL")

    @field_validator("name", "category", mode="before")
    @classmethod
    def _text_fields(cls, value: Any) -> Any:
        return as_text(value)

    @model_validator(mode="after")
    def _coerce_numbers(self) -> "ProductCreate":
        self.price, self.stock = check_product_numbers(self.price, self.stock)
        return self

    def to_record(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "price": self.price,
            "category": self.category,
            "stock": self.stock,
            "description": self.description or "",
            "image": self.image or "",
            "inStock": self.stock > 0,
        }


class ProductUpdate(UpdatePayload):
    """Schema for replacing product fields via API; ``inStock`` follows ``stock``."""

    price: Optional[Any] = None
    stock: Optional[Any] = None

    @model_validator(mode="after")
    def _coerce_numbers(self) -> "ProductUpdate":
        price, stock = check_product_numbers(self.price, self.stock, partial=True)
        # Assigning marks a field as set, so only touch the ones that were sent
        if price is not None:
            self.price = price
        if stock is not None:
            self.stock = stock
        return self

    def changes(self) -> Dict[str, Any]:
        data = super().changes()
        for key in ("price", "stock"):
            if data.get(key, 0) is None:
                del data[key]
        if "stock" in data:
            data["inStock"] = data["stock"] > 0
        return data
