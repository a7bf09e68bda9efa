"""
Order I/O models for API requests.

Orders start out ``pending`` and move through the statuses listed in
``ORDER_STATUSES``. Only pending orders can be cancelled.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import Field, model_validator

from storefront_api.core.models.io.base import CreatePayload, UpdatePayload
from storefront_api.core.models.io.rules import (
    check_items,
    check_status,
    check_total,
    check_user_id,
)

DEFAULT_PAYMENT_METHOD = "credit-card"


class OrderCreate(CreatePayload):
    """Schema for placing an order via API."""

    required_fields = ("userId", "items", "totalAmount")

    user_id: Any = Field(description="Id of the ordering user")
    items: Any = Field(description="Non-empty list of line items")
    total_amount: Any = Field(description="Order total, a number > 0")
    shipping_address: Optional[str] = Field(default="", description="Delivery address")
    payment_method: Optional[str] = Field(default=DEFAULT_PAYMENT_METHOD, description="Payment method")
    notes: Optional[str] = Field(default="", description="Free-text notes")

    @model_validator(mode="after")
    def _check_order(self) -> "OrderCreate":
        self.items = check_items(self.items)
        self.total_amount = check_total(self.total_amount)
        self.user_id = check_user_id(self.user_id)
        return self

    def to_record(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "items": self.items,
            "totalAmount": self.total_amount,
            "status": "pending",
            "paymentMethod": self.payment_method or DEFAULT_PAYMENT_METHOD,
            "shippingAddress": self.shipping_address or "",
            "notes": self.notes or "",
        }


class OrderUpdate(UpdatePayload):
    """Schema for replacing order fields via API; ``userId`` may be repeated but not changed."""

    user_id: Optional[Any] = None
    total_amount: Optional[Any] = None
    status: Optional[Any] = None

    @model_validator(mode="after")
    def _check_order(self) -> "OrderUpdate":
        # A null total is rejected like any other non-positive total
        if "total_amount" in self.model_fields_set:
            self.total_amount = check_total(self.total_amount)
        if self.user_id is not None:
            self.user_id = check_user_id(self.user_id)
        if self.status is not None:
            self.status = check_status(self.status)
        return self

    def changes(self) -> Dict[str, Any]:
        data = super().changes()
        if data.get("status", "") is None:
            del data["status"]
        return data


class OrderPatch(UpdatePayload):
    """Schema for a partial order update; ``status`` must be a known order status."""

    status: Optional[Any] = None

    @model_validator(mode="after")
    def _check_status(self) -> "OrderPatch":
        if self.status:
            self.status = check_status(self.status)
        return self
