"""
User I/O models for API requests.

This module contains the payload schemas accepted by the user endpoints.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import Field, field_validator

from storefront_api.core.models.io.base import CreatePayload, UpdatePayload
from storefront_api.core.models.io.rules import as_text, check_email, check_phone


class UserCreate(CreatePayload):
    """Schema for creating a user via API."""

    required_fields = ("name", "email", "phone")

    name: str = Field(description="Full name")
    email: str = Field(description="Unique email address")
    phone: str = Field(description="Phone number with exactly 10 digits")
    address: Optional[str] = Field(default="", description="Street address")
    city: Optional[str] = Field(default="", description="City")
    country: Optional[str] = Field(default="", description="Country")

    @field_validator("name", mode="before")
    @classmethod
    def _name_as_text(cls, value: Any) -> Any:
        return as_text(value)

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return check_email(value)

    @field_validator("phone", mode="before")
    @classmethod
    def _validate_phone(cls, value: Any) -> Any:
        return check_phone(as_text(value))

    def to_record(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address or "",
            "city": self.city or "",
            "country": self.country or "",
            "isActive": True,
        }


class UserUpdate(UpdatePayload):
    """Schema for replacing user fields via API; email and phone are checked when present."""

    email: Optional[str] = None
    phone: Optional[Any] = None

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: Optional[str]) -> Optional[str]:
        return check_email(value)

    @field_validator("phone", mode="before")
    @classmethod
    def _validate_phone(cls, value: Any) -> Any:
        return check_phone(as_text(value))
