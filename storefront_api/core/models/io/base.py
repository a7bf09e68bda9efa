"""
Base classes for request payload models.

Payloads use camelCase keys on the wire (``userId``, ``totalAmount``) while the
Python attributes are snake_case.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Tuple

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from storefront_api.core.models.io.rules import require_fields


class CreatePayload(BaseModel):
    """Body of a POST request; unknown keys are dropped."""

    required_fields: ClassVar[Tuple[str, ...]] = ()

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _check_required_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            require_fields(data, cls.required_fields)
        return data


class UpdatePayload(BaseModel):
    """Body of a PUT request; unknown keys are kept and merged into the stored record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def changes(self) -> Dict[str, Any]:
        """The fields the client actually sent, keyed by their wire names."""
        return {**self.model_dump(by_alias=True, exclude_unset=True), **(self.model_extra or {})}
