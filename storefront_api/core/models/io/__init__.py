"""
I/O models for API requests.

These Pydantic models define the payloads accepted by the user, product and
order endpoints, including the field rules enforced on them.
"""

from storefront_api.core.models.io.orders import OrderCreate, OrderPatch, OrderUpdate
from storefront_api.core.models.io.products import ProductCreate, ProductUpdate
from storefront_api.core.models.io.users import UserCreate, UserUpdate

__all__ = [
    "OrderCreate",
    "OrderPatch",
    "OrderUpdate",
    "ProductCreate",
    "ProductUpdate",
    "UserCreate",
    "UserUpdate",
]
