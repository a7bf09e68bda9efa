"""
Flat JSON file storage.

Exposes ``JsonFileDatabase`` and the file names of the three stored resources.
"""

from storefront_api.core.storage.json_store import JsonFileDatabase, Record

USERS_FILE = "users.json"
PRODUCTS_FILE = "products.json"
ORDERS_FILE = "orders.json"

__all__ = ["JsonFileDatabase", "Record", "USERS_FILE", "PRODUCTS_FILE", "ORDERS_FILE"]
