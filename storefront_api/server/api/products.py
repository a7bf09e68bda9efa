"""
API endpoints for managing products.

Products are stored in ``products.json``. The ``inStock`` flag is derived from
``stock`` whenever a product is created or replaced.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Query, status

from storefront_api.core.errors import ApiError
from storefront_api.core.logging_config import get_logger
from storefront_api.core.models.io import ProductCreate, ProductUpdate
from storefront_api.core.models.io.rules import as_number
from storefront_api.core.storage import PRODUCTS_FILE, JsonFileDatabase
from storefront_api.server import responses
from storefront_api.server.services.deps import DatabaseDep, ItemIdDep
from storefront_api.server.validators import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    handle_failures,
    parse_float,
    parse_positive_int,
)

logger = get_logger(__name__)

router = APIRouter(tags=["products"])

DEFAULT_LOW_STOCK_THRESHOLD = 5


def _price(product: Dict[str, Any]) -> float:
    return as_number(product.get("price")) or 0.0


def _stock(product: Dict[str, Any]) -> int:
    return int(as_number(product.get("stock")) or 0)


def _get_product_or_404(db: JsonFileDatabase, product_id: int) -> Dict[str, Any]:
    product = db.get_by_id(PRODUCTS_FILE, product_id)
    if not product:
        raise ApiError.not_found("Product not found")
    return product


@router.get(
    "",
    summary="List Products",
    description="Retrieve a page of products filtered by category and price range, sorted by name or price.",
)
def list_products(
    db: DatabaseDep,
    category: Optional[str] = None,
    min_price: Optional[str] = Query(default=None, alias="minPrice"),
    max_price: Optional[str] = Query(default=None, alias="maxPrice"),
    sort: str = "name",
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Dict[str, Any]:
    """
    List products.

    - **category**: Case-insensitive exact category match.
    - **minPrice** / **maxPrice**: Inclusive price bounds.
    - **sort**: ``price-asc``, ``price-desc`` or ``name`` (default).
    - **page** / **limit**: Pagination (defaults 1 and 10).
    """
    with handle_failures("Failed to fetch products"):
        page_no = parse_positive_int(page, DEFAULT_PAGE)
        page_size = parse_positive_int(limit, DEFAULT_LIMIT)
        products = db.get_all(PRODUCTS_FILE)

        if category:
            wanted = category.lower()
            products = [p for p in products if str(p.get("category") or "").lower() == wanted]

        if min_price or max_price:
            low = parse_float(min_price, 0.0)
            high = parse_float(max_price, float("inf"))
            products = [p for p in products if low <= _price(p) <= high]

        if sort == "price-asc":
            products.sort(key=_price)
        elif sort == "price-desc":
            products.sort(key=_price, reverse=True)
        else:
            products.sort(key=lambda p: str(p.get("name") or "").casefold())

        return responses.paginate(products, page_no, page_size)


@router.get(
    "/stock/low",
    summary="List Low Stock Products",
    description="Retrieve products whose stock is at or below the threshold (default 5).",
)
def list_low_stock_products(db: DatabaseDep, threshold: Optional[str] = None) -> Dict[str, Any]:
    with handle_failures("Failed to fetch low stock products"):
        limit = parse_positive_int(threshold, DEFAULT_LOW_STOCK_THRESHOLD)
        low_stock = db.filter(PRODUCTS_FILE, lambda product: _stock(product) <= limit)
        return responses.success(low_stock, "Low stock products fetched")


@router.get("/category/{category}", summary="List Products in Category")
def list_products_by_category(category: str, db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to fetch products by category"):
        wanted = category.lower()
        products = db.filter(PRODUCTS_FILE, lambda p: str(p.get("category") or "").lower() == wanted)
        if not products:
            raise ApiError.not_found("No products found in this category")
        return responses.success(products, "Products by category fetched")


@router.get("/{item_id}", summary="Get Product by ID")
def get_product(item_id: ItemIdDep, db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to fetch product"):
        product = _get_product_or_404(db, item_id)
        return responses.success(product, "Product fetched successfully")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Product",
    description="Create a product. name, price, category and stock are required; price and stock must be >= 0.",
)
def create_product(payload: ProductCreate, db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to create product"):
        product = db.create(PRODUCTS_FILE, payload.to_record())
        logger.info(f"Created product {product['id']}")
        return responses.success(product, "Product created successfully", status.HTTP_201_CREATED)


@router.put("/{item_id}", summary="Update Product")
def update_product(item_id: ItemIdDep, payload: ProductUpdate, db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to update product"):
        _get_product_or_404(db, item_id)
        updated = db.update(PRODUCTS_FILE, item_id, payload.changes())
        return responses.success(updated, "Product updated successfully")


@router.patch("/{item_id}", summary="Partially Update Product")
def patch_product(item_id: ItemIdDep, db: DatabaseDep, payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    with handle_failures("Failed to update product"):
        _get_product_or_404(db, item_id)
        updated = db.update(PRODUCTS_FILE, item_id, payload)
        return responses.success(updated, "Product partially updated")


@router.delete("/{item_id}", summary="Delete Product")
def delete_product(item_id: ItemIdDep, db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to delete product"):
        _get_product_or_404(db, item_id)
        db.delete_record(PRODUCTS_FILE, item_id)
        logger.info(f"Deleted product {item_id}")
        return responses.success(None, "Product deleted successfully")
