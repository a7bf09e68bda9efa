"""
API endpoints for managing orders.

Orders are stored in ``orders.json``. A new order is ``pending``; it can be
moved through ``confirmed``, ``shipped`` and ``delivered`` with a PATCH, and
cancelled through the dedicated cancel endpoint while it is still pending.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Query, status

from storefront_api.core.errors import ApiError
from storefront_api.core.logging_config import get_logger
from storefront_api.core.models.io import OrderCreate, OrderPatch, OrderUpdate
from storefront_api.core.storage import ORDERS_FILE, JsonFileDatabase
from storefront_api.server import responses
from storefront_api.server.services.deps import DatabaseDep, ItemIdDep, UserIdDep
from storefront_api.server.validators import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    handle_failures,
    parse_positive_int,
)

logger = get_logger(__name__)

router = APIRouter(tags=["orders"])


def _status_of(order: Dict[str, Any]) -> str:
    return str(order.get("status") or "").lower()


def _get_order_or_404(db: JsonFileDatabase, order_id: int) -> Dict[str, Any]:
    order = db.get_by_id(ORDERS_FILE, order_id)
    if not order:
        raise ApiError.not_found("Order not found")
    return order


@router.get(
    "",
    summary="List Orders",
    description="Retrieve a page of orders, optionally filtered by user and status.",
)
def list_orders(
    db: DatabaseDep,
    user_id: Optional[str] = Query(default=None, alias="userId"),
    order_status: Optional[str] = Query(default=None, alias="status"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Dict[str, Any]:
    with handle_failures("Failed to fetch orders"):
        page_no = parse_positive_int(page, DEFAULT_PAGE)
        page_size = parse_positive_int(limit, DEFAULT_LIMIT)
        orders = db.get_all(ORDERS_FILE)
        if user_id:
            owner = parse_positive_int(user_id, 0)
            orders = [o for o in orders if o.get("userId") == owner]
        if order_status:
            wanted = order_status.lower()
            orders = [o for o in orders if _status_of(o) == wanted]
        return responses.paginate(orders, page_no, page_size)


@router.get("/user/{user_id}", summary="List Orders of a User")
def list_user_orders(user_id: UserIdDep, db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to fetch user orders"):
        orders = db.filter(ORDERS_FILE, lambda o: o.get("userId") == user_id)
        if not orders:
            raise ApiError.not_found("No orders found for this user")
        return responses.success(orders, "User orders fetched")


@router.get("/status/{order_status}", summary="List Orders by Status")
def list_orders_by_status(order_status: str, db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to fetch orders by status"):
        wanted = order_status.lower()
        orders = db.filter(ORDERS_FILE, lambda o: _status_of(o) == wanted)
        if not orders:
            raise ApiError.not_found("No orders found with this status")
        return responses.success(orders, f"Orders with status '{order_status}' fetched")


@router.get("/{item_id}", summary="Get Order by ID")
def get_order(item_id: ItemIdDep, db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to fetch order"):
        order = _get_order_or_404(db, item_id)
        return responses.success(order, "Order fetched successfully")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Order",
    description="Place an order. userId, a non-empty items list and a positive totalAmount are required.",
)
def create_order(payload: OrderCreate, db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to create order"):
        order = db.create(ORDERS_FILE, payload.to_record())
        logger.info(f"Created order {order['id']} for user {order['userId']}")
        return responses.success(order, "Order created successfully", status.HTTP_201_CREATED)


@router.put("/{item_id}", summary="Update Order")
def update_order(item_id: ItemIdDep, payload: OrderUpdate, db: DatabaseDep) -> Dict[str, Any]:
    """
    Update order.

    Merges the supplied fields into the stored order. The owning ``userId``
    cannot be changed once the order exists.
    """
    with handle_failures("Failed to update order"):
        order = _get_order_or_404(db, item_id)
        changes = payload.changes()
        if "userId" in changes and changes["userId"] != order.get("userId"):
            raise ApiError.bad_request("Cannot change userId after order creation")
        updated = db.update(ORDERS_FILE, item_id, changes)
        return responses.success(updated, "Order updated successfully")


@router.patch("/{item_id}", summary="Partially Update Order")
def patch_order(item_id: ItemIdDep, payload: OrderPatch, db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to update order"):
        _get_order_or_404(db, item_id)
        updated = db.update(ORDERS_FILE, item_id, payload.changes())
        return responses.success(updated, "Order partially updated")


@router.delete("/{item_id}", summary="Delete Order")
def delete_order(item_id: ItemIdDep, db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to delete order"):
        _get_order_or_404(db, item_id)
        db.delete_record(ORDERS_FILE, item_id)
        logger.info(f"Deleted order {item_id}")
        return responses.success(None, "Order deleted successfully")


@router.post("/{item_id}/cancel", summary="Cancel Order")
def cancel_order(item_id: ItemIdDep, db: DatabaseDep) -> Dict[str, Any]:
    with handle_failures("Failed to cancel order"):
        order = _get_order_or_404(db, item_id)
        if _status_of(order) != "pending":
            raise ApiError.bad_request("Only pending orders can be cancelled")
        updated = db.update(ORDERS_FILE, item_id, {"status": "cancelled"})
        logger.info(f"Cancelled order {item_id}")
        return responses.success(updated, "Order cancelled successfully")
