"""
Unit tests for the order API endpoints.

Tests cover:
- Order placement and its validation rules
- Filtering by user and status
- Update rules for the owning user and status transitions
- Cancellation of pending orders
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


def _order_body(user_id=1, total=20, **extra) -> dict:
    body = {"userId": user_id, "items": [{"productId": 1, "quantity": 2}], "totalAmount": total}
    body.update(extra)
    return body


class TestCreateOrder:
    """Test order placement endpoint."""

    async def test_create_order_defaults(self, client: AsyncClient, order: dict, user: dict):
        assert order["status"] == "pending"
        assert order["userId"] == user["id"]
        assert order["paymentMethod"] == "credit-card"
        assert order["shippingAddress"] == ""
        assert order["notes"] == ""

    async def test_create_order_keeps_supplied_options(self, client: AsyncClient):
        response = await client.post(
            "/api/orders", json=_order_body(paymentMethod="paypal", shippingAddress="1 Main St", notes="gift")
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["paymentMethod"] == "paypal"
        assert data["shippingAddress"] == "1 Main St"
        assert data["notes"] == "gift"

    async def test_create_order_ignores_client_status(self, client: AsyncClient):
        response = await client.post("/api/orders", json=_order_body(status="delivered"))
        assert response.json()["data"]["status"] == "pending"

    async def test_create_order_missing_fields(self, client: AsyncClient):
        response = await client.post("/api/orders", json={"items": [{"productId": 1}]})
        assert response.status_code == 400
        assert response.json()["details"] == "Missing required fields: userId, totalAmount"

    async def test_create_order_empty_items(self, client: AsyncClient):
        response = await client.post("/api/orders", json={"userId": 1, "items": [], "totalAmount": 5})
        assert response.status_code == 400
        assert response.json()["message"] == "Items must be a non-empty array"

    async def test_create_order_items_not_a_list(self, client: AsyncClient):
        response = await client.post("/api/orders", json={"userId": 1, "items": "abc", "totalAmount": 5})
        assert response.status_code == 400
        assert response.json()["message"] == "Items must be a non-empty array"

    async def test_create_order_zero_total(self, client: AsyncClient):
        response = await client.post("/api/orders", json=_order_body(total=0))
        assert response.status_code == 400
        assert response.json()["message"] == "Total amount must be a positive number"


class TestListOrders:
    """Test order listing endpoints."""

    @pytest_asyncio.fixture
    async def orders(self, client: AsyncClient) -> list:
        created = []
        for user_id in (1, 2, 1):
            response = await client.post("/api/orders", json=_order_body(user_id=user_id))
            created.append(response.json()["data"])
        await client.patch(f"/api/orders/{created[2]['id']}", json={"status": "shipped"})
        return created

    async def test_list_all(self, client: AsyncClient, orders: list):
        response = await client.get("/api/orders")
        body = response.json()
        assert body["pagination"]["total"] == 3
        assert [o["id"] for o in body["data"]] == [1, 2, 3]

    async def test_filter_by_user_and_status(self, client: AsyncClient, orders: list):
        by_user = await client.get("/api/orders", params={"userId": "1"})
        assert [o["id"] for o in by_user.json()["data"]] == [1, 3]
        by_both = await client.get("/api/orders", params={"userId": "1", "status": "PENDING"})
        assert [o["id"] for o in by_both.json()["data"]] == [1]

    async def test_orders_of_user(self, client: AsyncClient, orders: list):
        response = await client.get("/api/orders/user/2")
        body = response.json()
        assert body["message"] == "User orders fetched"
        assert [o["id"] for o in body["data"]] == [2]

    async def test_orders_of_user_without_orders(self, client: AsyncClient, orders: list):
        response = await client.get("/api/orders/user/9")
        assert response.status_code == 404
        assert response.json()["message"] == "No orders found for this user"

    async def test_orders_of_user_invalid_id(self, client: AsyncClient):
        response = await client.get("/api/orders/user/someone")
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid ID format"

    async def test_orders_by_status(self, client: AsyncClient, orders: list):
        response = await client.get("/api/orders/status/shipped")
        body = response.json()
        assert body["message"] == "Orders with status 'shipped' fetched"
        assert [o["id"] for o in body["data"]] == [3]

    async def test_orders_by_status_none_found(self, client: AsyncClient, orders: list):
        response = await client.get("/api/orders/status/delivered")
        assert response.status_code == 404
        assert response.json()["message"] == "No orders found with this status"


class TestUpdateOrder:
    """Test order update endpoints."""

    async def test_put_updates_fields(self, client: AsyncClient, order: dict):
        response = await client.put(f"/api/orders/{order['id']}", json={"notes": "leave at door", "totalAmount": "25"})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["notes"] == "leave at door"
        assert data["totalAmount"] == 25.0

    async def test_put_same_user_id_is_allowed(self, client: AsyncClient, order: dict):
        response = await client.put(f"/api/orders/{order['id']}", json={"userId": str(order["userId"])})
        assert response.status_code == 200

    async def test_put_cannot_change_user(self, client: AsyncClient, order: dict):
        response = await client.put(f"/api/orders/{order['id']}", json={"userId": order["userId"] + 1})
        assert response.status_code == 400
        assert response.json()["message"] == "Cannot change userId after order creation"

    async def test_put_null_user_id_keeps_owner(self, client: AsyncClient, order: dict):
        response = await client.put(f"/api/orders/{order['id']}", json={"userId": None})
        assert response.status_code == 400
        assert response.json()["message"] == "Cannot change userId after order creation"
        stored = (await client.get(f"/api/orders/{order['id']}")).json()["data"]
        assert stored["userId"] == order["userId"]

    async def test_put_invalid_total(self, client: AsyncClient, order: dict):
        response = await client.put(f"/api/orders/{order['id']}", json={"totalAmount": -1})
        assert response.status_code == 400

    async def test_put_null_total_is_rejected(self, client: AsyncClient, order: dict):
        response = await client.put(f"/api/orders/{order['id']}", json={"totalAmount": None})
        assert response.status_code == 400
        assert response.json()["message"] == "Total amount must be a positive number"
        stored = (await client.get(f"/api/orders/{order['id']}")).json()["data"]
        assert stored["totalAmount"] == order["totalAmount"]

    async def test_put_null_status_leaves_status(self, client: AsyncClient, order: dict):
        response = await client.put(f"/api/orders/{order['id']}", json={"status": None, "notes": "n"})
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "pending"

    async def test_patch_status(self, client: AsyncClient, order: dict):
        response = await client.patch(f"/api/orders/{order['id']}", json={"status": "Confirmed"})
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Order partially updated"
        assert body["data"]["status"] == "confirmed"

    async def test_patch_invalid_status(self, client: AsyncClient, order: dict):
        response = await client.patch(f"/api/orders/{order['id']}", json={"status": "teleported"})
        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid status. Must be one of:")

    async def test_patch_missing_order(self, client: AsyncClient):
        response = await client.patch("/api/orders/12", json={"status": "shipped"})
        assert response.status_code == 404
        assert response.json()["message"] == "Order not found"


class TestCancelAndDelete:
    """Test cancellation and deletion."""

    async def test_cancel_pending_order(self, client: AsyncClient, order: dict):
        response = await client.post(f"/api/orders/{order['id']}/cancel")
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Order cancelled successfully"
        assert body["data"]["status"] == "cancelled"

    async def test_cancel_twice_fails(self, client: AsyncClient, order: dict):
        await client.post(f"/api/orders/{order['id']}/cancel")
        response = await client.post(f"/api/orders/{order['id']}/cancel")
        assert response.status_code == 400
        assert response.json()["message"] == "Only pending orders can be cancelled"

    async def test_cancel_shipped_order_fails(self, client: AsyncClient, order: dict):
        await client.patch(f"/api/orders/{order['id']}", json={"status": "shipped"})
        response = await client.post(f"/api/orders/{order['id']}/cancel")
        assert response.status_code == 400

    async def test_delete_order(self, client: AsyncClient, order: dict):
        response = await client.delete(f"/api/orders/{order['id']}")
        assert response.status_code == 200
        assert response.json()["message"] == "Order deleted successfully"
        assert (await client.get(f"/api/orders/{order['id']}")).status_code == 404
