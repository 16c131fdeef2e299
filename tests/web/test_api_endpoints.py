"""
API endpoint tests for the public checkout routes and the admin routes.

Requests go through httpx.AsyncClient with the ASGI transport so the app and
the in-memory database share one event loop. The db session dependency is
overridden with a session from the test engine.
"""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
import pytest_asyncio

from db import get_session
from services.cart import CartStore
from services.checkout import CheckoutService

ADMIN_HEADERS = {"X-Admin-Token": "test-admin-token"}

ALMONDS = {"product_id": 1, "name": "Almonds", "unit_price": 1000, "quantity": 1, "size_label": "500g"}
HONEY = {"product_id": 2, "name": "Wild Honey", "unit_price": 2500, "quantity": 1, "size_label": "2kg"}


@pytest_asyncio.fixture
async def client(test_session_maker):
    from app import app

    async def override_get_session():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


async def place_order(client, customer_fields, items=None):
    return await client.post("/api/orders", json={"items": items or [ALMONDS], "customer": customer_fields})


@pytest.mark.asyncio
class TestCheckoutEndpoints:
    """Test /api/checkout/quote and /api/orders"""

    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    async def test_quote(self, client):
        response = await client.post("/api/checkout/quote", json={"items": [ALMONDS], "region": "Gujarat"})

        assert response.status_code == 200
        assert response.json() == {"subtotal": 1000.0, "shipping_fee": 50.0, "total": 1050.0, "total_weight_kg": 0.5}

    async def test_quote_free_shipping(self, client):
        response = await client.post("/api/checkout/quote", json={"items": [HONEY]})

        assert response.json()["shipping_fee"] == 0
        assert response.json()["total"] == 2500

    async def test_quote_rejects_zero_quantity(self, client):
        response = await client.post("/api/checkout/quote", json={"items": [{**ALMONDS, "quantity": 0}]})

        assert response.status_code == 422

    async def test_create_order_without_whatsapp_number(self, client, customer_fields):
        response = await place_order(client, customer_fields)

        assert response.status_code == 201
        body = response.json()
        assert body["handoff_url"] is None
        assert body["order"]["total_amount"] == "1050.00"
        assert body["order"]["status"] == "Processing"
        assert body["order"]["order_items"][0]["name"] == "Almonds"

    async def test_create_order_with_whatsapp_number(self, client, customer_fields):
        await client.put("/api/admin/settings/whatsapp", json={"whatsapp_number": "+91 98765 43210"}, headers=ADMIN_HEADERS)

        response = await place_order(client, customer_fields)

        assert response.status_code == 201
        assert response.json()["handoff_url"].startswith("https://wa.me/919876543210?text=")

    async def test_create_order_field_errors(self, client, customer_fields):
        customer_fields["phone"] = "12345"

        response = await place_order(client, customer_fields)

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["field_errors"] == {"phone": "Phone number must be at least 10 characters"}

    async def test_create_order_empty_cart(self, client, customer_fields):
        response = await client.post("/api/orders", json={"items": [], "customer": customer_fields})

        assert response.status_code == 400

    async def test_create_order_store_failure(self, client, customer_fields):
        with patch('repositories.order.OrderRepository.create', new_callable=AsyncMock) as mock_create:
            mock_create.side_effect = RuntimeError("disk I/O error")

            response = await place_order(client, customer_fields)

        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to create order"

    async def test_create_order_while_same_cart_in_flight(self, client, customer_fields):
        from web import api_router as api_module

        busy = CheckoutService(CartStore())
        busy._submission_in_flight = True
        api_module._active_checkouts["cart-1"] = busy
        try:
            response = await client.post(
                "/api/orders",
                json={"cart_id": "cart-1", "items": [ALMONDS], "customer": customer_fields}
            )
        finally:
            api_module._active_checkouts.pop("cart-1", None)

        assert response.status_code == 409

    async def test_cart_id_slot_released_after_order(self, client, customer_fields):
        from web import api_router as api_module

        response = await client.post(
            "/api/orders",
            json={"cart_id": "cart-2", "items": [ALMONDS], "customer": customer_fields}
        )

        assert response.status_code == 201
        assert "cart-2" not in api_module._active_checkouts

    async def test_get_whatsapp_number_unset(self, client):
        response = await client.get("/api/settings/whatsapp")

        assert response.json() == {"whatsapp_number": None}

    async def test_security_headers(self, client):
        response = await client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"


@pytest.mark.asyncio
class TestAdminEndpoints:
    """Test /api/admin routes"""

    async def test_missing_token_rejected(self, client):
        response = await client.get("/api/admin/orders")

        assert response.status_code == 401

    async def test_wrong_token_rejected(self, client):
        response = await client.get("/api/admin/orders", headers={"X-Admin-Token": "guess"})

        assert response.status_code == 401

    async def test_admin_disabled_without_configured_token(self, client):
        with patch('config.ADMIN_API_TOKEN', ''):
            response = await client.get("/api/admin/orders", headers=ADMIN_HEADERS)

        assert response.status_code == 403

    async def test_list_and_get_orders(self, client, customer_fields):
        first = (await place_order(client, customer_fields)).json()["order"]
        second = (await place_order(client, customer_fields, items=[HONEY])).json()["order"]

        listing = await client.get("/api/admin/orders", headers=ADMIN_HEADERS)
        single = await client.get(f"/api/admin/orders/{first['id']}", headers=ADMIN_HEADERS)

        assert [order["id"] for order in listing.json()] == [second["id"], first["id"]]
        assert single.json()["total_amount"] == "1050.00"

    async def test_get_missing_order(self, client):
        response = await client.get("/api/admin/orders/999", headers=ADMIN_HEADERS)

        assert response.status_code == 404

    async def test_update_status(self, client, customer_fields):
        order = (await place_order(client, customer_fields)).json()["order"]

        response = await client.put(
            f"/api/admin/orders/{order['id']}/status", json={"status": "Shipped"}, headers=ADMIN_HEADERS
        )

        assert response.status_code == 200
        assert response.json()["status"] == "Shipped"

    async def test_update_status_invalid(self, client, customer_fields):
        order = (await place_order(client, customer_fields)).json()["order"]

        response = await client.put(
            f"/api/admin/orders/{order['id']}/status", json={"status": "Lost"}, headers=ADMIN_HEADERS
        )

        assert response.status_code == 400

    async def test_delete_order(self, client, customer_fields):
        order = (await place_order(client, customer_fields)).json()["order"]

        deleted = await client.delete(f"/api/admin/orders/{order['id']}", headers=ADMIN_HEADERS)
        missing = await client.get(f"/api/admin/orders/{order['id']}", headers=ADMIN_HEADERS)

        assert deleted.status_code == 200
        assert missing.status_code == 404

    async def test_set_and_clear_whatsapp_number(self, client):
        set_response = await client.put(
            "/api/admin/settings/whatsapp", json={"whatsapp_number": " 919876543210 "}, headers=ADMIN_HEADERS
        )
        after_set = await client.get("/api/settings/whatsapp")

        clear_response = await client.put(
            "/api/admin/settings/whatsapp", json={"whatsapp_number": ""}, headers=ADMIN_HEADERS
        )
        after_clear = await client.get("/api/settings/whatsapp")

        assert set_response.json() == {"whatsapp_number": "919876543210"}
        assert after_set.json() == {"whatsapp_number": "919876543210"}
        assert clear_response.json() == {"whatsapp_number": None}
        assert after_clear.json() == {"whatsapp_number": None}
