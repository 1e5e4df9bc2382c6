"""Tests for the HTTP surface."""

import httpx
import pytest
from fastapi.testclient import TestClient

from storefront.core.config import settings
from storefront.core.session import session_manager
from storefront.main import app
from storefront.models.checkout import CheckoutState
from storefront.routes.dependencies import get_catalog_client

from .conftest import make_client, make_product

FORM = {"name": "Ada Lovelace", "email": "ada@example.com", "address": "12 Analytical St"}


@pytest.fixture
def api(catalog, monkeypatch):
    monkeypatch.setattr(settings, "checkout_success_delay", 0)
    client = make_client(catalog)
    app.dependency_overrides[get_catalog_client] = lambda: client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def session_id(api):
    response = api.post("/api/sessions")
    assert response.status_code == 201
    return response.json()["session_id"]


def _add(api, session_id, product_id):
    return api.post(f"/api/sessions/{session_id}/cart/items", json={"product_id": product_id})


class TestProducts:
    def test_list_products(self, api):
        response = api.get("/api/products", params={"sort": "newest", "limit": 20})
        assert response.status_code == 200
        body = response.json()
        assert [p["_id"] for p in body["products"]] == ["p1", "p2"]
        assert body["meta"]["total"] == 2

    def test_invalid_sort_rejected(self, api):
        assert api.get("/api/products", params={"sort": "cheapest"}).status_code == 422

    def test_get_missing_product(self, api):
        assert api.get("/api/products/zzz").status_code == 404

    def test_catalog_outage_is_bad_gateway(self):
        def handler(request):
            raise httpx.ConnectError("refused")

        client = make_client(handler)
        app.dependency_overrides[get_catalog_client] = lambda: client
        try:
            response = TestClient(app).get("/api/products/search", params={"term": "mouse"})
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == 502


class TestCart:
    def test_add_twice_gives_one_line(self, api, session_id):
        _add(api, session_id, "p1")
        body = _add(api, session_id, "p1").json()

        assert len(body["items"]) == 1
        assert body["items"][0]["quantity"] == 2
        assert body["item_count"] == 2
        assert body["subtotal"] == 20.0
        assert body["subtotal_display"] == "$20.00"

    def test_update_and_remove(self, api, session_id):
        _add(api, session_id, "p1")
        _add(api, session_id, "p2")

        body = api.put(f"/api/sessions/{session_id}/cart/items/p2", json={"quantity": 4}).json()
        assert body["subtotal"] == 110.0

        body = api.put(f"/api/sessions/{session_id}/cart/items/p2", json={"quantity": 0}).json()
        assert [line["product"]["_id"] for line in body["items"]] == ["p1"]

        body = api.delete(f"/api/sessions/{session_id}/cart/items/p1").json()
        assert body["items"] == []
        assert api.delete(f"/api/sessions/{session_id}/cart/items/p1").status_code == 200

    def test_add_unknown_product(self, api, session_id):
        assert _add(api, session_id, "nope").status_code == 404

    def test_panels(self, api, session_id):
        body = api.post(f"/api/sessions/{session_id}/cart/panel/toggle").json()
        assert body["cart_open"] is True
        body = api.post(f"/api/sessions/{session_id}/checkout/panel/open").json()
        assert body["checkout_open"] is True
        assert api.post(f"/api/sessions/{session_id}/cart/panel/spin").status_code == 404

    def test_add_with_quantity(self, api, session_id):
        response = api.post(
            f"/api/sessions/{session_id}/cart/items",
            json={"product_id": "p2", "quantity": 3},
        )

        body = response.json()
        assert body["items"][0]["quantity"] == 3
        assert body["subtotal"] == 75.0
        assert body["cart_open"] is False

    def test_buy_now_opens_cart(self, api, session_id):
        body = api.post(
            f"/api/sessions/{session_id}/cart/items",
            json={"product_id": "p1", "open_cart": True},
        ).json()

        assert body["item_count"] == 1
        assert body["cart_open"] is True

    def test_quantity_must_be_positive(self, api, session_id):
        response = api.post(
            f"/api/sessions/{session_id}/cart/items",
            json={"product_id": "p1", "quantity": 0},
        )
        assert response.status_code == 422

    def test_out_of_stock_product_refused(self, api, session_id, catalog):
        sold_out = make_product("p3", inStock=False)
        catalog.products[sold_out.id] = sold_out

        response = _add(api, session_id, "p3")

        assert response.status_code == 409
        assert "out of stock" in response.json()["detail"]
        assert api.get(f"/api/sessions/{session_id}/cart").json()["items"] == []

    @pytest.mark.parametrize("state", [CheckoutState.SUBMITTING, CheckoutState.SUCCESS])
    def test_cart_locked_during_checkout(self, api, session_id, monkeypatch, state):
        _add(api, session_id, "p1")
        session = session_manager.get_session(session_id)
        monkeypatch.setattr(session.checkout, "_state", state)
        cart_url = f"/api/sessions/{session_id}/cart"

        assert _add(api, session_id, "p2").status_code == 409
        assert api.put(f"{cart_url}/items/p1", json={"quantity": 5}).status_code == 409
        assert api.delete(f"{cart_url}/items/p1").status_code == 409
        assert api.delete(cart_url).status_code == 409

        body = api.get(cart_url).json()
        assert body["checkout_state"] == state.value
        assert [(line["product"]["_id"], line["quantity"]) for line in body["items"]] == [("p1", 1)]

    def test_unknown_session(self, api):
        assert api.get("/api/sessions/missing/cart").status_code == 404


class TestCheckout:
    def test_successful_checkout_empties_cart(self, api, session_id, catalog):
        _add(api, session_id, "p2")
        api.put(f"/api/sessions/{session_id}/cart/items/p2", json={"quantity": 3})
        api.post(f"/api/sessions/{session_id}/checkout/panel/open")

        response = api.post(f"/api/sessions/{session_id}/checkout", json=FORM)

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert catalog.order_bodies[0]["items"] == [{"productId": "p2", "quantity": 3}]
        cart = api.get(f"/api/sessions/{session_id}/cart").json()
        assert cart["items"] == []
        assert cart["subtotal"] == 0.0
        assert cart["checkout_open"] is False
        assert cart["checkout_state"] == "idle"

    def test_invalid_form_names_fields(self, api, session_id, catalog):
        _add(api, session_id, "p1")

        response = api.post(f"/api/sessions/{session_id}/checkout", json=dict(FORM, name=""))

        assert response.status_code == 422
        assert response.json()["detail"]["fields"] == ["name"]
        assert catalog.order_bodies == []

    def test_failed_order_keeps_cart(self, api, session_id, catalog):
        catalog.order_status = 500
        _add(api, session_id, "p1")
        api.post(f"/api/sessions/{session_id}/checkout/panel/open")

        response = api.post(f"/api/sessions/{session_id}/checkout", json=FORM)

        assert response.status_code == 502
        cart = api.get(f"/api/sessions/{session_id}/cart").json()
        assert len(cart["items"]) == 1
        assert cart["checkout_open"] is True


def test_health(api):
    assert api.get("/health").json()["status"] == "healthy"
