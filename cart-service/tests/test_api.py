"""
Tests for the cart HTTP API
"""

from decimal import Decimal

SESSION = {"X-Session-Id": "session-1"}


def money(value):
    return Decimal(str(value))


def add_product(client, product_id, headers=SESSION):
    return client.post("/api/v1/cart/items", json={"product_id": product_id}, headers=headers)


class TestRoot:
    """Tests for service endpoints."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["endpoints"]["cart"] == "/api/v1/cart"


class TestCartEndpoints:
    """Tests for /api/v1/cart."""

    def test_empty_cart(self, client):
        response = client.get("/api/v1/cart", headers=SESSION)

        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert money(data["payable"]) == 0

    def test_add_item(self, client, mock_events):
        response = add_product(client, 1)

        assert response.status_code == 200
        data = response.json()
        assert len(data["items"]) == 1
        assert data["items"][0]["name"] == "Dune"
        assert data["items"][0]["source_id"] == "1"
        assert money(data["subtotal"]) == Decimal("10.00")
        assert money(data["tax"]) == Decimal("1.00")
        assert money(data["payable"]) == Decimal("11.00")
        mock_events.publish_event.assert_awaited()

    def test_add_same_product_twice(self, client):
        add_product(client, 1)
        response = add_product(client, 1)

        data = response.json()
        assert len(data["items"]) == 1
        assert data["items"][0]["quantity"] == 2
        assert data["id"] is not None

    def test_unknown_product(self, client):
        response = add_product(client, 404)

        assert response.status_code == 404

    def test_product_without_price(self, client):
        response = add_product(client, 3)

        assert response.status_code == 422
        assert client.get("/api/v1/cart", headers=SESSION).json()["items"] == []

    def test_product_with_negative_price(self, client):
        response = add_product(client, 4)

        assert response.status_code == 422
        assert client.get("/api/v1/cart", headers=SESSION).json()["items"] == []

    def test_source_id_shape_is_stable(self, client):
        """A fresh add and a reloaded item serialize source_id the same way."""
        first = add_product(client, 1).json()
        second = add_product(client, 2).json()

        assert first["items"][0]["source_id"] == second["items"][0]["source_id"] == "1"

    def test_quantity_changes(self, client):
        add_product(client, 1)
        add_product(client, 2)

        data = client.post("/api/v1/cart/items/1/increment", headers=SESSION).json()
        assert data["items"][1]["quantity"] == 2
        assert money(data["subtotal"]) == Decimal("20.00")

        data = client.post("/api/v1/cart/items/0/decrement", headers=SESSION).json()
        assert [item["name"] for item in data["items"]] == ["Lamp"]

    def test_remove_item(self, client):
        add_product(client, 1)
        add_product(client, 2)

        response = client.delete("/api/v1/cart/items/0", headers=SESSION)

        assert response.status_code == 200
        assert [item["name"] for item in response.json()["items"]] == ["Lamp"]

    def test_index_out_of_range(self, client):
        add_product(client, 1)

        assert client.delete("/api/v1/cart/items/3", headers=SESSION).status_code == 404
        assert client.post("/api/v1/cart/items/3/increment", headers=SESSION).status_code == 404
        assert client.post("/api/v1/cart/items/3/decrement", headers=SESSION).status_code == 404

    def test_clear_cart(self, client, mock_events):
        add_product(client, 1)
        add_product(client, 2)

        response = client.delete("/api/v1/cart", headers=SESSION)

        assert response.status_code == 200
        assert response.json()["items"] == []
        assert money(response.json()["total"]) == 0
        event_types = [c.kwargs["event_type"] for c in mock_events.publish_event.await_args_list]
        assert event_types[-1] == "cart_cleared"

    def test_sessions_are_isolated(self, client):
        add_product(client, 1)
        add_product(client, 2, headers={"X-Session-Id": "session-2"})

        first = client.get("/api/v1/cart", headers=SESSION).json()
        second = client.get("/api/v1/cart", headers={"X-Session-Id": "session-2"}).json()

        assert [item["name"] for item in first["items"]] == ["Dune"]
        assert [item["name"] for item in second["items"]] == ["Lamp"]
