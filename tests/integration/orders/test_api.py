"""HTTP contract of the order endpoints."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch

import pytest

from modules.orders.exceptions import ReadModelError, StockLookupFailed
from modules.orders.models import Order

pytestmark = pytest.mark.integration

ORDERS_URL = "/api/v1/orders/"


class TestCreateOrder:
    def test_created(self, auth_client, buyer, make_product, order_payload):
        product = make_product(stock=4)

        response = auth_client.post(
            ORDERS_URL, order_payload(buyer.id, [(product, 2)]), format="json"
        )

        assert response.status_code == 201
        data = response.json()
        assert data["userId"] == buyer.id
        assert data["orderStatus"] == "pending"
        assert Decimal(data["totalAmount"]) == Decimal("25.00")
        assert Order.objects.filter(pk=data["id"]).exists()
        product.refresh_from_db()
        assert product.stock == 2

    def test_validation_error(self, auth_client, buyer, make_product, order_payload):
        product = make_product()
        payload = order_payload(buyer.id, [(product, 1)])
        payload["totalAmount"] = "999.00"

        response = auth_client.post(ORDERS_URL, payload, format="json")

        assert response.status_code == 400
        assert response.json()["field"] == "totalAmount"

    def test_oversized_amount_is_rejected_and_history_stays_readable(
        self, auth_client, buyer, make_product, order_payload
    ):
        product = make_product(stock=4)
        payload = order_payload(buyer.id, [(product, 1)])
        payload["orderItems"][0]["price"] = "12345678901234.00"
        payload["orderItems"][0]["subtotal"] = "12345678901234.00"

        response = auth_client.post(ORDERS_URL, payload, format="json")

        assert response.status_code == 400
        assert response.json()["field"] == "orderItems.0.price"
        assert Order.objects.count() == 0
        assert auth_client.get(ORDERS_URL).status_code == 200

    def test_boolean_buyer_is_rejected(
        self, auth_client, buyer, make_product, order_payload
    ):
        product = make_product()
        payload = order_payload(buyer.id, [(product, 1)])
        payload["userId"] = True

        response = auth_client.post(ORDERS_URL, payload, format="json")

        assert response.status_code == 400
        assert response.json()["field"] == "userId"

    def test_non_object_body(self, auth_client):
        response = auth_client.post(ORDERS_URL, [1, 2], format="json")

        assert response.status_code == 400
        assert response.json()["field"] == "body"

    def test_unknown_buyer(self, auth_client, make_product, order_payload):
        product = make_product()

        response = auth_client.post(
            ORDERS_URL, order_payload(777_777, [(product, 1)]), format="json"
        )

        assert response.status_code == 404

    def test_insufficient_stock(self, auth_client, buyer, make_product, order_payload):
        product = make_product(title="Rare", stock=1)

        response = auth_client.post(
            ORDERS_URL, order_payload(buyer.id, [(product, 2)]), format="json"
        )

        assert response.status_code == 409
        (item,) = response.json()["insufficientStock"]
        assert item["productId"] == product.id
        assert item["productName"] == "Rare"
        assert item["availableStock"] == 1
        assert item["requestedQuantity"] == 2
        assert item["error"] == "Insufficient stock. Available: 1, Requested: 2"
        assert Order.objects.count() == 0

    def test_stock_lookup_failure(self, auth_client, buyer, make_product, order_payload):
        product = make_product()

        with patch(
            "modules.orders.reconciliation.StockReconciliationEngine.reconcile",
            side_effect=StockLookupFailed("down"),
        ):
            response = auth_client.post(
                ORDERS_URL, order_payload(buyer.id, [(product, 1)]), format="json"
            )

        assert response.status_code == 503


class TestListOrders:
    def test_lists_orders_with_items(self, auth_client, buyer, make_product, order_payload):
        first = make_product(title="First")
        second = make_product(title="Second")
        auth_client.post(
            ORDERS_URL,
            order_payload(buyer.id, [(first, 1), (second, 2)]),
            format="json",
        )

        response = auth_client.get(ORDERS_URL)

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        (order,) = body["results"]
        assert order["buyerName"] == "buyer"
        assert [i["productName"] for i in order["orderItems"]] == ["First", "Second"]

    def test_read_failure(self, auth_client):
        with patch(
            "modules.orders.services.OrderService.list_orders",
            side_effect=ReadModelError("down"),
        ):
            response = auth_client.get(ORDERS_URL)

        assert response.status_code == 503


class TestBuyerOrders:
    def test_buyer_orders(self, auth_client, buyer, make_product, order_payload):
        product = make_product()
        auth_client.post(
            ORDERS_URL, order_payload(buyer.id, [(product, 1)]), format="json"
        )

        response = auth_client.get(f"{ORDERS_URL}buyer/{buyer.id}/")

        assert response.status_code == 200
        (order,) = response.json()["results"]
        assert order["userId"] == buyer.id
        assert order["buyerName"] is None

    def test_buyer_with_no_orders(self, auth_client, buyer):
        response = auth_client.get(f"{ORDERS_URL}buyer/{buyer.id}/")

        assert response.status_code == 200
        assert response.json()["results"] == []

    def test_unknown_buyer(self, auth_client):
        response = auth_client.get(f"{ORDERS_URL}buyer/555555/")

        assert response.status_code == 404


class TestMarkPaid:
    def test_marks_pending_order_paid(self, auth_client, buyer, make_product, order_payload):
        product = make_product()
        created = auth_client.post(
            ORDERS_URL, order_payload(buyer.id, [(product, 1)]), format="json"
        ).json()

        response = auth_client.post(f"{ORDERS_URL}{created['id']}/mark-paid/")

        assert response.status_code == 200
        assert response.json() == {"id": created["id"], "orderStatus": "paid"}
        assert Order.objects.get(pk=created["id"]).status == "paid"

    def test_is_idempotent(self, auth_client, buyer, make_product, order_payload):
        product = make_product()
        created = auth_client.post(
            ORDERS_URL, order_payload(buyer.id, [(product, 1)]), format="json"
        ).json()

        auth_client.post(f"{ORDERS_URL}{created['id']}/mark-paid/")
        response = auth_client.post(f"{ORDERS_URL}{created['id']}/mark-paid/")

        assert response.status_code == 200

    def test_unknown_order(self, auth_client):
        response = auth_client.post(f"{ORDERS_URL}987654/mark-paid/")

        assert response.status_code == 404
