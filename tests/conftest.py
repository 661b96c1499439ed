from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from rest_framework.test import APIClient

from modules.orders.config import OrderingConfig
from modules.orders.views import build_order_service
from modules.products.models import Product


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def buyer():
    return get_user_model().objects.create_user(
        username="buyer", password="testpass123"
    )


@pytest.fixture()
def auth_client(buyer):
    """APIClient with a force-authenticated buyer."""
    client = APIClient()
    client.force_authenticate(user=buyer)
    return client


@pytest.fixture()
def make_product():
    def _make(title="Widget", stock=10, price=Decimal("10.00"), sales=0):
        return Product.objects.create(
            title=title, stock=stock, price=price, sales=sales
        )

    return _make


@pytest.fixture()
def order_payload():
    """Build a consistent wire payload from ``(product, quantity)`` pairs."""

    def _build(buyer_id, lines, shipping_fee=Decimal("5.00"), address="12 Market St"):
        items = [
            {
                "productId": product.id,
                "productName": product.title,
                "quantity": quantity,
                "price": str(product.price),
                "subtotal": str(Decimal(product.price) * quantity),
            }
            for product, quantity in lines
        ]
        total = sum((Decimal(item["subtotal"]) for item in items), shipping_fee)
        return {
            "userId": buyer_id,
            "totalAmount": str(total),
            "shippingFee": str(shipping_fee),
            "shippingAddress": address,
            "orderItems": items,
        }

    return _build


@pytest.fixture()
def order_service():
    return build_order_service(OrderingConfig())
