"""Read model against real joined rows."""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from freezegun import freeze_time

from modules.orders.models import Order, OrderItem
from modules.orders.read_model import OrderReadModel
from modules.orders.repositories.django_repository import OrderDjangoRepository

pytestmark = pytest.mark.integration


def _order(buyer, *product_names, total="10.00"):
    order = Order.objects.create(
        buyer=buyer,
        total_amount=Decimal(total),
        shipping_address="12 Market St",
    )
    for index, name in enumerate(product_names, start=1):
        OrderItem.objects.create(
            order=order,
            product_id=index,
            product_name=name,
            quantity=1,
            price=Decimal("1.00"),
            subtotal=Decimal("1.00"),
        )
    return order


@pytest.fixture()
def read_model():
    return OrderReadModel(OrderDjangoRepository())


class TestListOrders:
    def test_items_keep_insertion_order(self, read_model, buyer):
        _order(buyer, "A", "B", "C")

        (order,) = read_model.list_orders()

        assert [item.product_name for item in order.items] == ["A", "B", "C"]

    def test_order_without_items_is_listed(self, read_model, buyer):
        empty = _order(buyer)

        (order,) = read_model.list_orders()

        assert order.id == empty.id
        assert order.items == []

    def test_most_recent_first(self, read_model, buyer):
        with freeze_time("2026-01-01 09:00:00"):
            older = _order(buyer, "Old")
        with freeze_time("2026-01-02 09:00:00"):
            newer = _order(buyer, "New")

        orders = read_model.list_orders()

        assert [o.id for o in orders] == [newer.id, older.id]

    def test_includes_buyer_name(self, read_model, buyer):
        _order(buyer, "A")

        (order,) = read_model.list_orders()

        assert order.buyer_name == "buyer"
        assert order.buyer_id == buyer.id

    def test_repeated_reads_are_identical(self, read_model, buyer):
        _order(buyer, "A", "B")
        _order(buyer, "C")

        assert read_model.list_orders() == read_model.list_orders()


class TestListOrdersForBuyer:
    def test_only_that_buyers_orders(self, read_model, buyer):
        other = get_user_model().objects.create_user(username="other", password="x")
        mine = _order(buyer, "A")
        _order(other, "B")

        orders = read_model.list_orders_for_buyer(buyer.id)

        assert [o.id for o in orders] == [mine.id]
        assert orders[0].buyer_name is None

    def test_buyer_without_orders(self, read_model, buyer):
        assert read_model.list_orders_for_buyer(buyer.id) == []
