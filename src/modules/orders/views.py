"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.buyers.exceptions import BuyerNotFound
from modules.buyers.repositories.django_repository import BuyerDjangoRepository
from modules.core.pagination import StandardResultsSetPagination
from modules.orders.config import OrderingConfig
from modules.orders.constants import OrderStatus
from modules.orders.dtos import OrderHeaderDTO
from modules.orders.exceptions import (
    OrderNotFound,
    OrderValidationError,
    OrderWriteFailed,
    ReadModelError,
    StockLookupFailed,
    StockRejected,
)
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository


def build_order_service(config: OrderingConfig | None = None) -> OrderService:
    config = config or OrderingConfig.from_settings()
    alias = config.database_alias
    return OrderService(
        order_repository=OrderDjangoRepository(using=alias),
        buyer_repository=BuyerDjangoRepository(using=alias),
        product_repository=ProductDjangoRepository(using=alias),
        config=config,
    )


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.all()
    pagination_class = StandardResultsSetPagination

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_order_service()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        try:
            order = self._service.place_order(request.data)
        except OrderValidationError as exc:
            return Response(
                {"detail": exc.message, "field": exc.field},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except BuyerNotFound:
            return Response(
                {"detail": "Buyer not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        except StockRejected as exc:
            return Response(
                {
                    "detail": "Insufficient stock for some products.",
                    "insufficientStock": [item.to_payload() for item in exc.items],
                },
                status=status.HTTP_409_CONFLICT,
            )
        except StockLookupFailed:
            return Response(
                {"detail": "Stock could not be verified. Please retry."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        except OrderWriteFailed as exc:
            conflict = exc.conflict
            if conflict is not None:
                return Response(
                    {
                        "detail": "Stock changed while placing the order. "
                        "Transaction rolled back.",
                        "insufficientStock": [
                            {
                                "productId": conflict.product_id,
                                "productName": conflict.product_name,
                                "requestedQuantity": conflict.quantity,
                            }
                        ],
                    },
                    status=status.HTTP_409_CONFLICT,
                )
            return Response(
                {"detail": "Failed to create order. Transaction rolled back."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        out = OrderHeaderDTO.from_entity(order)
        return Response(
            out.model_dump(mode="json", by_alias=True),
            status=status.HTTP_201_CREATED,
        )

    # ------------------------------------------------------------------
    # List
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/"""
        try:
            orders = self._service.list_orders()
        except ReadModelError:
            return Response(
                {"detail": "Failed to retrieve orders."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return self._paginated(request, orders)

    @action(detail=False, methods=["get"], url_path=r"buyer/(?P<buyer_id>\d+)")
    def by_buyer(self, request: Request, buyer_id: str) -> Response:
        """GET /api/v1/orders/buyer/{buyer_id}/"""
        try:
            orders = self._service.list_orders_for_buyer(int(buyer_id))
        except BuyerNotFound:
            return Response(
                {"detail": "Buyer not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        except ReadModelError:
            return Response(
                {"detail": "Failed to retrieve buyer orders."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return self._paginated(request, orders)

    # ------------------------------------------------------------------
    # Payment confirmation
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"], url_path="mark-paid")
    def mark_paid(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/mark-paid/"""
        try:
            order_id = int(pk or "")
        except ValueError:
            return Response(
                {"detail": "Invalid order ID format."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        try:
            self._service.mark_order_paid(order_id)
        except OrderNotFound:
            return Response(
                {"detail": "Order not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response({"id": order_id, "orderStatus": OrderStatus.PAID.value})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _paginated(self, request: Request, orders) -> Response:
        page = self.paginate_queryset(orders)
        data = [order.model_dump(mode="json", by_alias=True) for order in page]
        return self.get_paginated_response(data)
