# orders/views.py
from dataclasses import asdict
import logging
from drf_spectacular.utils import extend_schema_view, extend_schema, OpenApiResponse
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from notifications.events import NOTIFY_SUPPLIERS_REQUESTED, events
from .models import Order
from .serializers import NotifyResultSerializer, OrderSerializer

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(tags=["Orders"]),
    retrieve=extend_schema(tags=["Orders"]),
    create=extend_schema(tags=["Orders"]),
    update=extend_schema(tags=["Orders"]),
    partial_update=extend_schema(tags=["Orders"]),
    destroy=extend_schema(tags=["Orders"]),
)
class OrderViewSet(viewsets.ModelViewSet):
    """
    Orders as seen from the back office. Moving an order into the configured
    status notifies its suppliers.
    """
    lookup_value_regex = r"\d+"  # only numeric IDs for <pk>
    serializer_class = OrderSerializer
    queryset = Order.objects.prefetch_related("items").order_by("-ordered_at", "-id")
    filterset_fields = ["status"]

    @extend_schema(
        tags=["Orders"],
        request=None,
        responses={
            200: NotifyResultSerializer,
            409: OpenApiResponse(description="Supplier notifications are disabled"),
        },
    )
    @action(detail=True, methods=["post"], url_path="notify-suppliers")
    def notify_suppliers(self, request, pk=None):
        order = self.get_object()
        results = [r for r in events.emit(NOTIFY_SUPPLIERS_REQUESTED, order=order) if r is not None]
        if not results:
            return Response(
                {"detail": "Supplier notifications are disabled."},
                status=status.HTTP_409_CONFLICT,
            )

        result = results[0]
        logger.info("Manual supplier notification for order #%s by %s", order.pk, request.user)
        return Response({
            "order_id": order.pk,
            "sent": result.sent,
            "failed": result.failed,
            "outcomes": [asdict(o) for o in result.outcomes],
        })
