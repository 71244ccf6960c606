# notifications/views.py
from dataclasses import asdict

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from .conf import SettingsProvider
from .exceptions import InvalidSetting
from .filters import EmailLogFilter
from .history import ALLOWED_ORDERING, EmailHistory
from .models import EmailLog
from .serializers import (
    EmailLogSerializer,
    EmailStatisticsSerializer,
    NotificationSettingsSerializer,
)


@extend_schema_view(
    list=extend_schema(tags=["Notifications"], summary="Supplier email history"),
    retrieve=extend_schema(tags=["Notifications"]),
)
class EmailLogViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = EmailLog.objects.all()
    serializer_class = EmailLogSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = EmailLogFilter
    ordering_fields = list(ALLOWED_ORDERING)
    ordering = ["-sent_at", "-id"]

    @extend_schema(tags=["Notifications"], responses=EmailStatisticsSerializer)
    @action(detail=False, methods=["get"])
    def statistics(self, request):
        return Response(EmailHistory().get_statistics())


class NotificationSettingsView(APIView):

    @extend_schema(tags=["Notifications"], responses=NotificationSettingsSerializer)
    def get(self, request):
        return Response(asdict(SettingsProvider().get()))

    @extend_schema(
        tags=["Notifications"],
        request=NotificationSettingsSerializer,
        responses=NotificationSettingsSerializer,
    )
    def patch(self, request):
        serializer = NotificationSettingsSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            config = SettingsProvider().update(**serializer.validated_data)
        except InvalidSetting as exc:
            return Response({exc.key: [str(exc)]}, status=status.HTTP_400_BAD_REQUEST)
        return Response(asdict(config))
