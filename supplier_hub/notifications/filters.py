import django_filters

from .models import EmailLog


class EmailLogFilter(django_filters.FilterSet):
    order = django_filters.NumberFilter(field_name="order_id")
    supplier = django_filters.NumberFilter(field_name="supplier_id")
    status = django_filters.ChoiceFilter(choices=EmailLog.Status.choices)
    date_from = django_filters.IsoDateTimeFilter(field_name="sent_at", lookup_expr="gte")
    date_to = django_filters.IsoDateTimeFilter(field_name="sent_at", lookup_expr="lte")

    class Meta:
        model = EmailLog
        fields = ["order", "supplier", "status", "date_from", "date_to"]
