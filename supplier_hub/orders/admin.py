# orders/admin.py
from django.contrib import admin, messages
from notifications.events import NOTIFY_SUPPLIERS_REQUESTED, events
from .models import Order, OrderItem


@admin.action(description="Notify suppliers")
def notify_suppliers(modeladmin, request, queryset):
    """Send supplier emails for the selected orders and report the totals."""
    sent = failed = skipped = 0
    for order in queryset:
        results = [r for r in events.emit(NOTIFY_SUPPLIERS_REQUESTED, order=order) if r is not None]
        if not results:
            skipped += 1
            continue
        sent += results[0].sent
        failed += results[0].failed

    if skipped:
        modeladmin.message_user(
            request, "Supplier notifications are disabled.", level=messages.WARNING
        )
        return
    level = messages.SUCCESS if not failed else messages.WARNING
    modeladmin.message_user(
        request, f"Supplier emails: {sent} sent, {failed} failed.", level=level
    )


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("product", "product_name", "sku", "quantity", "unit_price", "total_price")
    readonly_fields = ("total_price",)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "customer_name", "total_price", "status", "ordered_at")
    list_filter = ("status",)
    search_fields = ("id", "customer_name", "customer_email")
    inlines = [OrderItemInline]
    actions = [notify_suppliers]


@admin.register(OrderItem)
class OrderItemAdmin(admin.ModelAdmin):
    list_display = ("id", "order", "product_name", "sku", "quantity", "unit_price", "total_price")
    list_filter = ("order__status",)
    search_fields = ("order__id", "product_name", "sku")
