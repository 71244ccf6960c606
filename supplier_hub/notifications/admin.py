from django.contrib import admin
from .models import EmailLog, NotificationSetting


@admin.register(EmailLog)
class EmailLogAdmin(admin.ModelAdmin):
    list_display = ("sent_at", "order_id", "supplier_name", "recipient_email", "status", "items_count")
    list_filter = ("status", "sent_at")
    search_fields = ("order_id", "supplier_name", "recipient_email", "subject")
    date_hierarchy = "sent_at"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(NotificationSetting)
class NotificationSettingAdmin(admin.ModelAdmin):
    list_display = ("key", "value", "updated_at")
    search_fields = ("key",)
