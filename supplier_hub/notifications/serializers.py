from rest_framework import serializers

from .models import EmailLog


class EmailLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = EmailLog
        fields = [
            "id", "order_id", "supplier_id", "supplier_name", "supplier_email",
            "recipient_email", "subject", "status", "items_count", "sent_at", "created_at",
        ]
        read_only_fields = fields


class EmailStatisticsSerializer(serializers.Serializer):
    total_sent = serializers.IntegerField()
    total_failed = serializers.IntegerField()
    this_month = serializers.IntegerField()
    today = serializers.IntegerField()


class NotificationSettingsSerializer(serializers.Serializer):
    notification_trigger_status = serializers.CharField(required=False)
    notifications_enabled = serializers.BooleanField(required=False)
    enable_history = serializers.BooleanField(required=False)
    bcc_admin = serializers.BooleanField(required=False)
    admin_email = serializers.CharField(required=False, allow_blank=True)
    history_retention_days = serializers.IntegerField(required=False, min_value=0)
    email_subject = serializers.CharField(required=False)
    email_heading = serializers.CharField(required=False)
    additional_content = serializers.CharField(required=False, allow_blank=True)
