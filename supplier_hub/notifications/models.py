# notifications/models.py
from django.db import models
from django.utils import timezone


class EmailLog(models.Model):
    """One supplier notification attempt. Rows are never updated."""

    class Status(models.TextChoices):
        SENT = "sent", "Sent"
        FAILED = "failed", "Failed"

    order_id = models.PositiveBigIntegerField()
    supplier_id = models.PositiveBigIntegerField()
    # Snapshots taken at send time
    supplier_name = models.CharField(max_length=255, blank=True)
    supplier_email = models.CharField(max_length=255, blank=True)
    recipient_email = models.CharField(max_length=255, blank=True)
    subject = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.SENT)
    items_count = models.PositiveIntegerField(default=0)
    sent_at = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-sent_at", "-id"]
        indexes = [
            models.Index(fields=["order_id"], name="email_log_order_idx"),
            models.Index(fields=["supplier_id"], name="email_log_supplier_idx"),
            models.Index(fields=["sent_at"], name="email_log_sent_at_idx"),
            models.Index(fields=["status"], name="email_log_status_idx"),
        ]

    def __str__(self):
        return f"Order #{self.order_id} -> {self.supplier_name or self.supplier_id} ({self.status})"


class NotificationSetting(models.Model):
    """Raw option value as entered by an administrator; read through notifications.conf."""
    key = models.CharField(max_length=100, unique=True)
    value = models.TextField(blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["key"]

    def __str__(self):
        return f"{self.key}: {self.value}"
