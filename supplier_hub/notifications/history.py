# notifications/history.py
import logging
from datetime import timedelta

from django.db import DatabaseError, transaction
from django.utils import timezone

from .exceptions import LoggingFailure
from .models import EmailLog

logger = logging.getLogger(__name__)

ALLOWED_ORDERING = ("id", "order_id", "supplier_name", "sent_at", "status")


class EmailHistory:
    """Append-only record of supplier notification attempts."""

    def log_email(self, *, order_id, supplier_id, supplier_name, supplier_email,
                  recipient_email, subject, items_count, status=EmailLog.Status.SENT):
        now = timezone.now()
        try:
            with transaction.atomic():
                return EmailLog.objects.create(
                    order_id=order_id,
                    supplier_id=supplier_id,
                    supplier_name=supplier_name or "",
                    supplier_email=supplier_email or "",
                    recipient_email=recipient_email or "",
                    subject=subject or "",
                    status=status,
                    items_count=items_count,
                    sent_at=now,
                )
        except DatabaseError as exc:
            raise LoggingFailure(
                f"Could not record email for order #{order_id} / supplier #{supplier_id}"
            ) from exc

    def filter(self, order=None, supplier=None, status=None, date_from=None, date_to=None):
        qs = EmailLog.objects.all()
        if order:
            qs = qs.filter(order_id=order)
        if supplier:
            qs = qs.filter(supplier_id=supplier)
        if status:
            qs = qs.filter(status=status)
        if date_from:
            qs = qs.filter(sent_at__gte=date_from)
        if date_to:
            qs = qs.filter(sent_at__lte=date_to)
        return qs

    def get_history(self, limit=20, offset=0, orderby="sent_at", order="desc", **filters):
        field = orderby if orderby in ALLOWED_ORDERING else "sent_at"
        prefix = "" if str(order).lower() == "asc" else "-"
        qs = self.filter(**filters).order_by(f"{prefix}{field}", f"{prefix}id")
        return list(qs[offset:offset + limit])

    def get_total_count(self, **filters):
        return self.filter(**filters).count()

    def get_statistics(self):
        now = timezone.localtime()
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        day_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        sent = EmailLog.objects.filter(status=EmailLog.Status.SENT)
        return {
            "total_sent": sent.count(),
            "total_failed": EmailLog.objects.filter(status=EmailLog.Status.FAILED).count(),
            "this_month": sent.filter(sent_at__gte=month_start).count(),
            "today": sent.filter(sent_at__gte=day_start).count(),
        }

    def cleanup_old_history(self, days):
        """Delete rows sent more than `days` days ago. Returns the number removed."""
        cutoff = timezone.now() - timedelta(days=int(days))
        deleted, _ = EmailLog.objects.filter(sent_at__lt=cutoff).delete()
        logger.info("Email history cleanup removed %d row(s) older than %d day(s)", deleted, days)
        return deleted
