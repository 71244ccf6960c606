from datetime import timedelta
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase
from django.utils import timezone

from notifications.exceptions import LoggingFailure
from notifications.history import EmailHistory
from notifications.models import EmailLog


def log_row(history, order_id, supplier_id, status=EmailLog.Status.SENT, name="Spice Co"):
    return history.log_email(
        order_id=order_id,
        supplier_id=supplier_id,
        supplier_name=name,
        supplier_email="orders@spice.example",
        recipient_email="orders@spice.example",
        subject=f"New order #{order_id}",
        items_count=1,
        status=status,
    )


def age(row, days):
    EmailLog.objects.filter(pk=row.pk).update(sent_at=timezone.now() - timedelta(days=days))


class EmailHistoryTests(TestCase):

    def setUp(self):
        self.history = EmailHistory()

    def test_log_email(self):
        row = log_row(self.history, 101, 7)

        self.assertEqual(row.order_id, 101)
        self.assertEqual(row.supplier_id, 7)
        self.assertEqual(row.status, EmailLog.Status.SENT)
        self.assertIsNotNone(row.sent_at)

    def test_log_email_database_error(self):
        with mock.patch.object(EmailLog.objects, "create", side_effect=DatabaseError("read-only")):
            with self.assertRaises(LoggingFailure):
                log_row(self.history, 101, 7)

    def test_filters(self):
        log_row(self.history, 101, 7)
        log_row(self.history, 101, 8, status=EmailLog.Status.FAILED)
        log_row(self.history, 102, 7)

        self.assertEqual(self.history.get_total_count(), 3)
        self.assertEqual(self.history.get_total_count(order=101), 2)
        self.assertEqual(self.history.get_total_count(supplier=7), 2)
        self.assertEqual(self.history.get_total_count(status=EmailLog.Status.FAILED), 1)
        self.assertEqual(self.history.get_total_count(order=101, supplier=7), 1)

    def test_date_range(self):
        old = log_row(self.history, 101, 7)
        age(old, 10)
        log_row(self.history, 102, 7)

        since = timezone.now() - timedelta(days=1)
        rows = self.history.get_history(date_from=since)
        self.assertEqual([r.order_id for r in rows], [102])

        until = timezone.now() - timedelta(days=5)
        rows = self.history.get_history(date_to=until)
        self.assertEqual([r.order_id for r in rows], [101])

    def test_paging_and_ordering(self):
        for order_id in (101, 102, 103):
            log_row(self.history, order_id, 7)

        rows = self.history.get_history(limit=2, offset=0, orderby="order_id", order="asc")
        self.assertEqual([r.order_id for r in rows], [101, 102])

        rows = self.history.get_history(limit=2, offset=2, orderby="order_id", order="asc")
        self.assertEqual([r.order_id for r in rows], [103])

        rows = self.history.get_history(orderby="order_id", order="desc")
        self.assertEqual([r.order_id for r in rows], [103, 102, 101])

    def test_unknown_ordering_falls_back_to_newest_first(self):
        first = log_row(self.history, 101, 7)
        age(first, 1)
        log_row(self.history, 102, 7)

        rows = self.history.get_history(orderby="subject; DROP TABLE", order="sideways")
        self.assertEqual([r.order_id for r in rows], [102, 101])

    def test_statistics(self):
        log_row(self.history, 101, 7)
        old = log_row(self.history, 90, 7)
        age(old, 400)
        log_row(self.history, 102, 8, status=EmailLog.Status.FAILED)

        self.assertEqual(self.history.get_statistics(), {
            "total_sent": 2,
            "total_failed": 1,
            "this_month": 1,
            "today": 1,
        })

    def test_cleanup_old_history(self):
        ancient = log_row(self.history, 90, 7)
        age(ancient, 100)
        recent = log_row(self.history, 100, 7)
        age(recent, 10)
        log_row(self.history, 101, 7)

        self.assertEqual(self.history.cleanup_old_history(30), 1)
        self.assertEqual(
            sorted(EmailLog.objects.values_list("order_id", flat=True)), [100, 101]
        )

    def test_cleanup_with_zero_days_removes_everything_already_sent(self):
        row = log_row(self.history, 101, 7)
        age(row, 1)

        self.assertEqual(self.history.cleanup_old_history(0), 1)
        self.assertFalse(EmailLog.objects.exists())
