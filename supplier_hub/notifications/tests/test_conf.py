from django.test import SimpleTestCase, TestCase, override_settings

from notifications.conf import (
    NotificationConfig,
    SettingsProvider,
    parse_bool,
    parse_days,
    parse_status,
)
from notifications.exceptions import InvalidSetting
from notifications.models import NotificationSetting


class ParserTests(SimpleTestCase):

    def test_parse_bool(self):
        for value in (True, 1, "1", "yes", "YES", " on ", "true"):
            self.assertIs(parse_bool(value), True, value)
        for value in (False, 0, "0", "no", "off", "", "false"):
            self.assertIs(parse_bool(value), False, value)
        self.assertIsNone(parse_bool("maybe"))
        self.assertIsNone(parse_bool(None))

    def test_parse_days(self):
        self.assertEqual(parse_days(" 30 "), 30)
        self.assertEqual(parse_days(14), 14)
        self.assertEqual(parse_days("-5"), 0)
        self.assertIsNone(parse_days("ninety"))
        self.assertIsNone(parse_days(None))

    def test_parse_status(self):
        self.assertEqual(parse_status("processing"), "processing")
        self.assertEqual(parse_status("wc-completed"), "completed")
        self.assertEqual(parse_status("On-Hold"), "on_hold")
        self.assertIsNone(parse_status("shipped"))
        self.assertIsNone(parse_status(""))


@override_settings(
    DEFAULT_FROM_EMAIL="shop@store.example",
    SUPPLIER_NOTIFICATIONS={"history_retention_days": 90},
)
class SettingsProviderTests(TestCase):

    def setUp(self):
        self.provider = SettingsProvider()

    def store(self, **values):
        for key, value in values.items():
            NotificationSetting.objects.create(key=key, value=value)

    def test_defaults(self):
        config = self.provider.get()

        self.assertIsInstance(config, NotificationConfig)
        self.assertEqual(config.notification_trigger_status, "processing")
        self.assertTrue(config.notifications_enabled)
        self.assertTrue(config.enable_history)
        self.assertTrue(config.bcc_admin)
        self.assertEqual(config.admin_email, "shop@store.example")
        self.assertEqual(config.history_retention_days, 90)
        self.assertEqual(config.email_subject, "New order #{order_number} from {site_title}")

    @override_settings(SUPPLIER_NOTIFICATIONS={"bcc_admin": "no", "history_retention_days": "30"})
    def test_settings_module_defaults_are_normalised(self):
        config = self.provider.get()
        self.assertFalse(config.bcc_admin)
        self.assertEqual(config.history_retention_days, 30)

    def test_stored_values_override_defaults(self):
        self.store(
            notifications_enabled="0",
            bcc_admin="yes",
            history_retention_days=" 45 ",
            notification_trigger_status="wc-completed",
            admin_email="  owner@store.example ",
            email_heading="Order for {supplier_name}",
        )

        config = self.provider.get()

        self.assertFalse(config.notifications_enabled)
        self.assertTrue(config.bcc_admin)
        self.assertEqual(config.history_retention_days, 45)
        self.assertEqual(config.notification_trigger_status, "completed")
        self.assertEqual(config.admin_email, "owner@store.example")
        self.assertEqual(config.email_heading, "Order for {supplier_name}")

    def test_unreadable_stored_values_fall_back_to_defaults(self):
        self.store(enable_history="perhaps", history_retention_days="a while", notification_trigger_status="shipped")

        config = self.provider.get()

        self.assertTrue(config.enable_history)
        self.assertEqual(config.history_retention_days, 90)
        self.assertEqual(config.notification_trigger_status, "processing")

    def test_unknown_rows_are_ignored(self):
        self.store(legacy_option="1")
        self.assertFalse(hasattr(self.provider.get(), "legacy_option"))

    def test_update_stores_normalised_values(self):
        config = self.provider.update(bcc_admin=False, history_retention_days="14", notification_trigger_status="wc-on-hold")

        self.assertFalse(config.bcc_admin)
        self.assertEqual(config.history_retention_days, 14)
        self.assertEqual(config.notification_trigger_status, "on_hold")
        self.assertEqual(NotificationSetting.objects.get(key="bcc_admin").value, "0")
        self.assertEqual(NotificationSetting.objects.get(key="notification_trigger_status").value, "on_hold")

    def test_update_overwrites_existing_row(self):
        self.provider.update(email_subject="First")
        self.provider.update(email_subject="Second")

        self.assertEqual(NotificationSetting.objects.filter(key="email_subject").count(), 1)
        self.assertEqual(self.provider.get().email_subject, "Second")

    def test_update_rejects_bad_values(self):
        cases = {
            "notifications_enabled": "sometimes",
            "history_retention_days": "forever",
            "notification_trigger_status": "shipped",
            "admin_email": "not-an-address",
        }
        for key, value in cases.items():
            with self.assertRaises(InvalidSetting) as ctx:
                self.provider.update(**{key: value})
            self.assertEqual(ctx.exception.key, key)
        self.assertFalse(NotificationSetting.objects.exists())

    def test_update_rejects_unknown_key(self):
        with self.assertRaises(InvalidSetting):
            self.provider.update(colour="blue")
