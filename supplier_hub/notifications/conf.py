# notifications/conf.py
"""
Notification options.

Values come from settings.SUPPLIER_NOTIFICATIONS, overridden by rows in
NotificationSetting. Whatever was stored ("1", "yes", True, " 30 "...) is
normalised here; the rest of the app only ever sees NotificationConfig.
"""
from dataclasses import asdict, dataclass, fields

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from orders.models import Order
from .exceptions import InvalidSetting
from .models import NotificationSetting

TRUE_VALUES = {"1", "yes", "y", "true", "on"}
FALSE_VALUES = {"0", "no", "n", "false", "off", ""}


@dataclass(frozen=True)
class NotificationConfig:
    notification_trigger_status: str = Order.Status.PROCESSING.value
    notifications_enabled: bool = True
    enable_history: bool = True
    bcc_admin: bool = True
    admin_email: str = ""
    history_retention_days: int = 90
    email_subject: str = "New order #{order_number} from {site_title}"
    email_heading: str = "New Order Notification"
    additional_content: str = ""


KEYS = tuple(f.name for f in fields(NotificationConfig))
BOOLEAN_KEYS = {"notifications_enabled", "enable_history", "bcc_admin"}
INTEGER_KEYS = {"history_retention_days"}


def parse_bool(value):
    """Return True/False for anything that looks like a checkbox value, None otherwise."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if value is None:
        return None
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    return None


def parse_days(value):
    try:
        days = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return max(days, 0)


def parse_status(value):
    text = str(value or "").strip().lower()
    if text.startswith("wc-"):
        text = text[3:]
    text = text.replace("-", "_")
    return text if text in Order.Status.values else None


def is_valid_email(value):
    if not value:
        return False
    try:
        validate_email(value)
    except ValidationError:
        return False
    return True


class SettingsProvider:

    def defaults(self):
        values = asdict(NotificationConfig(admin_email=getattr(settings, "DEFAULT_FROM_EMAIL", "")))
        values.update(
            {k: v for k, v in getattr(settings, "SUPPLIER_NOTIFICATIONS", {}).items() if k in KEYS}
        )
        return values

    def raw(self):
        values = self.defaults()
        for key, value in NotificationSetting.objects.filter(key__in=KEYS).values_list("key", "value"):
            values[key] = value
        return values

    def get(self):
        defaults = self.defaults()
        normalized = {}
        for key, value in self.raw().items():
            normalized[key] = self._normalize(key, value, defaults[key])
        return NotificationConfig(**normalized)

    def update(self, **values):
        """Validate and store option values, then return the resulting config."""
        unknown = set(values) - set(KEYS)
        if unknown:
            raise InvalidSetting(sorted(unknown)[0], "unknown setting")

        cleaned = {key: self._clean(key, value) for key, value in values.items()}
        for key, value in cleaned.items():
            NotificationSetting.objects.update_or_create(key=key, defaults={"value": value})
        return self.get()

    def _normalize(self, key, value, default):
        if key in BOOLEAN_KEYS:
            parsed = parse_bool(value)
            return parse_bool(default) if parsed is None else parsed
        if key in INTEGER_KEYS:
            parsed = parse_days(value)
            return parse_days(default) if parsed is None else parsed
        if key == "notification_trigger_status":
            return parse_status(value) or parse_status(default) or Order.Status.PROCESSING.value
        if key == "admin_email":
            return str(value or "").strip()
        return "" if value is None else str(value)

    def _clean(self, key, value):
        if key in BOOLEAN_KEYS:
            parsed = parse_bool(value)
            if parsed is None:
                raise InvalidSetting(key, "expected a yes/no value")
            return "1" if parsed else "0"
        if key in INTEGER_KEYS:
            parsed = parse_days(value)
            if parsed is None:
                raise InvalidSetting(key, "expected a whole number of days")
            return str(parsed)
        if key == "notification_trigger_status":
            parsed = parse_status(value)
            if parsed is None:
                raise InvalidSetting(key, f"unknown order status {value!r}")
            return parsed
        if key == "admin_email":
            email = str(value or "").strip()
            if email and not is_valid_email(email):
                raise InvalidSetting(key, "not a valid email address")
            return email
        return "" if value is None else str(value)
