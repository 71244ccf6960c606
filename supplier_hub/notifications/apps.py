from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"

    def ready(self):
        from . import signals  # noqa: F401
        from .events import events
        from .handlers import DEFAULT_HANDLERS

        events.load(DEFAULT_HANDLERS)
