# notifications/handlers.py
import logging

from suppliers.relationships import relationships

from .conf import SettingsProvider
from .dispatcher import NotificationDispatcher
from .events import (
    ENTITY_DELETED,
    HISTORY_CLEANUP,
    NOTIFY_SUPPLIERS_REQUESTED,
    ORDER_STATUS_CHANGED,
)
from .history import EmailHistory

logger = logging.getLogger(__name__)


def on_order_status_changed(order, old_status, new_status):
    config = SettingsProvider().get()
    if not config.notifications_enabled:
        return None
    if new_status == old_status or new_status != config.notification_trigger_status:
        return None
    logger.info("Order #%s moved %s -> %s, notifying suppliers", order.pk, old_status, new_status)
    return NotificationDispatcher().dispatch(order, config=config)


def on_notify_suppliers_requested(order):
    config = SettingsProvider().get()
    if not config.notifications_enabled:
        logger.info("Supplier notifications are disabled; order #%s not sent", order.pk)
        return None
    return NotificationDispatcher().dispatch(order, config=config)


def on_entity_deleted(kind, entity_id):
    return relationships.on_entity_deleted(kind, entity_id)


def on_history_cleanup(days=None):
    if days is None:
        days = SettingsProvider().get().history_retention_days
    return EmailHistory().cleanup_old_history(days)


DEFAULT_HANDLERS = (
    (ORDER_STATUS_CHANGED, on_order_status_changed),
    (NOTIFY_SUPPLIERS_REQUESTED, on_notify_suppliers_requested),
    (ENTITY_DELETED, on_entity_deleted),
    (HISTORY_CLEANUP, on_history_cleanup),
)
