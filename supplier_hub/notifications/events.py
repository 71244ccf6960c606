# notifications/events.py
"""
Explicit event table.

Handlers are plain (event_name, callable) pairs kept in registration order;
`emit` calls every handler registered for the name and returns their results.
The table is filled once in NotificationsConfig.ready().
"""
import logging

logger = logging.getLogger(__name__)

ORDER_STATUS_CHANGED = "order_status_changed"
NOTIFY_SUPPLIERS_REQUESTED = "notify_suppliers_requested"
ENTITY_DELETED = "entity_deleted"
HISTORY_CLEANUP = "history_cleanup"

EVENT_NAMES = (
    ORDER_STATUS_CHANGED,
    NOTIFY_SUPPLIERS_REQUESTED,
    ENTITY_DELETED,
    HISTORY_CLEANUP,
)


class EventTable:

    def __init__(self, handlers=()):
        self._handlers = []
        self.load(handlers)

    def register(self, event_name, handler):
        if event_name not in EVENT_NAMES:
            raise ValueError(f"Unknown event: {event_name!r}")
        self._handlers.append((event_name, handler))

    def load(self, handlers):
        self._handlers = []
        for event_name, handler in handlers:
            self.register(event_name, handler)

    def handlers_for(self, event_name):
        return [handler for name, handler in self._handlers if name == event_name]

    def emit(self, event_name, **payload):
        handlers = self.handlers_for(event_name)
        logger.debug("Event %s -> %d handler(s)", event_name, len(handlers))
        return [handler(**payload) for handler in handlers]


events = EventTable()
