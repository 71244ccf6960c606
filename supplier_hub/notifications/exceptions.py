class NotificationError(Exception):
    """A single supplier could not be notified."""


class SupplierUnavailable(NotificationError):
    pass


class InvalidSupplierEmail(NotificationError):
    pass


class TransportFailure(NotificationError):
    pass


class LoggingFailure(NotificationError):
    """Writing the email history row failed."""


class InvalidSetting(ValueError):
    def __init__(self, key, message):
        self.key = key
        super().__init__(f"{key}: {message}")
