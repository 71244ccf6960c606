# notifications/dispatcher.py
"""
Supplier order notifications.

For one order: work out which suppliers carry which line items, then send
each supplier one email listing its items. Every attempt is written to the
email history (when enabled). Problems with one supplier never stop the
others and are never raised to the caller.
"""
import logging
from dataclasses import dataclass, field

from orders.services import OrderProvider
from suppliers.directory import SupplierDirectory
from suppliers.relationships import RelationshipStore

from .conf import SettingsProvider, is_valid_email
from .emails import render_supplier_email
from .exceptions import (
    InvalidSupplierEmail,
    LoggingFailure,
    SupplierUnavailable,
    TransportFailure,
)
from .history import EmailHistory
from .models import EmailLog
from .transport import MailTransport

logger = logging.getLogger(__name__)


@dataclass
class SupplierOutcome:
    supplier_id: int
    recipient: str
    status: str
    items_count: int
    reason: str = ""


@dataclass
class DispatchResult:
    order_id: int
    outcomes: list = field(default_factory=list)

    @property
    def sent(self):
        return sum(1 for o in self.outcomes if o.status == EmailLog.Status.SENT)

    @property
    def failed(self):
        return sum(1 for o in self.outcomes if o.status == EmailLog.Status.FAILED)


class NotificationDispatcher:

    def __init__(self, relationships=None, suppliers=None, orders=None,
                 transport=None, settings_provider=None, history=None):
        self.relationships = relationships or RelationshipStore()
        self.suppliers = suppliers or SupplierDirectory()
        self.orders = orders or OrderProvider()
        self.transport = transport or MailTransport()
        self.settings_provider = settings_provider or SettingsProvider()
        self.history = history or EmailHistory()

    def group_items(self, order):
        """Map supplier id -> line items, in the order suppliers are first met.

        An item whose product has several suppliers goes into each bundle.
        """
        bundles = {}
        for item in self.orders.line_items(order):
            if item.product_id is None:
                continue
            for supplier_id in self.relationships.suppliers_of(item.product_id):
                bundle = bundles.setdefault(supplier_id, {})
                bundle.setdefault(item.item_id, item)
        return {supplier_id: list(items.values()) for supplier_id, items in bundles.items()}

    def dispatch(self, order, config=None):
        config = config or self.settings_provider.get()
        result = DispatchResult(order_id=order.pk)

        bundles = self.group_items(order)
        if not bundles:
            logger.debug("Order #%s has no products with assigned suppliers", order.pk)
            return result

        for supplier_id, items in bundles.items():
            result.outcomes.append(self._notify_supplier(order, supplier_id, items, config))

        logger.info(
            "Supplier notifications for order #%s: %d sent, %d failed",
            order.pk, result.sent, result.failed,
        )
        return result

    def dispatch_order_id(self, order_id, config=None):
        order = self.orders.get_order(order_id)
        if order is None:
            logger.warning("Cannot notify suppliers: order #%s not found", order_id)
            return None
        return self.dispatch(order, config=config)

    def _notify_supplier(self, order, supplier_id, items, config):
        contact = self.suppliers.get_supplier(supplier_id)
        name = contact.name if contact else ""
        email = contact.email if contact else ""
        subject = ""
        bcc = []

        try:
            rendered = render_supplier_email(config, order, name, items)
            subject = rendered.subject
            self._check_contact(supplier_id, contact)
            bcc = self._bcc_for(config, email)
            delivered = self.transport.send(
                email,
                rendered.subject,
                rendered.text_body,
                headers=self._headers_for(config),
                bcc=bcc,
                html_body=rendered.html_body,
            )
            if not delivered:
                raise TransportFailure(f"Mail transport rejected message to {email}")
        except (SupplierUnavailable, InvalidSupplierEmail) as exc:
            logger.warning("Not notifying supplier #%s for order #%s: %s", supplier_id, order.pk, exc)
            status, reason = EmailLog.Status.FAILED, str(exc)
        except TransportFailure as exc:
            logger.error(
                "Failed to send supplier notification to %s (%s) for order #%s",
                name, email, order.pk,
            )
            status, reason = EmailLog.Status.FAILED, str(exc)
        except Exception as exc:
            # Contained per supplier; the remaining suppliers are still notified.
            logger.exception(
                "Unexpected error notifying supplier #%s (%s) for order #%s",
                supplier_id, email, order.pk,
            )
            status, reason = EmailLog.Status.FAILED, f"{type(exc).__name__}: {exc}"
        else:
            status, reason = EmailLog.Status.SENT, ""
            logger.info(
                "Supplier notification sent to %s (%s) for order #%s%s",
                name, email, order.pk, f" (BCC: {', '.join(bcc)})" if bcc else "",
            )

        if config.enable_history:
            self._record(order, supplier_id, name, email, subject, len(items), status)

        return SupplierOutcome(
            supplier_id=supplier_id,
            recipient=email,
            status=status,
            items_count=len(items),
            reason=reason,
        )

    def _check_contact(self, supplier_id, contact):
        if contact is None:
            raise SupplierUnavailable(f"supplier #{supplier_id} does not exist")
        if not contact.is_published:
            raise SupplierUnavailable(f"supplier #{supplier_id} ({contact.name}) is not published")
        if not is_valid_email(contact.email):
            raise InvalidSupplierEmail(
                f"invalid email {contact.email!r} for supplier #{supplier_id} ({contact.name})"
            )

    def _bcc_for(self, config, supplier_email):
        admin_email = config.admin_email
        if not config.bcc_admin or not is_valid_email(admin_email):
            return []
        if admin_email.lower() == supplier_email.lower():
            return []
        return [admin_email]

    def _headers_for(self, config):
        if is_valid_email(config.admin_email):
            return {"Reply-To": config.admin_email}
        return {}

    def _record(self, order, supplier_id, name, email, subject, items_count, status):
        try:
            self.history.log_email(
                order_id=order.pk,
                supplier_id=supplier_id,
                supplier_name=name,
                supplier_email=email,
                recipient_email=email,
                subject=subject,
                items_count=items_count,
                status=status,
            )
        except LoggingFailure:
            logger.exception("Failed to log email to history for order #%s", order.pk)
