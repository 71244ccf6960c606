# notifications/emails.py
from dataclasses import dataclass

from django.conf import settings
from django.template.loader import render_to_string
from django.utils import formats, timezone

TEXT_TEMPLATE = "notifications/email/supplier_notification.txt"
HTML_TEMPLATE = "notifications/email/supplier_notification.html"


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    heading: str
    text_body: str
    html_body: str


def fill_placeholders(text, values):
    for key, value in values.items():
        text = text.replace("{" + key + "}", str(value))
    return text


def render_supplier_email(config, order, supplier_name, items):
    """Build the subject and bodies for one supplier's share of an order."""
    placeholders = {
        "site_title": getattr(settings, "SITE_NAME", ""),
        "order_number": order.order_number,
        "order_date": formats.date_format(timezone.localtime(order.ordered_at), "DATE_FORMAT"),
        "supplier_name": supplier_name,
    }
    subject = fill_placeholders(config.email_subject, placeholders)
    heading = fill_placeholders(config.email_heading, placeholders)

    context = {
        "order": order,
        "order_number": placeholders["order_number"],
        "order_date": placeholders["order_date"],
        "heading": heading,
        "supplier_name": supplier_name,
        "items": items,
        "additional_content": fill_placeholders(config.additional_content, placeholders),
        "contact_email": config.admin_email or settings.DEFAULT_FROM_EMAIL,
        "site_title": placeholders["site_title"],
    }
    return RenderedEmail(
        subject=" ".join(subject.split()),
        heading=heading,
        text_body=render_to_string(TEXT_TEMPLATE, context),
        html_body=render_to_string(HTML_TEMPLATE, context),
    )
