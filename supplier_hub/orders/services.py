# orders/services.py
from dataclasses import dataclass

from .models import Order


@dataclass(frozen=True)
class LineItem:
    item_id: int
    product_id: int | None  # owning (parent) product
    quantity: int
    display_name: str
    sku: str


class OrderProvider:
    """Order lookups in the shape the supplier notifications need."""

    def get_order(self, order_id):
        return Order.objects.filter(pk=order_id).first()

    def line_items(self, order):
        items = order.items.select_related("product").order_by("id")
        for item in items:
            product = item.product
            yield LineItem(
                item_id=item.pk,
                product_id=product.owning_product_id if product else None,
                quantity=item.quantity,
                display_name=item.display_name,
                sku=item.sku or (product.sku if product else ""),
            )
