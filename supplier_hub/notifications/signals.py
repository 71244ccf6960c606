"""
Django signals bridged into the notification event table
"""

from django.db.models.signals import post_save, pre_delete, pre_save
from django.dispatch import receiver

from orders.models import Order
from products.models import Product
from suppliers.models import Supplier
from suppliers.relationships import PRODUCT, SUPPLIER

from .events import ENTITY_DELETED, ORDER_STATUS_CHANGED, events


@receiver(pre_save, sender=Order)
def remember_previous_status(sender, instance, raw=False, **kwargs):
    if raw or instance.pk is None:
        instance._previous_status = None
        return
    instance._previous_status = (
        Order.objects.filter(pk=instance.pk).values_list("status", flat=True).first()
    )


@receiver(post_save, sender=Order)
def handle_order_status_change(sender, instance, created, raw=False, **kwargs):
    if raw:
        return
    old_status = getattr(instance, "_previous_status", None)
    if old_status == instance.status:
        return
    events.emit(
        ORDER_STATUS_CHANGED,
        order=instance,
        old_status=old_status,
        new_status=instance.status,
    )


@receiver(pre_delete, sender=Product)
def handle_product_deleted(sender, instance, **kwargs):
    events.emit(ENTITY_DELETED, kind=PRODUCT, entity_id=instance.pk)


@receiver(pre_delete, sender=Supplier)
def handle_supplier_deleted(sender, instance, **kwargs):
    events.emit(ENTITY_DELETED, kind=SUPPLIER, entity_id=instance.pk)
