# orders/models.py
from django.db import models
from django.utils import timezone
from products.models import Product
from decimal import Decimal


class Order(models.Model):
    class Status(models.TextChoices):
        CREATED = "created", "Created"
        PAYMENT_PENDING = "payment_pending", "Payment Pending"
        PROCESSING = "processing", "Processing"
        ON_HOLD = "on_hold", "On Hold"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"
        REFUNDED = "refunded", "Refunded"
        FAILED = "failed", "Failed"

    customer_name = models.CharField(max_length=200, blank=True)
    customer_email = models.EmailField(blank=True)

    total_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.CREATED)
    ordered_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-ordered_at", "-id"]

    def __str__(self):
        return f"Order #{self.order_number}"

    @property
    def order_number(self):
        return str(self.pk)


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    # Kept after the product is removed so history still renders.
    product = models.ForeignKey(Product, on_delete=models.SET_NULL, null=True, blank=True)
    product_name = models.CharField(max_length=255, blank=True)
    sku = models.CharField(max_length=100, blank=True)
    quantity = models.PositiveIntegerField(default=1)

    unit_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    total_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.display_name} x {self.quantity}"

    @property
    def display_name(self):
        if self.product_name:
            return self.product_name
        return self.product.name if self.product else ""

    def save(self, *args, **kwargs):
        if self.product is not None:
            self.product_name = self.product_name or self.product.name
            self.sku = self.sku or self.product.sku
        self.total_price = self.unit_price * self.quantity
        super().save(*args, **kwargs)
