# suppliers/models.py
from django.db import models


class Supplier(models.Model):
    name = models.CharField(max_length=200)
    # Free text; an empty or malformed address is reported at send time.
    email = models.CharField(max_length=254, blank=True)
    telephone = models.CharField(max_length=30, blank=True)
    address = models.TextField(blank=True)
    contact_person = models.CharField(max_length=120, blank=True)
    website = models.URLField(blank=True)
    notes = models.TextField(blank=True)
    is_published = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name", "id"]

    def __str__(self):
        return self.name


class ProductSupplier(models.Model):
    """
    One product <-> supplier assignment.

    The foreign keys are plain references: rows are removed explicitly by
    RelationshipStore.on_entity_deleted when either side goes away.
    """
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="supplier_links",
    )
    supplier = models.ForeignKey(
        Supplier,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="product_links",
    )
    is_primary = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["product", "supplier"], name="product_supplier_unique"),
            models.UniqueConstraint(
                fields=["product"],
                condition=models.Q(is_primary=True),
                name="product_single_primary",
            ),
        ]
        indexes = [
            models.Index(fields=["is_primary"], name="product_supplier_primary_idx"),
        ]

    def __str__(self):
        flag = " (primary)" if self.is_primary else ""
        return f"Product #{self.product_id} -> Supplier #{self.supplier_id}{flag}"
