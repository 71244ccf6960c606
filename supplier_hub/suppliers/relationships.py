# suppliers/relationships.py
"""
Product <-> supplier relationship store.

Every product can have any number of suppliers and at most one of them is
flagged primary. Arguments accept model instances or primary keys.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass

from django.db import DatabaseError, IntegrityError, transaction

from .exceptions import DuplicateRelationship, TransactionFailure
from .models import ProductSupplier

logger = logging.getLogger(__name__)

PRODUCT = "product"
SUPPLIER = "supplier"


def _pk(obj):
    return obj.pk if hasattr(obj, "pk") else int(obj)


@dataclass
class BulkResult:
    updated: int = 0
    failed: int = 0


class RelationshipStore:

    def add(self, product, supplier, is_primary=False):
        """Assign a supplier to a product and return the new row id.

        Raises DuplicateRelationship when the pair already exists; callers
        that merge assignments should check `exists` first.
        """
        product_id, supplier_id = _pk(product), _pk(supplier)
        try:
            with transaction.atomic():
                if is_primary:
                    self.clear_primary(product_id)
                link = ProductSupplier.objects.create(
                    product_id=product_id,
                    supplier_id=supplier_id,
                    is_primary=bool(is_primary),
                )
        except IntegrityError as exc:
            raise DuplicateRelationship(product_id, supplier_id) from exc
        return link.pk

    def remove(self, product, supplier):
        deleted, _ = ProductSupplier.objects.filter(
            product_id=_pk(product), supplier_id=_pk(supplier)
        ).delete()
        return deleted

    def suppliers_of(self, product):
        return list(
            ProductSupplier.objects.filter(product_id=_pk(product))
            .order_by("-is_primary", "id")
            .values_list("supplier_id", flat=True)
        )

    def products_of(self, supplier):
        return list(
            ProductSupplier.objects.filter(supplier_id=_pk(supplier))
            .order_by("id")
            .values_list("product_id", flat=True)
        )

    def primary_of(self, product):
        return (
            ProductSupplier.objects.filter(product_id=_pk(product), is_primary=True)
            .values_list("supplier_id", flat=True)
            .first()
        )

    def set_primary(self, product, supplier):
        """Flag an already assigned supplier as primary. Returns False if the pair is not assigned."""
        product_id, supplier_id = _pk(product), _pk(supplier)
        with transaction.atomic():
            if not self.exists(product_id, supplier_id):
                return False
            self.clear_primary(product_id)
            updated = ProductSupplier.objects.filter(
                product_id=product_id, supplier_id=supplier_id
            ).update(is_primary=True)
        return updated > 0

    def clear_primary(self, product):
        return ProductSupplier.objects.filter(
            product_id=_pk(product), is_primary=True
        ).update(is_primary=False)

    def replace_all(self, product, suppliers, primary=None):
        """Replace every assignment of a product in one transaction.

        `primary` is ignored unless it is one of `suppliers`. On failure the
        previous assignments are left untouched and False is returned.
        """
        product_id = _pk(product)
        supplier_ids = list(dict.fromkeys(_pk(s) for s in suppliers))
        primary_id = _pk(primary) if primary is not None else None

        try:
            self._replace_rows(product_id, supplier_ids, primary_id)
        except TransactionFailure:
            logger.exception("Supplier update for product #%s rolled back", product_id)
            return False

        logger.info(
            "Product #%s suppliers updated: %d assigned%s",
            product_id,
            len(supplier_ids),
            f" (primary: {primary_id})" if primary_id in supplier_ids else "",
        )
        return True

    def _replace_rows(self, product_id, supplier_ids, primary_id):
        try:
            with transaction.atomic():
                ProductSupplier.objects.filter(product_id=product_id).delete()
                for supplier_id in supplier_ids:
                    ProductSupplier.objects.create(
                        product_id=product_id,
                        supplier_id=supplier_id,
                        is_primary=supplier_id == primary_id,
                    )
        except DatabaseError as exc:
            raise TransactionFailure(
                f"Could not replace the suppliers of product #{product_id}"
            ) from exc

    def remove_all_for_product(self, product):
        deleted, _ = ProductSupplier.objects.filter(product_id=_pk(product)).delete()
        return deleted

    def remove_all_for_supplier(self, supplier):
        deleted, _ = ProductSupplier.objects.filter(supplier_id=_pk(supplier)).delete()
        return deleted

    def exists(self, product, supplier):
        return ProductSupplier.objects.filter(
            product_id=_pk(product), supplier_id=_pk(supplier)
        ).exists()

    def count_for_supplier(self, supplier):
        return ProductSupplier.objects.filter(supplier_id=_pk(supplier)).count()

    def on_entity_deleted(self, kind, entity_id):
        """Drop the assignments of a product or supplier that is being deleted."""
        if kind == PRODUCT:
            removed = self.remove_all_for_product(entity_id)
        elif kind == SUPPLIER:
            removed = self.remove_all_for_supplier(entity_id)
        else:
            raise ValueError(f"Unknown entity kind: {kind!r}")
        if removed:
            logger.info("Removed %d supplier assignment(s) of deleted %s #%s", removed, kind, entity_id)
        return removed

    # Bulk helpers used by the product list screens

    def assign_many(self, products, suppliers, primary=None):
        """Merge suppliers into each product, keeping existing assignments."""
        supplier_ids = list(dict.fromkeys(_pk(s) for s in suppliers))
        primary_id = _pk(primary) if primary is not None else None
        result = BulkResult()

        for product in products:
            product_id = _pk(product)
            try:
                with transaction.atomic():
                    for supplier_id in supplier_ids:
                        is_primary = supplier_id == primary_id
                        if not self.exists(product_id, supplier_id):
                            self.add(product_id, supplier_id, is_primary=is_primary)
                        elif is_primary:
                            self.set_primary(product_id, supplier_id)
            except (DuplicateRelationship, DatabaseError):
                logger.exception("Bulk supplier assignment failed for product #%s", product_id)
                result.failed += 1
            else:
                result.updated += 1
        return result

    def replace_many(self, products, suppliers, primary=None):
        supplier_ids = list(dict.fromkeys(_pk(s) for s in suppliers))
        result = BulkResult()
        for product in products:
            if self.replace_all(product, supplier_ids, primary):
                result.updated += 1
            else:
                result.failed += 1
        return result

    def suppliers_by_product(self, products):
        product_ids = [_pk(p) for p in products]
        mapping = defaultdict(list)
        rows = (
            ProductSupplier.objects.filter(product_id__in=product_ids)
            .order_by("-is_primary", "id")
            .values_list("product_id", "supplier_id")
        )
        for product_id, supplier_id in rows:
            mapping[product_id].append(supplier_id)
        return {product_id: mapping.get(product_id, []) for product_id in product_ids}


relationships = RelationshipStore()
