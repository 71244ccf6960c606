# suppliers/directory.py
from dataclasses import dataclass

from .models import Supplier


@dataclass(frozen=True)
class SupplierContact:
    id: int
    name: str
    email: str
    is_published: bool


class SupplierDirectory:
    """Read-only lookup of supplier contact details."""

    def get_supplier(self, supplier_id):
        supplier = (
            Supplier.objects.filter(pk=supplier_id)
            .only("id", "name", "email", "is_published")
            .first()
        )
        if supplier is None:
            return None
        return SupplierContact(
            id=supplier.pk,
            name=supplier.name,
            email=(supplier.email or "").strip(),
            is_published=supplier.is_published,
        )
