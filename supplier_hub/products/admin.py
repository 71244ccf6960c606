# products/admin.py
from django.contrib import admin
from suppliers.models import Supplier
from suppliers.relationships import relationships
from .models import Product


class SupplierListFilter(admin.SimpleListFilter):
    title = "supplier"
    parameter_name = "supplier_id"

    def lookups(self, request, model_admin):
        return [(s.pk, s.name) for s in Supplier.objects.all()]

    def queryset(self, request, queryset):
        if not self.value():
            return queryset
        return queryset.filter(pk__in=relationships.products_of(int(self.value())))


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "sku", "price", "stock", "parent", "supplier_names")
    list_editable = ("price", "stock")
    list_filter = (SupplierListFilter,)
    search_fields = ("name", "sku")

    @admin.display(description="Suppliers")
    def supplier_names(self, obj):
        supplier_ids = relationships.suppliers_of(obj)
        if not supplier_ids:
            return "-"
        names = Supplier.objects.in_bulk(supplier_ids)
        return ", ".join(names[sid].name for sid in supplier_ids if sid in names)
