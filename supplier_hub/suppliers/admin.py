from django.contrib import admin
from .models import Supplier, ProductSupplier
from .relationships import relationships


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ['name', 'email', 'telephone', 'contact_person', 'is_published', 'products_count']
    list_filter = ['is_published']
    search_fields = ['name', 'email', 'contact_person']
    readonly_fields = ['created_at', 'updated_at']

    @admin.display(description='Products')
    def products_count(self, obj):
        return relationships.count_for_supplier(obj)


@admin.register(ProductSupplier)
class ProductSupplierAdmin(admin.ModelAdmin):
    list_display = ['id', 'product', 'supplier', 'is_primary', 'created_at']
    list_filter = ['is_primary', 'supplier']
    search_fields = ['product__name', 'supplier__name']
    readonly_fields = ['product', 'supplier', 'is_primary', 'created_at']

    def has_add_permission(self, request):
        # Assignments are managed from the product suppliers endpoints.
        return False
