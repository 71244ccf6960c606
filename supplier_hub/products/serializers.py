from rest_framework import serializers

from suppliers.models import Supplier
from suppliers.relationships import relationships
from .models import Product


class ProductSerializer(serializers.ModelSerializer):
    suppliers = serializers.SerializerMethodField()
    primary_supplier = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id", "name", "sku", "description", "price", "stock", "parent",
            "suppliers", "primary_supplier", "created_at",
        ]
        read_only_fields = ["created_at"]

    def get_suppliers(self, obj):
        return relationships.suppliers_of(obj)

    def get_primary_supplier(self, obj):
        return relationships.primary_of(obj)

    def validate_parent(self, parent):
        if parent is not None and parent.parent_id is not None:
            raise serializers.ValidationError("A variation cannot be the parent of another product.")
        return parent


class ProductSuppliersSerializer(serializers.Serializer):
    suppliers = serializers.PrimaryKeyRelatedField(queryset=Supplier.objects.all(), many=True)
    primary = serializers.PrimaryKeyRelatedField(
        queryset=Supplier.objects.all(), allow_null=True, required=False, default=None
    )


class PrimarySupplierSerializer(serializers.Serializer):
    supplier = serializers.PrimaryKeyRelatedField(queryset=Supplier.objects.all())


class BulkSuppliersSerializer(serializers.Serializer):
    MODE_ADD = "add"
    MODE_REPLACE = "replace"

    products = serializers.PrimaryKeyRelatedField(
        queryset=Product.objects.filter(parent__isnull=True), many=True, allow_empty=False
    )
    suppliers = serializers.PrimaryKeyRelatedField(queryset=Supplier.objects.all(), many=True)
    primary = serializers.PrimaryKeyRelatedField(
        queryset=Supplier.objects.all(), allow_null=True, required=False, default=None
    )
    mode = serializers.ChoiceField(choices=[MODE_ADD, MODE_REPLACE], default=MODE_ADD)

    def validate(self, attrs):
        if attrs["mode"] == self.MODE_ADD and not attrs["suppliers"]:
            raise serializers.ValidationError({"suppliers": "Select at least one supplier to add."})
        return attrs
