from rest_framework import serializers

from .models import Supplier
from .relationships import relationships


class SupplierSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(allow_blank=True, required=False)
    products_count = serializers.SerializerMethodField()

    class Meta:
        model = Supplier
        fields = [
            "id", "name", "email", "telephone", "address", "contact_person",
            "website", "notes", "is_published", "products_count",
            "created_at", "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def get_products_count(self, obj):
        return relationships.count_for_supplier(obj)
