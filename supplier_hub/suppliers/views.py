# suppliers/views.py
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import filters, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from products.models import Product
from products.serializers import ProductSerializer
from .models import Supplier
from .relationships import relationships
from .serializers import SupplierSerializer


@extend_schema_view(
    list=extend_schema(tags=["Suppliers"]),
    retrieve=extend_schema(tags=["Suppliers"]),
    create=extend_schema(tags=["Suppliers"]),
    update=extend_schema(tags=["Suppliers"]),
    partial_update=extend_schema(tags=["Suppliers"]),
    destroy=extend_schema(tags=["Suppliers"]),
)
class SupplierViewSet(viewsets.ModelViewSet):
    queryset = Supplier.objects.all()
    serializer_class = SupplierSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ["is_published"]
    search_fields = ["name", "email", "contact_person"]
    ordering_fields = ["name", "created_at"]
    ordering = ["name"]

    @extend_schema(tags=["Suppliers"], responses=ProductSerializer(many=True))
    @action(detail=True, methods=["get"])
    def products(self, request, pk=None):
        supplier = self.get_object()
        product_ids = relationships.products_of(supplier)
        by_id = Product.objects.in_bulk(product_ids)
        products = [by_id[pid] for pid in product_ids if pid in by_id]
        return Response(ProductSerializer(products, many=True).data)
