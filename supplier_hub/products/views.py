from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter, OpenApiResponse
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from suppliers.relationships import relationships
from .models import Product
from .serializers import (
    BulkSuppliersSerializer,
    PrimarySupplierSerializer,
    ProductSerializer,
    ProductSuppliersSerializer,
)


@extend_schema_view(
    list=extend_schema(
        tags=["Products"],
        parameters=[OpenApiParameter("supplier", int, description="Only products assigned to this supplier")],
    ),
    retrieve=extend_schema(tags=["Products"]),
    create=extend_schema(tags=["Products"]),
    update=extend_schema(tags=["Products"]),
    partial_update=extend_schema(tags=["Products"]),
    destroy=extend_schema(tags=["Products"]),
)
class ProductViewSet(viewsets.ModelViewSet):
    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ["parent"]
    search_fields = ["name", "sku", "description"]
    ordering_fields = ["price", "created_at", "name"]
    ordering = ["-id"]

    def get_queryset(self):
        qs = super().get_queryset()
        supplier = self.request.query_params.get("supplier")
        if supplier and self.action == "list":
            try:
                product_ids = relationships.products_of(int(supplier))
            except ValueError:
                return qs.none()
            qs = qs.filter(pk__in=product_ids)
        return qs

    @extend_schema(
        tags=["Products"],
        methods=["PUT"],
        request=ProductSuppliersSerializer,
        responses={200: OpenApiResponse(description="Suppliers replaced"), 500: OpenApiResponse(description="Update failed")},
    )
    @extend_schema(tags=["Products"], methods=["GET"])
    @action(detail=True, methods=["get", "put"])
    def suppliers(self, request, pk=None):
        product = self.get_object()
        if request.method == "PUT":
            if product.is_variation:
                return Response(
                    {"detail": "Suppliers are assigned to the parent product, not to variations."},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            serializer = ProductSuppliersSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            ok = relationships.replace_all(
                product,
                serializer.validated_data["suppliers"],
                serializer.validated_data["primary"],
            )
            if not ok:
                return Response(
                    {"detail": "Supplier update failed; previous assignments kept."},
                    status=status.HTTP_500_INTERNAL_SERVER_ERROR,
                )
        return Response(self._assignments(product))

    @extend_schema(tags=["Products"], methods=["POST"], request=PrimarySupplierSerializer)
    @extend_schema(tags=["Products"], methods=["DELETE"], request=None)
    @action(detail=True, methods=["post", "delete"], url_path="suppliers/primary")
    def primary_supplier(self, request, pk=None):
        product = self.get_object()
        if request.method == "DELETE":
            relationships.clear_primary(product)
            return Response(self._assignments(product))

        serializer = PrimarySupplierSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        if not relationships.set_primary(product, serializer.validated_data["supplier"]):
            return Response(
                {"detail": "Supplier is not assigned to this product."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(self._assignments(product))

    @extend_schema(
        tags=["Products"],
        request=BulkSuppliersSerializer,
        responses={200: OpenApiResponse(description="Counts of updated and failed products")},
    )
    @action(detail=False, methods=["post"], url_path="bulk-suppliers")
    def bulk_suppliers(self, request):
        serializer = BulkSuppliersSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        if data["mode"] == BulkSuppliersSerializer.MODE_REPLACE:
            result = relationships.replace_many(data["products"], data["suppliers"], data["primary"])
        else:
            result = relationships.assign_many(data["products"], data["suppliers"], data["primary"])
        return Response({"mode": data["mode"], "updated": result.updated, "failed": result.failed})

    def _assignments(self, product):
        return {
            "product": product.pk,
            "suppliers": relationships.suppliers_of(product),
            "primary": relationships.primary_of(product),
        }
