from rest_framework import viewsets, status
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from .models import Product
from .serializers import ProductSerializer, ProductInputSerializer
from .services import (
    create_product,
    update_product,
    delete_product,
)


class ProductViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Product CRUD operations.

    list: Get all products
    create: Create a product (pricePerKg derived server-side)
    retrieve: Get a specific product
    update: Update a product (pricePerKg re-derived)
    partial_update: Partially update a product
    destroy: Delete a product (recorded sales keep their frozen copy)
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_queryset(self):
        """Filter products by case-insensitive name search."""
        queryset = super().get_queryset()
        search = self.request.query_params.get('search')
        if search:
            queryset = queryset.filter(product_name__icontains=search)
        return queryset

    @extend_schema(request=ProductInputSerializer, responses={201: ProductSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new product."""
        serializer = ProductInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = create_product(**serializer.validated_data)

        return Response(
            ProductSerializer(product).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(request=ProductInputSerializer, responses={200: ProductSerializer})
    def update(self, request, *args, **kwargs):
        """Update a product; partial updates accept any subset of fields."""
        partial = kwargs.pop('partial', False)
        serializer = ProductInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        product = update_product(
            product_id=kwargs.get('pk'),
            data=serializer.validated_data,
        )

        return Response(ProductSerializer(product).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a product."""
        delete_product(product_id=kwargs.get('pk'))
        return Response(status=status.HTTP_204_NO_CONTENT)
