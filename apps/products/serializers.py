from rest_framework import serializers
from .models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Product output; pricePerKg is always server-derived."""

    productName = serializers.CharField(source='product_name')
    pricePerPack = serializers.DecimalField(source='price_per_pack', max_digits=12, decimal_places=2)
    kgsPerPack = serializers.DecimalField(source='kgs_per_pack', max_digits=10, decimal_places=3)
    pricePerKg = serializers.DecimalField(source='price_per_kg', max_digits=12, decimal_places=2, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Product
        fields = [
            'id',
            'productName',
            'pricePerPack',
            'kgsPerPack',
            'pricePerKg',
            'createdAt',
        ]
        read_only_fields = fields


class ProductInputSerializer(serializers.Serializer):
    """
    Validate product create/update input.

    Pricing rules (kgsPerPack > 0) are enforced by the service so they
    surface as ``invalid_product``. A caller-supplied pricePerKg is ignored.
    """

    productName = serializers.CharField(source='product_name', max_length=200)
    pricePerPack = serializers.DecimalField(source='price_per_pack', max_digits=12, decimal_places=2)
    kgsPerPack = serializers.DecimalField(source='kgs_per_pack', max_digits=10, decimal_places=3)
