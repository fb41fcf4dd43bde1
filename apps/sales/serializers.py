from rest_framework import serializers
from apps.common.fields import MoneyField
from apps.customers.serializers import CustomerSerializer
from apps.products.models import SaleType
from .models import Sale, SaleLineItem, PaymentMethod


# =============================================================================
# Input Serializers
# =============================================================================

class SaleLineItemInputSerializer(serializers.Serializer):
    """One requested product line. ``price`` defaults to the product's current price."""

    productId = serializers.UUIDField(source='product_id')
    quantity = serializers.DecimalField(max_digits=12, decimal_places=3)
    price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        required=False,
        allow_null=True
    )


class SaleCreateSerializer(serializers.Serializer):
    """
    Validate the shape of a sale submission.

    Range checks (quantity > 0, amounts >= 0, known products) are enforced by
    ``record_sale``. Client-sent ``totalPrice`` or ``updatedCredit`` values are
    ignored; both are computed server-side.
    """

    customerId = serializers.UUIDField(source='customer_id')
    saleType = serializers.ChoiceField(source='sale_type', choices=SaleType.choices)
    products = SaleLineItemInputSerializer(many=True, allow_empty=True)
    paymentMethod = serializers.ChoiceField(source='payment_method', choices=PaymentMethod.choices)
    amountReceived = serializers.DecimalField(source='amount_received', max_digits=14, decimal_places=2)
    date = serializers.DateTimeField(required=False, allow_null=True)


class SaleFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for sale listing.

    Query Parameters:
        customer (UUID): Only sales of this customer
    """

    customer = serializers.UUIDField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class SaleLineItemSerializer(serializers.ModelSerializer):
    productId = serializers.UUIDField(source='product_ref', read_only=True)
    productName = serializers.CharField(source='product_name', read_only=True)

    class Meta:
        model = SaleLineItem
        fields = ['productId', 'productName', 'quantity', 'price']
        read_only_fields = fields


class SaleSerializer(serializers.ModelSerializer):
    """Authoritative sale record."""

    customerId = serializers.UUIDField(source='customer_id', read_only=True)
    saleType = serializers.CharField(source='sale_type', read_only=True)
    products = SaleLineItemSerializer(source='line_items', many=True, read_only=True)
    totalPrice = MoneyField(source='total_price')
    paymentMethod = serializers.CharField(source='payment_method', read_only=True)
    amountReceived = serializers.DecimalField(source='amount_received', max_digits=14, decimal_places=2, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Sale
        fields = [
            'id',
            'customerId',
            'saleType',
            'products',
            'totalPrice',
            'paymentMethod',
            'amountReceived',
            'date',
            'createdAt',
        ]
        read_only_fields = fields


class SaleRecordedSerializer(serializers.Serializer):
    """Response of a recorded sale: the sale and the updated customer."""

    sale = SaleSerializer(read_only=True)
    customer = CustomerSerializer(read_only=True)
