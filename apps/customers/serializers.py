from rest_framework import serializers
from apps.common.fields import MoneyField
from .credit import SORT_CHOICES, latest_purchase_date
from .models import Customer, CustomerSaleEntry


# =============================================================================
# Input Serializers
# =============================================================================

class CustomerFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for customer listing.

    Query Parameters:
        search (str): Case-insensitive name search
        sort (str): recent | oldest | credit
    """

    search = serializers.CharField(required=False, allow_blank=True, max_length=200)
    sort = serializers.ChoiceField(choices=SORT_CHOICES, required=False, allow_blank=True)


class CustomerCreateSerializer(serializers.Serializer):
    """Validate input for creating a customer."""

    name = serializers.CharField(max_length=200)
    contact = serializers.CharField(max_length=100)
    credit = serializers.DecimalField(max_digits=14, decimal_places=2)
    joinDate = serializers.DateTimeField(source='join_date', required=False, allow_null=True)


class CreditAdjustmentSerializer(serializers.Serializer):
    """Validate input for a direct credit adjustment."""

    amount = serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        help_text="Signed amount added to credit; negative records a repayment."
    )


# =============================================================================
# Output Serializers
# =============================================================================

class CustomerSaleEntrySerializer(serializers.ModelSerializer):
    """Embedded sale summary in a customer's history."""

    saleId = serializers.UUIDField(source='sale_id')
    saleType = serializers.CharField(source='sale_type')
    totalPrice = MoneyField(source='total_price')
    paymentMethod = serializers.CharField(source='payment_method')
    amountReceived = serializers.DecimalField(source='amount_received', max_digits=14, decimal_places=2)

    class Meta:
        model = CustomerSaleEntry
        fields = [
            'saleId',
            'saleType',
            'products',
            'totalPrice',
            'paymentMethod',
            'amountReceived',
            'date',
        ]
        read_only_fields = fields


class CustomerListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    credit = MoneyField()
    joinDate = serializers.DateTimeField(source='join_date', read_only=True)
    lastPurchase = serializers.DateTimeField(source='last_purchase', read_only=True)
    latestPurchase = serializers.SerializerMethodField()
    salesCount = serializers.SerializerMethodField()

    class Meta:
        model = Customer
        fields = [
            'id',
            'name',
            'contact',
            'credit',
            'joinDate',
            'lastPurchase',
            'latestPurchase',
            'salesCount',
        ]
        read_only_fields = fields

    def get_latestPurchase(self, obj):
        latest = latest_purchase_date(obj)
        return serializers.DateTimeField().to_representation(latest) if latest else None

    def get_salesCount(self, obj):
        return len(obj.sales.all())


class CustomerSerializer(CustomerListSerializer):
    """Full customer including the embedded sales history."""

    sales = CustomerSaleEntrySerializer(many=True, read_only=True)

    class Meta(CustomerListSerializer.Meta):
        fields = CustomerListSerializer.Meta.fields + ['sales']
        read_only_fields = fields
