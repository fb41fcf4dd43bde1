from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid

from apps.products.models import SaleType


class PaymentMethod(models.TextChoices):
    CASH = 'cash', 'Cash'
    ONLINE = 'online', 'Online'
    CREDIT = 'credit', 'Credit'


class Sale(models.Model):
    """
    Authoritative record of one sale to one customer.

    ``total_price`` is always recomputed server-side from the line items.
    The customer's embedded history holds a denormalized copy.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    customer = models.ForeignKey(
        'customers.Customer',
        on_delete=models.PROTECT,
        related_name='sale_records'
    )

    sale_type = models.CharField(max_length=10, choices=SaleType.choices)

    # Financial details
    # Exact sum of quantity (3 dp) * price (2 dp)
    total_price = models.DecimalField(
        max_digits=19,
        decimal_places=5,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    payment_method = models.CharField(max_length=10, choices=PaymentMethod.choices)
    amount_received = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    date = models.DateTimeField(default=timezone.now)

    # Caller-chosen key that makes resubmission return the original sale
    idempotency_key = models.CharField(
        max_length=64,
        unique=True,
        null=True,
        blank=True
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'sales'
        indexes = [
            models.Index(fields=['customer', 'date'], name='sales_customer_date_idx'),
            models.Index(fields=['date'], name='sales_date_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"Sale {self.id} - {self.total_price} ({self.payment_method})"

    @property
    def outstanding_amount(self):
        """Credit delta this sale applied to the customer."""
        return self.total_price - self.amount_received


class SaleLineItem(models.Model):
    """One product line of a sale, with name and price frozen at sale time."""

    sale = models.ForeignKey(
        Sale,
        on_delete=models.CASCADE,
        related_name='line_items'
    )
    product = models.ForeignKey(
        'products.Product',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='sale_line_items'
    )
    # Kept when the product is later renamed, repriced or deleted
    product_ref = models.UUIDField()
    product_name = models.CharField(max_length=200)
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        validators=[MinValueValidator(Decimal('0.000'))]
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'sale_line_items'
        ordering = ['position']

    def __str__(self):
        return f"{self.product_name} x {self.quantity} @ {self.price}"

    @property
    def line_total(self):
        return self.quantity * self.price
