from django.db import models
from django.utils import timezone
from decimal import Decimal
import uuid


class Customer(models.Model):
    """
    Customer account with a running credit balance.

    ``credit`` is signed: positive means the customer owes the business,
    negative means the business owes the customer. ``credit``,
    ``last_purchase`` and ``sales`` are only changed by the ledger service,
    history reconciliation or a direct credit adjustment.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    contact = models.CharField(max_length=100)

    # Ledger state
    credit = models.DecimalField(
        max_digits=19,
        decimal_places=5,
        default=Decimal('0.00')
    )
    join_date = models.DateTimeField(default=timezone.now)
    last_purchase = models.DateTimeField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customers'
        indexes = [
            models.Index(fields=['name'], name='customers_name_idx'),
            models.Index(fields=['last_purchase'], name='customers_last_purchase_idx'),
            models.Index(fields=['credit'], name='customers_credit_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.credit})"


class CustomerSaleEntry(models.Model):
    """
    Denormalized summary of one sale, embedded in the customer's history.

    The standalone ``sales.Sale`` record is authoritative; these rows exist
    for per-customer history display and can be rebuilt from it. Entries are
    append-only and ordered by insertion.
    """

    customer = models.ForeignKey(
        Customer,
        on_delete=models.CASCADE,
        related_name='sales'
    )
    sale_id = models.UUIDField(unique=True)
    sale_type = models.CharField(max_length=10)
    # Frozen line items: [{productId, productName, quantity, price}]
    products = models.JSONField(default=list)
    total_price = models.DecimalField(max_digits=19, decimal_places=5)
    payment_method = models.CharField(max_length=10)
    amount_received = models.DecimalField(max_digits=14, decimal_places=2)
    date = models.DateTimeField()

    class Meta:
        db_table = 'customer_sale_entries'
        ordering = ['id']

    def __str__(self):
        return f"{self.customer_id} - {self.total_price} on {self.date:%Y-%m-%d}"
