from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class SaleType(models.TextChoices):
    """Which product price a sale is quoted in."""
    KG = 'kg', 'Per kg'
    PACK = 'pack', 'Per pack'


class Product(models.Model):
    """Catalogue product sold by the pack or by weight."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product_name = models.CharField(max_length=200)

    # Pricing
    price_per_pack = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    kgs_per_pack = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        validators=[MinValueValidator(Decimal('0.001'))]
    )
    # Derived from price_per_pack / kgs_per_pack, never set by callers
    price_per_kg = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        editable=False
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        indexes = [
            models.Index(fields=['product_name'], name='products_name_idx'),
        ]
        ordering = ['product_name']

    def __str__(self):
        return f"{self.product_name} ({self.price_per_pack}/pack)"

    def price_for(self, sale_type):
        """Return the unit price used for a sale of the given type."""
        if sale_type == SaleType.KG:
            return self.price_per_kg
        return self.price_per_pack
