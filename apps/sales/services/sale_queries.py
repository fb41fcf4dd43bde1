"""Read-side sale lookups."""

from uuid import UUID
from typing import Optional

from django.db.models import QuerySet

from ..models import Sale
from .exceptions import SaleNotFoundError


def get_sale(*, sale_id: UUID) -> Sale:
    """
    Fetch a sale with its line items.

    Raises:
        SaleNotFoundError: If sale doesn't exist
    """
    try:
        return Sale.objects.prefetch_related('line_items').get(id=sale_id)
    except Sale.DoesNotExist:
        raise SaleNotFoundError(f"Sale {sale_id} not found")


def list_sales(*, customer_id: Optional[UUID] = None) -> QuerySet:
    """Sales newest first, optionally limited to one customer."""
    queryset = Sale.objects.prefetch_related('line_items')
    if customer_id:
        queryset = queryset.filter(customer_id=customer_id)
    return queryset.order_by('-date', '-created_at')
