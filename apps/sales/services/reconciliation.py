"""
History reconciliation service.

The Sale table is authoritative; a customer's embedded history and
``last_purchase`` are derived from it. These helpers detect and repair
divergence left behind by manual edits or imports.
"""

import logging
from collections import defaultdict
from uuid import UUID
from typing import List, Tuple

from django.db import transaction
from django.db.models import Max
from django.utils import timezone

from apps.customers.models import Customer, CustomerSaleEntry
from apps.customers.services import CustomerNotFoundError
from ..models import Sale
from .ledger import sale_summary

logger = logging.getLogger(__name__)


@transaction.atomic
def rebuild_sales_history(*, customer_id: UUID) -> Tuple[Customer, int]:
    """
    Rebuild a customer's embedded sales history from the recorded sales.

    Embedded entries are replaced in date order and ``last_purchase`` is
    reset to the latest sale date (None without sales). Credit is left as is.

    Returns:
        tuple: (Customer, number of history entries written)

    Raises:
        CustomerNotFoundError: If customer doesn't exist
    """
    try:
        customer = Customer.objects.select_for_update().get(id=customer_id)
    except Customer.DoesNotExist:
        raise CustomerNotFoundError(f"Customer {customer_id} not found")

    sales = (
        Sale.objects
        .filter(customer=customer)
        .prefetch_related('line_items')
        .order_by('date', 'created_at')
    )

    CustomerSaleEntry.objects.filter(customer=customer).delete()
    entries = CustomerSaleEntry.objects.bulk_create([
        CustomerSaleEntry(customer=customer, **sale_summary(sale, sale.line_items.all()))
        for sale in sales
    ])

    latest = max((entry.date for entry in entries), default=None)
    Customer.objects.filter(id=customer.id).update(
        last_purchase=latest,
        updated_at=timezone.now(),
    )
    customer.refresh_from_db()

    logger.info('Rebuilt %d history entries for customer %s', len(entries), customer.id)
    return customer, len(entries)


def find_history_drift() -> List[UUID]:
    """
    Return ids of customers whose embedded history disagrees with their sales.

    A customer drifts when the set of embedded sale ids differs from the set
    of recorded sale ids, or when ``last_purchase`` is missing or older than
    the latest recorded sale.
    """
    recorded = defaultdict(set)
    for customer_id, sale_id in Sale.objects.values_list('customer_id', 'id'):
        recorded[customer_id].add(sale_id)

    embedded = defaultdict(set)
    for customer_id, sale_id in CustomerSaleEntry.objects.values_list('customer_id', 'sale_id'):
        embedded[customer_id].add(sale_id)

    latest = dict(
        Sale.objects
        .order_by()
        .values('customer_id')
        .annotate(latest=Max('date'))
        .values_list('customer_id', 'latest')
    )

    drifted = []
    for customer_id, last_purchase in Customer.objects.order_by('name').values_list('id', 'last_purchase'):
        if recorded.get(customer_id, set()) != embedded.get(customer_id, set()):
            drifted.append(customer_id)
        elif customer_id in latest and (last_purchase is None or last_purchase < latest[customer_id]):
            drifted.append(customer_id)

    return drifted
