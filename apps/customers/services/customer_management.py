"""Customer account operations service."""

import logging
from decimal import Decimal, InvalidOperation
from uuid import UUID
from typing import Optional, List

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from ..credit import sort_customers
from ..models import Customer
from .exceptions import CustomerNotFoundError, InvalidCustomerError

logger = logging.getLogger(__name__)


def _as_decimal(value, field):
    if isinstance(value, bool) or value is None:
        raise InvalidCustomerError(f"{field} is required", fields={field: 'This field is required.'})
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidCustomerError(f"{field} must be a number", fields={field: 'Must be a number.'})
    if not result.is_finite():
        raise InvalidCustomerError(f"{field} must be a number", fields={field: 'Must be a number.'})
    return result


@transaction.atomic
def create_customer(
    *,
    name: str,
    contact: str,
    credit,
    join_date=None,
) -> Customer:
    """
    Create a customer with a caller-supplied opening credit.

    Args:
        name: Customer name
        contact: Phone number or other contact detail
        credit: Opening credit balance (signed)
        join_date: Defaults to now

    Returns:
        Created Customer with no purchase history (last_purchase is None)

    Raises:
        InvalidCustomerError: If a required field is missing
    """
    missing = {
        field: 'This field is required.'
        for field, value in (('name', name), ('contact', contact))
        if not value or not str(value).strip()
    }
    if missing:
        raise InvalidCustomerError("All fields are required", fields=missing)

    customer = Customer.objects.create(
        name=name.strip(),
        contact=contact.strip(),
        credit=_as_decimal(credit, 'credit'),
        join_date=join_date or timezone.now(),
        last_purchase=None,
    )
    logger.info('Customer %s created with opening credit %s', customer.id, customer.credit)
    return customer


def get_customer(*, customer_id: UUID) -> Customer:
    """
    Fetch a customer with its embedded sales history.

    Raises:
        CustomerNotFoundError: If customer doesn't exist
    """
    try:
        return (
            Customer.objects
            .prefetch_related('sales')
            .get(id=customer_id)
        )
    except Customer.DoesNotExist:
        raise CustomerNotFoundError(f"Customer {customer_id} not found")


def search_customers(
    *,
    search: Optional[str] = None,
    sort: Optional[str] = None
) -> List[Customer]:
    """
    List customers, optionally filtered by name and sorted.

    Args:
        search: Case-insensitive substring of the customer name
        sort: 'recent', 'oldest' or 'credit' (see credit.sort_customers)

    Returns:
        list[Customer]
    """
    queryset = Customer.objects.prefetch_related('sales')

    if search:
        queryset = queryset.filter(name__icontains=search.strip())

    return sort_customers(queryset, sort)


@transaction.atomic
def adjust_credit(*, customer_id: UUID, amount) -> Customer:
    """
    Apply a direct signed adjustment to a customer's credit.

    The adjustment is a relative UPDATE executed by the database, so
    concurrent adjustments and sales never overwrite each other. Recency and
    sales history are untouched.

    Args:
        customer_id: Customer UUID
        amount: Signed amount added to credit (negative records a repayment)

    Raises:
        CustomerNotFoundError: If customer doesn't exist
        InvalidCustomerError: If amount is not a number
    """
    amount = _as_decimal(amount, 'amount')

    updated = Customer.objects.filter(id=customer_id).update(
        credit=F('credit') + amount,
        updated_at=timezone.now(),
    )
    if not updated:
        raise CustomerNotFoundError(f"Customer {customer_id} not found")

    logger.info('Customer %s credit adjusted by %s', customer_id, amount)
    return get_customer(customer_id=customer_id)
