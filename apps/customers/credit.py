"""
Credit Balance & Recency Model
==============================

Pure functions, no I/O. They describe how a customer's credit evolves and
how purchase recency is derived for sorting and display.

Credit:
    A sale changes credit by its outstanding amount,
    ``total_price - amount_received``. Underpayment raises credit (the
    customer owes more); overpayment lowers it, possibly below zero.

Recency:
    ``latest_purchase_date`` prefers the stored ``last_purchase`` and falls
    back to the newest date in the embedded sales history. It never raises:
    malformed dates count as absent.

Example::

    >>> apply_sale_to_credit(Decimal('100'), Decimal('250'), Decimal('200'))
    Decimal('150')
    >>> apply_sale_to_credit(Decimal('0'), Decimal('100'), Decimal('150'))
    Decimal('-50')
"""

from datetime import date, datetime, time, timezone as dt_timezone
from decimal import Decimal

from django.utils import timezone
from django.utils.dateparse import parse_datetime, parse_date

SORT_RECENT = 'recent'
SORT_OLDEST = 'oldest'
SORT_CREDIT = 'credit'
SORT_CHOICES = (SORT_RECENT, SORT_OLDEST, SORT_CREDIT)


def outstanding_amount(total_price: Decimal, amount_received: Decimal) -> Decimal:
    """Credit delta of one sale: the unpaid part, negative when overpaid."""
    return total_price - amount_received


def apply_sale_to_credit(credit: Decimal, total_price: Decimal, amount_received: Decimal) -> Decimal:
    """Return the credit balance after a sale."""
    return credit + outstanding_amount(total_price, amount_received)


def _get(obj, name):
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _coerce_datetime(value):
    """Return an aware datetime, or None when the value is missing or malformed."""
    if value is None:
        return None
    try:
        if isinstance(value, str):
            parsed = parse_datetime(value)
            if parsed is None:
                parsed_date = parse_date(value)
                if parsed_date is None:
                    return None
                parsed = datetime.combine(parsed_date, time.min)
            value = parsed
        elif isinstance(value, date) and not isinstance(value, datetime):
            value = datetime.combine(value, time.min)
        elif not isinstance(value, datetime):
            return None

        if timezone.is_naive(value):
            value = timezone.make_aware(value, dt_timezone.utc)
        return value
    except (ValueError, TypeError, OverflowError):
        return None


def _history(customer):
    sales = _get(customer, 'sales')
    if sales is None:
        return []
    try:
        # Related managers expose .all(); plain sequences are used as-is
        if hasattr(sales, 'all'):
            sales = sales.all()
        return list(sales)
    except (TypeError, ValueError):
        return []


def latest_purchase_date(customer):
    """
    Return the customer's most recent purchase time, or None.

    Uses ``customer.last_purchase`` when present, otherwise the maximum
    ``date`` among ``customer.sales``. Accepts model instances or mappings.
    Deterministic and total: never raises.
    """
    last_purchase = _coerce_datetime(_get(customer, 'last_purchase'))
    if last_purchase is not None:
        return last_purchase

    dates = [
        _coerce_datetime(_get(entry, 'date'))
        for entry in _history(customer)
    ]
    dates = [d for d in dates if d is not None]
    return max(dates) if dates else None


def _credit_value(customer):
    value = _get(customer, 'credit')
    try:
        credit = Decimal(str(value)) if value is not None else Decimal('0')
    except ArithmeticError:
        return Decimal('0')
    return credit if credit.is_finite() else Decimal('0')


def sort_customers(customers, sort=None):
    """
    Order customers for list display.

    Args:
        customers: Iterable of customers (model instances or mappings)
        sort: 'recent' (newest purchase first, never-purchased last),
            'oldest' (never-purchased first, then oldest purchase first),
            'credit' (highest credit first). Anything else keeps input order.

    Returns:
        list: A new sorted list
    """
    customers = list(customers)

    if sort in (SORT_RECENT, SORT_OLDEST):
        keyed = [(latest_purchase_date(c), c) for c in customers]
        dated = [pair for pair in keyed if pair[0] is not None]
        undated = [c for recency, c in keyed if recency is None]
        dated.sort(key=lambda pair: pair[0], reverse=(sort == SORT_RECENT))
        dated = [c for _, c in dated]
        if sort == SORT_RECENT:
            return dated + undated
        return undated + dated

    if sort == SORT_CREDIT:
        return sorted(customers, key=_credit_value, reverse=True)

    return customers
