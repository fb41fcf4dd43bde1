"""
Ledger Update Service
=====================

Records a sale and applies it to the owning customer as one unit of work:

    1. insert the authoritative Sale and its line items
    2. append a denormalized summary to the customer's embedded history
    3. credit := credit + (total_price - amount_received)
    4. last_purchase := max(last_purchase, sale.date)

All four steps run inside one ``transaction.atomic()`` block, so a failure
at any step rolls back the others and no sale is ever visible without its
customer update. The customer row is locked for the duration, and steps 3
and 4 are a single relative UPDATE evaluated by the database, never a
read-compute-write in Python.

``total_price`` is always recomputed from the line items; client-supplied
totals or credit values are not accepted.

Example:
    Recording a partly paid sale::

        from apps.sales.services import record_sale

        sale, customer, created = record_sale(
            customer_id=customer.id,
            sale_type='pack',
            products=[{'product_id': rice.id, 'quantity': 5, 'price': '50.00'}],
            payment_method='cash',
            amount_received=Decimal('200.00'),
        )
        # credit grew by 50.00 (250.00 total, 200.00 received)
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal, InvalidOperation

from django.db import transaction, DatabaseError, IntegrityError
from django.db.models import F, Value
from django.db.models.functions import Coalesce, Greatest
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from apps.customers.credit import outstanding_amount
from apps.customers.models import Customer, CustomerSaleEntry
from apps.customers.services import CustomerNotFoundError
from apps.products.models import Product, SaleType
from ..models import Sale, SaleLineItem, PaymentMethod
from .exceptions import (
    InvalidSaleError,
    InvalidLineItemError,
    IdempotencyConflictError,
    SaleNotCommittedError,
)

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
QUANTITY_STEP = Decimal('0.001')


# =============================================================================
# Validation
# =============================================================================

def _to_decimal(value):
    """Return a finite Decimal or None."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


def _has_places(value, step):
    """True when ``value`` needs no more decimal places than ``step``."""
    try:
        return value == value.quantize(step)
    except InvalidOperation:
        return False


def _to_uuid(value):
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        return None


def _validate_choice(value, choices, field):
    if value not in choices:
        raise InvalidSaleError(
            f"{field} must be one of: {', '.join(choices)}",
            fields={field: f"Must be one of: {', '.join(choices)}."}
        )
    return value


def _validate_line_items(products):
    """
    Check line item shape and ranges before touching the database.

    Returns:
        list[dict]: ``{product_id, quantity, price}`` with price None when
        the caller left it to the product's current price.

    Raises:
        InvalidLineItemError: Empty list, bad id, quantity <= 0 or price < 0
    """
    if not products or not isinstance(products, (list, tuple)):
        raise InvalidLineItemError(
            "At least one product is required",
            fields={'products': 'At least one product is required.'}
        )

    items = []
    for index, item in enumerate(products):
        prefix = f'products[{index}]'
        if not isinstance(item, dict):
            raise InvalidLineItemError(
                f"{prefix} must be an object",
                fields={prefix: 'Must be an object.'}
            )

        product_id = _to_uuid(item.get('product_id'))
        if product_id is None:
            raise InvalidLineItemError(
                f"{prefix}.productId is not a valid id",
                fields={f'{prefix}.productId': 'Must be a valid product id.'}
            )

        quantity = _to_decimal(item.get('quantity'))
        if quantity is None or quantity <= 0:
            raise InvalidLineItemError(
                f"{prefix}.quantity must be greater than zero",
                fields={f'{prefix}.quantity': 'Must be greater than zero.'}
            )
        if not _has_places(quantity, QUANTITY_STEP):
            raise InvalidLineItemError(
                f"{prefix}.quantity has more than 3 decimal places",
                fields={f'{prefix}.quantity': 'Ensure that there are no more than 3 decimal places.'}
            )

        price = None
        if item.get('price') is not None:
            price = _to_decimal(item['price'])
            if price is None or price < 0:
                raise InvalidLineItemError(
                    f"{prefix}.price cannot be negative",
                    fields={f'{prefix}.price': 'Must be zero or greater.'}
                )
            if not _has_places(price, CENT):
                raise InvalidLineItemError(
                    f"{prefix}.price has more than 2 decimal places",
                    fields={f'{prefix}.price': 'Ensure that there are no more than 2 decimal places.'}
                )
            price = price.quantize(CENT)

        items.append({
            'product_id': product_id,
            'quantity': quantity.quantize(QUANTITY_STEP),
            'price': price,
        })

    return items


def _validate_date(value):
    """
    Return an aware sale datetime; None means now.

    ISO 8601 strings are parsed. Naive values are taken as local time.
    """
    if value is None:
        return timezone.now()

    if isinstance(value, str):
        try:
            parsed = parse_datetime(value)
        except ValueError:
            parsed = None
    else:
        parsed = value if isinstance(value, datetime) else None

    if parsed is None:
        raise InvalidSaleError(
            "date must be an ISO 8601 datetime",
            fields={'date': 'Must be a valid datetime.'}
        )
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def _resolve_line_items(items, sale_type):
    """
    Attach product records and freeze names and prices.

    Raises:
        InvalidLineItemError: If a productId does not exist
    """
    catalogue = Product.objects.in_bulk([item['product_id'] for item in items])

    resolved = []
    for index, item in enumerate(items):
        product = catalogue.get(item['product_id'])
        if product is None:
            raise InvalidLineItemError(
                f"Unknown product {item['product_id']}",
                fields={f'products[{index}].productId': 'Unknown product.'}
            )
        price = item['price'] if item['price'] is not None else product.price_for(sale_type)
        resolved.append({
            'product': product,
            'product_name': product.product_name,
            'quantity': item['quantity'],
            'price': price,
        })
    return resolved


def compute_total(line_items) -> Decimal:
    """
    Exact sum of quantity * price over the line items.

    Quantities carry 3 decimal places and prices 2, so the sum never needs
    more than 5 and is stored without rounding. Accepts dicts or
    SaleLineItem instances.
    """
    total = Decimal('0')
    for item in line_items:
        if isinstance(item, dict):
            total += item['quantity'] * item['price']
        else:
            total += item.quantity * item.price
    return total


# =============================================================================
# Writes
# =============================================================================

def sale_summary(sale, line_items):
    """Fields of the customer's embedded copy of a sale."""
    return {
        'sale_id': sale.id,
        'sale_type': sale.sale_type,
        'products': [
            {
                'productId': str(item.product_ref),
                'productName': item.product_name,
                'quantity': str(item.quantity),
                'price': str(item.price),
            }
            for item in line_items
        ],
        'total_price': sale.total_price,
        'payment_method': sale.payment_method,
        'amount_received': sale.amount_received,
        'date': sale.date,
    }


def _insert_sale(*, customer, sale_type, line_items, payment_method,
                 amount_received, sale_date, idempotency_key):
    sale = Sale.objects.create(
        customer=customer,
        sale_type=sale_type,
        total_price=compute_total(line_items),
        payment_method=payment_method,
        amount_received=amount_received,
        date=sale_date,
        idempotency_key=idempotency_key,
    )
    items = SaleLineItem.objects.bulk_create([
        SaleLineItem(
            sale=sale,
            product=item['product'],
            product_ref=item['product'].id,
            product_name=item['product_name'],
            quantity=item['quantity'],
            price=item['price'],
            position=position,
        )
        for position, item in enumerate(line_items)
    ])
    return sale, items


def _apply_to_customer(customer, sale, line_items):
    """Append the history entry, then adjust credit and recency in one UPDATE."""
    CustomerSaleEntry.objects.create(customer=customer, **sale_summary(sale, line_items))

    delta = outstanding_amount(sale.total_price, sale.amount_received)
    sale_date = Value(sale.date)

    Customer.objects.filter(id=customer.id).update(
        credit=F('credit') + delta,
        last_purchase=Greatest(Coalesce(F('last_purchase'), sale_date), sale_date),
        updated_at=timezone.now(),
    )


def _same_request(sale, *, sale_type, payment_method, amount_received, items):
    """
    Whether a resubmission describes the stored sale.

    Line items must match in order. A line that left ``price`` to the
    catalogue matches whatever price was frozen on the stored line.
    """
    if (sale.sale_type, sale.payment_method) != (sale_type, payment_method):
        return False
    if sale.amount_received != amount_received:
        return False

    stored = list(sale.line_items.order_by('position'))
    if len(stored) != len(items):
        return False
    for line, item in zip(stored, items):
        if line.product_ref != item['product_id'] or line.quantity != item['quantity']:
            return False
        if item['price'] is not None and line.price != item['price']:
            return False
    return True


def _find_replay(idempotency_key, customer_id, request):
    """
    Return the sale already recorded under ``idempotency_key``, or None.

    Raises:
        IdempotencyConflictError: The key belongs to another customer or to
            a sale with a different body.
    """
    sale = (
        Sale.objects
        .select_related('customer')
        .filter(idempotency_key=idempotency_key)
        .first()
    )
    if sale is None:
        return None
    if sale.customer_id != customer_id or not _same_request(sale, **request):
        raise IdempotencyConflictError()
    customer = Customer.objects.prefetch_related('sales').get(id=sale.customer_id)
    return sale, customer, False


def record_sale(
    *,
    customer_id,
    sale_type,
    products,
    payment_method,
    amount_received,
    date=None,
    idempotency_key=None,
):
    """
    Record a sale and update the owning customer atomically.

    Args:
        customer_id (UUID): Customer the sale belongs to.
        sale_type (str): 'kg' or 'pack'; selects the product price used
            when a line item omits ``price``.
        products (list[dict]): ``{product_id, quantity, price?}`` items.
            quantity must be > 0 with at most 3
            decimal places, price >= 0 with at most 2.
        payment_method (str): 'cash', 'online' or 'credit'.
        amount_received (Decimal): Amount paid now (>= 0). Less than the
            total raises credit, more than the total lowers it.
        date (datetime or str, optional): Sale time; ISO 8601 strings are
            parsed. Defaults to now.
        idempotency_key (str, optional): Resubmitting with the same key
            returns the original sale instead of recording it twice.

    Returns:
        tuple: (Sale, Customer, created). ``created`` is False when the
        sale was replayed from its idempotency key.

    Raises:
        InvalidSaleError: Bad saleType/paymentMethod/amountReceived.
        InvalidLineItemError: Empty products, bad quantity/price, or
            unknown productId.
        CustomerNotFoundError: customer_id does not exist.
        IdempotencyConflictError: Key already used for another customer
            or for a sale with a different body.
        SaleNotCommittedError: Storage failed or timed out; nothing was
            committed.
    """
    sale_type = _validate_choice(sale_type, SaleType.values, 'saleType')
    payment_method = _validate_choice(payment_method, PaymentMethod.values, 'paymentMethod')

    received = _to_decimal(amount_received)
    if received is None or received < 0:
        raise InvalidSaleError(
            "amountReceived must be zero or greater",
            fields={'amountReceived': 'Must be zero or greater.'}
        )
    if not _has_places(received, CENT):
        raise InvalidSaleError(
            "amountReceived has more than 2 decimal places",
            fields={'amountReceived': 'Ensure that there are no more than 2 decimal places.'}
        )
    received = received.quantize(CENT)

    requested_items = _validate_line_items(products)

    customer_uuid = _to_uuid(customer_id)
    if customer_uuid is None:
        raise CustomerNotFoundError(f"Customer {customer_id} not found")

    sale_date = _validate_date(date)
    request = {
        'sale_type': sale_type,
        'payment_method': payment_method,
        'amount_received': received,
        'items': requested_items,
    }

    try:
        with transaction.atomic():
            if idempotency_key:
                replay = _find_replay(idempotency_key, customer_uuid, request)
                if replay:
                    logger.info('Sale %s replayed for key %s', replay[0].id, idempotency_key)
                    return replay

            try:
                customer = Customer.objects.select_for_update().get(id=customer_uuid)
            except Customer.DoesNotExist:
                raise CustomerNotFoundError(f"Customer {customer_id} not found")

            line_items = _resolve_line_items(requested_items, sale_type)

            sale, items = _insert_sale(
                customer=customer,
                sale_type=sale_type,
                line_items=line_items,
                payment_method=payment_method,
                amount_received=received,
                sale_date=sale_date,
                idempotency_key=idempotency_key or None,
            )
            _apply_to_customer(customer, sale, items)

            customer = Customer.objects.prefetch_related('sales').get(id=customer.id)

    except IntegrityError as exc:
        # A concurrent request with the same key committed first
        if idempotency_key:
            replay = _find_replay(idempotency_key, customer_uuid, request)
            if replay:
                return replay
        logger.exception('Sale for customer %s not committed', customer_id)
        raise SaleNotCommittedError(committed=False) from exc
    except DatabaseError as exc:
        logger.exception('Sale for customer %s not committed', customer_id)
        raise SaleNotCommittedError(committed=False) from exc

    logger.info(
        'Sale %s recorded for customer %s: total %s, received %s, credit now %s',
        sale.id, customer.id, sale.total_price, sale.amount_received, customer.credit
    )
    return sale, customer, True
