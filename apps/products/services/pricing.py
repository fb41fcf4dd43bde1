"""Product price derivation."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .exceptions import InvalidProductError

CENT = Decimal('0.01')


def to_decimal(value, field):
    """
    Coerce a number-like value to Decimal.

    Floats go through ``str`` so 0.1 stays 0.1 rather than its binary
    expansion.

    Raises:
        InvalidProductError: If the value is not numeric
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise InvalidProductError(f"{field} must be a number", fields={field: 'Must be a number.'})
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidProductError(f"{field} must be a number", fields={field: 'Must be a number.'})
    if not result.is_finite():
        raise InvalidProductError(f"{field} must be a number", fields={field: 'Must be a number.'})
    return result


def derive_price_per_kg(price_per_pack, kgs_per_pack) -> Decimal:
    """
    Compute the per-kg price of a pack.

    Args:
        price_per_pack: Price of one pack (>= 0)
        kgs_per_pack: Weight of one pack in kg (> 0)

    Returns:
        price_per_pack / kgs_per_pack rounded half-up to 2 decimal places

    Raises:
        InvalidProductError: If kgs_per_pack <= 0 or price_per_pack < 0

    Example:
        >>> derive_price_per_kg(Decimal('500'), Decimal('25'))
        Decimal('20.00')
    """
    price = to_decimal(price_per_pack, 'pricePerPack')
    kgs = to_decimal(kgs_per_pack, 'kgsPerPack')

    if kgs <= 0:
        raise InvalidProductError(
            "kgsPerPack must be greater than zero",
            fields={'kgsPerPack': 'Must be greater than zero.'}
        )
    if price < 0:
        raise InvalidProductError(
            "pricePerPack cannot be negative",
            fields={'pricePerPack': 'Cannot be negative.'}
        )

    return (price / kgs).quantize(CENT, rounding=ROUND_HALF_UP)
