"""Serializer fields shared by the bookkeeping apps."""
from decimal import Decimal

from rest_framework import serializers

CENT = Decimal('0.01')


class MoneyField(serializers.DecimalField):
    """
    Read side of an exact money column.

    Totals and credit are stored with 5 decimal places. Whole-cent values
    render as plain cents ("250.00"); anything finer keeps only its
    significant digits ("1.10889").
    """

    def __init__(self, **kwargs):
        kwargs.setdefault('max_digits', 19)
        kwargs.setdefault('decimal_places', 5)
        kwargs.setdefault('read_only', True)
        super().__init__(**kwargs)

    def quantize(self, value):
        value = super().quantize(value)
        cents = value.quantize(CENT)
        return cents if cents == value else value.normalize()
