"""
Service layer unit tests for customers app.

Tests cover:
- Customer creation and lookup
- Search and sort
- Relative credit adjustments
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from apps.customers.models import Customer
from apps.customers.services import (
    create_customer,
    get_customer,
    search_customers,
    adjust_credit,
    CustomerNotFoundError,
    InvalidCustomerError,
)


@pytest.mark.django_db
class TestCustomerManagement:
    """Tests for customer_management.py service functions."""

    def test_create_customer(self):
        customer = create_customer(
            name=' Devi Foods ',
            contact='9844444444',
            credit=Decimal('-25.00'),
        )

        assert customer.name == 'Devi Foods'
        assert customer.credit == Decimal('-25.00')
        assert customer.last_purchase is None
        assert customer.join_date is not None
        assert customer.sales.count() == 0

    def test_create_customer_requires_name_and_contact(self):
        with pytest.raises(InvalidCustomerError) as exc_info:
            create_customer(name='', contact='  ', credit=Decimal('0'))

        assert set(exc_info.value.fields) == {'name', 'contact'}
        assert Customer.objects.count() == 0

    def test_get_customer(self, customer):
        assert get_customer(customer_id=customer.id) == customer

    def test_get_missing_customer(self):
        with pytest.raises(CustomerNotFoundError):
            get_customer(customer_id=uuid4())

    def test_search_is_case_insensitive(self, customer, customer_recent, customer_new):
        result = search_customers(search='STORES')

        assert result == [customer_recent]

    def test_search_and_sort(self, customer, customer_recent, customer_new):
        result = search_customers(sort='recent')

        assert result == [customer_recent, customer, customer_new]

    def test_sort_by_credit(self, customer, customer_recent, customer_new):
        result = search_customers(sort='credit')

        assert result == [customer_new, customer, customer_recent]


@pytest.mark.django_db
class TestAdjustCredit:
    """Tests for adjust_credit."""

    def test_adjust_credit_is_relative(self, customer):
        adjust_credit(customer_id=customer.id, amount=Decimal('-40.00'))
        result = adjust_credit(customer_id=customer.id, amount=Decimal('15.50'))

        assert result.credit == Decimal('75.50')

    def test_adjust_credit_uses_stored_balance(self, customer):
        """A stale in-memory copy does not overwrite the stored balance."""
        stale = Customer.objects.get(id=customer.id)
        Customer.objects.filter(id=customer.id).update(credit=Decimal('300.00'))

        result = adjust_credit(customer_id=stale.id, amount=Decimal('10.00'))

        assert result.credit == Decimal('310.00')

    def test_adjust_credit_keeps_recency(self, customer):
        before = customer.last_purchase

        result = adjust_credit(customer_id=customer.id, amount=Decimal('1.00'))

        assert result.last_purchase == before

    def test_adjust_missing_customer(self):
        with pytest.raises(CustomerNotFoundError):
            adjust_credit(customer_id=uuid4(), amount=Decimal('1.00'))

    def test_adjust_with_non_number(self, customer):
        with pytest.raises(InvalidCustomerError):
            adjust_credit(customer_id=customer.id, amount='lots')
