import pytest
from decimal import Decimal
from uuid import uuid4
from unittest.mock import patch
from django.db import OperationalError
from django.urls import reverse
from rest_framework import status

from apps.customers.models import Customer
from apps.sales.models import Sale
from apps.sales.services import ledger


def sale_payload(customer, product, **overrides):
    payload = {
        'customerId': str(customer.id),
        'saleType': 'pack',
        'products': [
            {'productId': str(product.id), 'quantity': '5', 'price': '50.00'},
        ],
        'paymentMethod': 'cash',
        'amountReceived': '200.00',
    }
    payload.update(overrides)
    return payload


@pytest.mark.django_db
class TestRecordSaleEndpoint:
    """Tests for POST /api/sales/"""

    def test_requires_auth(self, api_client, customer, rice):
        response = api_client.post(
            reverse('sales:sale-list'), sale_payload(customer, rice), format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Sale.objects.count() == 0

    def test_record_sale(self, authenticated_client, customer, rice):
        response = authenticated_client.post(
            reverse('sales:sale-list'), sale_payload(customer, rice), format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        sale = response.data['sale']
        assert sale['totalPrice'] == '250.00'
        assert sale['customerId'] == str(customer.id)
        assert sale['products'][0]['productName'] == 'Basmati Rice'

        updated = response.data['customer']
        assert updated['credit'] == '150.00'
        assert updated['lastPurchase'] is not None
        assert [entry['saleId'] for entry in updated['sales']] == [sale['id']]

    def test_client_totals_are_ignored(self, authenticated_client, customer, rice):
        payload = sale_payload(customer, rice, totalPrice='9999.00', updatedCredit='0.00')

        response = authenticated_client.post(reverse('sales:sale-list'), payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['sale']['totalPrice'] == '250.00'
        assert response.data['customer']['credit'] == '150.00'

    def test_explicit_date(self, authenticated_client, customer, rice):
        payload = sale_payload(customer, rice, date='2024-05-04T12:00:00Z')

        response = authenticated_client.post(reverse('sales:sale-list'), payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['sale']['date'].startswith('2024-05-04T12:00:00')

    def test_empty_products(self, authenticated_client, customer):
        payload = {
            'customerId': str(customer.id),
            'saleType': 'pack',
            'products': [],
            'paymentMethod': 'cash',
            'amountReceived': '10.00',
        }

        response = authenticated_client.post(reverse('sales:sale-list'), payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['kind'] == 'validation_error'
        assert response.data['code'] == 'invalid_line_item'
        customer.refresh_from_db()
        assert customer.credit == Decimal('100.00')
        assert Sale.objects.count() == 0

    def test_unknown_customer(self, authenticated_client, customer, rice):
        payload = sale_payload(customer, rice, customerId=str(uuid4()))

        response = authenticated_client.post(reverse('sales:sale-list'), payload, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['kind'] == 'not_found'
        assert Sale.objects.count() == 0

    def test_unknown_product(self, authenticated_client, customer, rice):
        payload = sale_payload(customer, rice)
        payload['products'][0]['productId'] = str(uuid4())

        response = authenticated_client.post(reverse('sales:sale-list'), payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'products[0].productId' in response.data['fields']

    def test_invalid_enum(self, authenticated_client, customer, rice):
        payload = sale_payload(customer, rice, paymentMethod='barter')

        response = authenticated_client.post(reverse('sales:sale-list'), payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['kind'] == 'validation_error'
        assert 'paymentMethod' in response.data['fields']

    def test_missing_field(self, authenticated_client, customer, rice):
        payload = sale_payload(customer, rice)
        del payload['amountReceived']

        response = authenticated_client.post(reverse('sales:sale-list'), payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'amountReceived' in response.data['fields']

    def test_storage_failure(self, authenticated_client, customer, rice):
        with patch.object(ledger, '_apply_to_customer', side_effect=OperationalError('timeout')):
            response = authenticated_client.post(
                reverse('sales:sale-list'), sale_payload(customer, rice), format='json'
            )

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data['kind'] == 'persistence_failure'
        assert response.data['committed'] is False
        assert response.data['retryable'] is True
        assert Sale.objects.count() == 0
        assert Customer.objects.get(id=customer.id).credit == Decimal('100.00')

    def test_idempotent_resubmission(self, authenticated_client, customer, rice):
        url = reverse('sales:sale-list')
        payload = sale_payload(customer, rice)

        first = authenticated_client.post(url, payload, format='json', HTTP_IDEMPOTENCY_KEY='order-77')
        second = authenticated_client.post(url, payload, format='json', HTTP_IDEMPOTENCY_KEY='order-77')

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_200_OK
        assert second.data['sale']['id'] == first.data['sale']['id']
        assert second.data['customer']['credit'] == '150.00'
        assert Sale.objects.count() == 1


    def test_fractional_kg_sale_is_exact(self, authenticated_client, customer, rice):
        payload = sale_payload(
            customer,
            rice,
            saleType='kg',
            products=[{'productId': str(rice.id), 'quantity': '0.333', 'price': '3.33'}],
            amountReceived='0.00',
        )

        response = authenticated_client.post(reverse('sales:sale-list'), payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['sale']['totalPrice'] == '1.10889'
        assert response.data['customer']['credit'] == '101.10889'
        assert response.data['customer']['sales'][0]['totalPrice'] == '1.10889'

    def test_price_with_fractional_cents(self, authenticated_client, customer, rice):
        payload = sale_payload(customer, rice)
        payload['products'][0]['price'] = '0.335'

        response = authenticated_client.post(reverse('sales:sale-list'), payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['kind'] == 'validation_error'
        assert Sale.objects.count() == 0

    def test_idempotency_key_reused_with_other_amount(self, authenticated_client, customer, rice):
        url = reverse('sales:sale-list')

        first = authenticated_client.post(
            url, sale_payload(customer, rice), format='json', HTTP_IDEMPOTENCY_KEY='order-78'
        )
        second = authenticated_client.post(
            url, sale_payload(customer, rice, amountReceived='250.00'), format='json',
            HTTP_IDEMPOTENCY_KEY='order-78'
        )

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_400_BAD_REQUEST
        assert second.data['code'] == 'idempotency_conflict'
        assert Sale.objects.count() == 1
        assert Customer.objects.get(id=customer.id).credit == Decimal('150.00')


@pytest.mark.django_db
class TestSaleQueries:
    """Tests for GET /api/sales/ and /api/sales/{id}/"""

    def _record(self, client, customer, product, **overrides):
        response = client.post(
            reverse('sales:sale-list'), sale_payload(customer, product, **overrides), format='json'
        )
        assert response.status_code == status.HTTP_201_CREATED
        return response.data['sale']

    def test_list_is_paginated(self, authenticated_client, customer, rice):
        self._record(authenticated_client, customer, rice)

        response = authenticated_client.get(reverse('sales:sale-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert len(response.data['results']) == 1

    def test_list_filtered_by_customer(self, authenticated_client, customer, customer_paid_up, rice):
        self._record(authenticated_client, customer, rice)
        self._record(authenticated_client, customer_paid_up, rice)

        response = authenticated_client.get(reverse('sales:sale-list'), {'customer': str(customer.id)})

        assert response.data['count'] == 1
        assert response.data['results'][0]['customerId'] == str(customer.id)

    def test_list_newest_first(self, authenticated_client, customer, rice):
        self._record(authenticated_client, customer, rice, date='2024-01-01T00:00:00Z')
        self._record(authenticated_client, customer, rice, date='2024-03-01T00:00:00Z')

        response = authenticated_client.get(reverse('sales:sale-list'))

        dates = [s['date'][:10] for s in response.data['results']]
        assert dates == ['2024-03-01', '2024-01-01']

    def test_list_bad_customer_filter(self, authenticated_client):
        response = authenticated_client.get(reverse('sales:sale-list'), {'customer': 'nope'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_retrieve(self, authenticated_client, customer, rice):
        sale = self._record(authenticated_client, customer, rice)

        response = authenticated_client.get(reverse('sales:sale-detail', kwargs={'pk': sale['id']}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['totalPrice'] == '250.00'
        assert response.data['products'][0]['quantity'] == '5.000'

    def test_retrieve_unknown(self, authenticated_client):
        response = authenticated_client.get(reverse('sales:sale-detail', kwargs={'pk': uuid4()}))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'sale_not_found'

    def test_sales_are_immutable(self, authenticated_client, customer, rice):
        sale = self._record(authenticated_client, customer, rice)
        url = reverse('sales:sale-detail', kwargs={'pk': sale['id']})

        assert authenticated_client.delete(url).status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert authenticated_client.patch(url, {}, format='json').status_code == status.HTTP_405_METHOD_NOT_ALLOWED


@pytest.mark.django_db
class TestRebuildHistoryEndpoint:
    """Tests for POST /api/customers/{id}/rebuild_history/"""

    def test_rebuild_history(self, authenticated_client, customer, rice):
        authenticated_client.post(reverse('sales:sale-list'), sale_payload(customer, rice), format='json')
        customer.sales.all().delete()

        url = reverse('customers:customer-rebuild-history', kwargs={'pk': customer.id})
        response = authenticated_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['sales']) == 1
        assert response.data['credit'] == '150.00'

    def test_rebuild_unknown_customer(self, authenticated_client):
        url = reverse('customers:customer-rebuild-history', kwargs={'pk': uuid4()})
        response = authenticated_client.post(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
