import pytest
from decimal import Decimal
from uuid import uuid4
from django.urls import reverse
from rest_framework import status

from apps.products.models import Product


@pytest.mark.django_db
class TestProductList:
    """Tests for GET /api/products/"""

    def test_list_requires_auth(self, api_client):
        response = api_client.get(reverse('products:product-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_products(self, authenticated_client, product, product_2):
        response = authenticated_client.get(reverse('products:product-list'))

        assert response.status_code == status.HTTP_200_OK
        names = [p['productName'] for p in response.data]
        assert names == ['Basmati Rice', 'Wheat Flour']

    def test_search_products(self, authenticated_client, product, product_2):
        response = authenticated_client.get(reverse('products:product-list'), {'search': 'wheat'})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['productName'] == 'Wheat Flour'


@pytest.mark.django_db
class TestProductCreate:
    """Tests for POST /api/products/"""

    def test_create_product(self, authenticated_client):
        response = authenticated_client.post(
            reverse('products:product-list'),
            {'productName': 'Sugar', 'pricePerPack': '450.00', 'kgsPerPack': '50'},
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['pricePerKg'] == '9.00'
        assert Product.objects.filter(product_name='Sugar').exists()

    def test_client_price_per_kg_is_ignored(self, authenticated_client):
        response = authenticated_client.post(
            reverse('products:product-list'),
            {
                'productName': 'Sugar',
                'pricePerPack': '450.00',
                'kgsPerPack': '50',
                'pricePerKg': '999.00',
            },
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['pricePerKg'] == '9.00'

    def test_zero_weight_is_rejected(self, authenticated_client):
        response = authenticated_client.post(
            reverse('products:product-list'),
            {'productName': 'Bad', 'pricePerPack': '10', 'kgsPerPack': '0'},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['kind'] == 'validation_error'
        assert response.data['code'] == 'invalid_product'
        assert 'kgsPerPack' in response.data['fields']

    def test_missing_fields(self, authenticated_client):
        response = authenticated_client.post(
            reverse('products:product-list'),
            {'productName': 'Bad'},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['kind'] == 'validation_error'


@pytest.mark.django_db
class TestProductDetail:
    """Tests for /api/products/{id}/"""

    def test_retrieve(self, authenticated_client, product):
        url = reverse('products:product-detail', kwargs={'pk': product.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['pricePerKg'] == '20.00'

    def test_retrieve_unknown(self, authenticated_client):
        url = reverse('products:product-detail', kwargs={'pk': uuid4()})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['kind'] == 'not_found'

    def test_partial_update(self, authenticated_client, product):
        url = reverse('products:product-detail', kwargs={'pk': product.id})
        response = authenticated_client.patch(url, {'kgsPerPack': '20'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['pricePerKg'] == '25.00'
        product.refresh_from_db()
        assert product.price_per_kg == Decimal('25.00')

    def test_full_update(self, authenticated_client, product):
        url = reverse('products:product-detail', kwargs={'pk': product.id})
        response = authenticated_client.put(
            url,
            {'productName': 'Brown Rice', 'pricePerPack': '600', 'kgsPerPack': '25'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['productName'] == 'Brown Rice'
        assert response.data['pricePerKg'] == '24.00'

    def test_delete(self, authenticated_client, product):
        url = reverse('products:product-detail', kwargs={'pk': product.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Product.objects.filter(id=product.id).exists()
