import pytest
from django.urls import reverse
from rest_framework import status
from apps.store.models import Product


@pytest.mark.django_db
class TestStorefront:
    """Tests for the public /api/store/shop/{school_id}/ endpoints"""

    def test_lists_only_available_products(self, api_client, school, shirt):
        Product.objects.create(school=school, name='Esgotado', price='10.00', stock=0)
        Product.objects.create(school=school, name='Inativo', price='10.00', stock=3, active=False)

        response = api_client.get(reverse('store:storefront', args=[school.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['school']['name'] == 'Studio Ritmo'
        assert [p['name'] for p in response.data['products']] == ['Camiseta']

    def test_anonymous_order(self, api_client, school, shirt):
        response = api_client.post(
            reverse('store:create-order', args=[school.id]),
            {'buyer_name': 'Carla Dias', 'items': [{'product_id': str(shirt.id), 'quantity': 2}]},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['total'] == '99.80'

    def test_order_over_stock(self, api_client, school, bottle):
        response = api_client.post(
            reverse('store:create-order', args=[school.id]),
            {'buyer_name': 'Carla Dias', 'items': [{'product_id': str(bottle.id), 'quantity': 3}]},
            format='json',
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_order_without_items(self, api_client, school):
        response = api_client.post(
            reverse('store:create-order', args=[school.id]),
            {'buyer_name': 'Carla Dias', 'items': []},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestStoreManagement:
    """Tests for /api/store/products/ and /api/store/orders/"""

    def test_admin_creates_product(self, admin_client, school):
        response = admin_client.post(
            reverse('store:product-list'),
            {'school': str(school.id), 'name': 'Sapatilha', 'price': '89.90', 'stock': 10},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['in_stock'] is True

    def test_teacher_cannot_edit_product(self, teacher_client, shirt):
        response = teacher_client.patch(
            reverse('store:product-detail', args=[shirt.id]), {'price': '1.00'}, format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_cannot_move_product_to_foreign_school(self, admin_client, shirt, school, other_school):
        response = admin_client.patch(
            reverse('store:product-detail', args=[shirt.id]), {'school': str(other_school.id)}, format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        shirt.refresh_from_db()
        assert shirt.school_id == school.id

    def test_admin_cancels_order(self, api_client, admin_client, school, shirt):
        order_id = api_client.post(
            reverse('store:create-order', args=[school.id]),
            {'buyer_name': 'Carla Dias', 'items': [{'product_id': str(shirt.id), 'quantity': 2}]},
            format='json',
        ).data['id']

        response = admin_client.post(reverse('store:order-cancel', args=[order_id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'cancelled'
        shirt.refresh_from_db()
        assert shirt.stock == 5

    def test_teacher_lists_orders(self, teacher_client, api_client, school, shirt):
        api_client.post(
            reverse('store:create-order', args=[school.id]),
            {'buyer_name': 'Carla Dias', 'items': [{'product_id': str(shirt.id), 'quantity': 1}]},
            format='json',
        )

        response = teacher_client.get(reverse('store:order-list'))

        assert response.data['count'] == 1
