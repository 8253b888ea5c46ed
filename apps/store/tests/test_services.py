import uuid
from decimal import Decimal

import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext
from apps.store.models import Order, OrderStatus, Product
from apps.store.services import place_order, cancel_order
from apps.store.exceptions import (
    EmptyOrderError,
    InvalidQuantityError,
    ProductUnavailableError,
    InsufficientStockError,
    OrderNotPendingError,
)


@pytest.mark.django_db
class TestPlaceOrder:

    def test_totals_and_stock(self, school, shirt, bottle):
        order = place_order(
            school=school,
            buyer_name='Carla Dias',
            items=[{'product_id': shirt.id, 'quantity': 2}, {'product_id': bottle.id, 'quantity': 1}],
        )

        assert order.status == OrderStatus.PENDING
        assert order.total == Decimal('124.80')
        assert order.items.count() == 2
        shirt.refresh_from_db()
        bottle.refresh_from_db()
        assert shirt.stock == 3
        assert bottle.stock == 0

    def test_repeated_product_lines_merge(self, school, shirt):
        order = place_order(
            school=school,
            buyer_name='Carla Dias',
            items=[{'product_id': shirt.id, 'quantity': 1}, {'product_id': shirt.id, 'quantity': 2}],
        )

        item = order.items.get()
        assert item.quantity == 3

    def test_products_locked_in_id_order(self, school, shirt, bottle):
        with CaptureQueriesContext(connection) as ctx:
            place_order(
                school=school,
                buyer_name='Carla Dias',
                items=[{'product_id': shirt.id, 'quantity': 1}, {'product_id': bottle.id, 'quantity': 1}],
            )

        product_reads = [q['sql'] for q in ctx.captured_queries if q['sql'].startswith('SELECT') and '"products"' in q['sql']]
        assert 'ORDER BY "products"."id" ASC' in product_reads[0]

    def test_insufficient_stock_rolls_back(self, school, shirt, bottle):
        with pytest.raises(InsufficientStockError, match=r'Estoque insuficiente para Garrafa \(disponível: 1\)\.'):
            place_order(
                school=school,
                buyer_name='Carla Dias',
                items=[{'product_id': shirt.id, 'quantity': 1}, {'product_id': bottle.id, 'quantity': 2}],
            )

        shirt.refresh_from_db()
        assert shirt.stock == 5
        assert not Order.objects.exists()

    def test_empty_order(self, school):
        with pytest.raises(EmptyOrderError):
            place_order(school=school, buyer_name='Carla Dias', items=[])

    def test_zero_quantity(self, school, shirt):
        with pytest.raises(InvalidQuantityError):
            place_order(school=school, buyer_name='Carla Dias', items=[{'product_id': shirt.id, 'quantity': 0}])

    def test_inactive_product(self, school, shirt):
        shirt.active = False
        shirt.save()

        with pytest.raises(ProductUnavailableError):
            place_order(school=school, buyer_name='Carla Dias', items=[{'product_id': shirt.id, 'quantity': 1}])

    def test_product_of_other_school(self, other_school, shirt):
        with pytest.raises(ProductUnavailableError):
            place_order(school=other_school, buyer_name='Carla Dias', items=[{'product_id': shirt.id, 'quantity': 1}])

    def test_unknown_product(self, school):
        with pytest.raises(ProductUnavailableError):
            place_order(school=school, buyer_name='Carla Dias', items=[{'product_id': uuid.uuid4(), 'quantity': 1}])


@pytest.mark.django_db
class TestCancelOrder:

    def test_cancel_restocks(self, school, shirt):
        order = place_order(school=school, buyer_name='Carla Dias', items=[{'product_id': shirt.id, 'quantity': 4}])

        cancel_order(order=order)

        shirt.refresh_from_db()
        assert shirt.stock == 5
        assert Order.objects.get(id=order.id).status == OrderStatus.CANCELLED

    def test_cancel_twice(self, school, shirt):
        order = place_order(school=school, buyer_name='Carla Dias', items=[{'product_id': shirt.id, 'quantity': 1}])
        cancel_order(order=order)

        with pytest.raises(OrderNotPendingError):
            cancel_order(order=order)

        assert Product.objects.get(id=shirt.id).stock == 5
