"""Storefront order placement."""

import logging
from collections import OrderedDict
from decimal import Decimal

from django.db import transaction

from .models import Product, Order, OrderItem, OrderStatus
from .exceptions import (
    OrderNotPendingError,
    EmptyOrderError,
    InvalidQuantityError,
    ProductUnavailableError,
    InsufficientStockError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def place_order(*, school, items, buyer_name, buyer_email=''):
    """
    Create an order and take the items out of stock.

    Products are row-locked so two buyers cannot both take the last unit.
    Prices are read from the product at order time.

    Args:
        school: School the order is placed with
        items: Iterable of {'product_id': UUID, 'quantity': int}
        buyer_name: Name printed on the order
        buyer_email: Optional contact

    Returns:
        Order: The pending order with its items

    Raises:
        EmptyOrderError: No items given
        ProductUnavailableError: Unknown, inactive or foreign product
        InsufficientStockError: Quantity above current stock
    """
    # Merge repeated products so each row is locked and checked once
    quantities = OrderedDict()
    for item in items:
        quantity = int(item['quantity'])
        if quantity < 1:
            raise InvalidQuantityError("Quantidade deve ser no mínimo 1.")
        quantities[item['product_id']] = quantities.get(item['product_id'], 0) + quantity

    if not quantities:
        raise EmptyOrderError("O pedido precisa ter ao menos um item.")

    products = {
        p.id: p
        for p in Product.objects.select_for_update().filter(
            id__in=list(quantities),
            school=school,
            active=True,
        ).order_by('id')
    }

    order = Order.objects.create(school=school, buyer_name=buyer_name, buyer_email=buyer_email)
    total = Decimal('0.00')

    for product_id, quantity in quantities.items():
        product = products.get(product_id)
        if product is None:
            raise ProductUnavailableError(f"Produto {product_id} indisponível.")
        if product.stock < quantity:
            raise InsufficientStockError(
                f"Estoque insuficiente para {product.name} (disponível: {product.stock})."
            )

        product.stock -= quantity
        product.save(update_fields=['stock', 'updated_at'])

        OrderItem.objects.create(
            order=order,
            product=product,
            quantity=quantity,
            unit_price=product.price,
        )
        total += product.price * quantity

    order.total = total
    order.save(update_fields=['total', 'updated_at'])
    logger.info("Order %s placed with school %s: R$ %s", order.id, school.id, total)
    return order


@transaction.atomic
def cancel_order(*, order):
    """Cancel a pending order and put its items back in stock."""
    if order.status != OrderStatus.PENDING:
        raise OrderNotPendingError(f"Only pending orders can be cancelled (status: {order.status}).")

    for item in order.items.select_related('product').order_by('product_id'):
        product = Product.objects.select_for_update().get(id=item.product_id)
        product.stock += item.quantity
        product.save(update_fields=['stock', 'updated_at'])

    order.status = OrderStatus.CANCELLED
    order.save(update_fields=['status', 'updated_at'])
    return order
