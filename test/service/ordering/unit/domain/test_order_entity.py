"""
Unit tests for the Order aggregate and its value objects

測試重點：
1. total 在建立時計算一次，等於各 item price * quantity 之和
2. 空訂單不可建立
3. cancel 只允許 pending
"""

from decimal import Decimal

import pytest

from src.platform.exception.exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    InvalidTransitionError,
)
from src.service.ordering.domain.entity.order_entity import Order, OrderItem
from src.service.ordering.domain.enum.order_status import OrderStatus
from src.service.ordering.domain.value_object.order_line import OrderLine
from src.service.ordering.domain.value_object.price_snapshot import PriceSnapshot
from test.service.ordering.builders import BUYER_ID, make_order, make_product


class TestPriceSnapshot:
    def test_captures_product_price_at_snapshot_time(self):
        product = make_product(price='10.99')
        snapshot = PriceSnapshot.from_product(product)

        product.price = Decimal('15.00')

        assert snapshot.unit_price == Decimal('10.99')
        assert snapshot.product_id == product.id

    def test_line_total_is_rounded_to_cents(self):
        snapshot = PriceSnapshot(product_id=1, unit_price=Decimal('0.333'))

        assert snapshot.unit_price == Decimal('0.33')
        assert snapshot.line_total(3) == Decimal('0.99')


class TestOrderLine:
    def test_rejects_quantity_below_one(self):
        with pytest.raises(InvalidArgumentError):
            OrderLine(product_id=1, quantity=0)

    def test_merge_sums_duplicate_products_in_first_seen_order(self):
        merged = OrderLine.merge(
            [
                OrderLine(product_id=5, quantity=1),
                OrderLine(product_id=3, quantity=2),
                OrderLine(product_id=5, quantity=4),
            ]
        )

        assert merged == [OrderLine(product_id=5, quantity=5), OrderLine(product_id=3, quantity=2)]


class TestOrderCreate:
    def test_total_is_sum_of_line_totals(self):
        items = [
            OrderItem.create(
                product_id=1,
                quantity=2,
                price_snapshot=PriceSnapshot(product_id=1, unit_price=Decimal('10.99')),
            ),
            OrderItem.create(
                product_id=2,
                quantity=1,
                price_snapshot=PriceSnapshot(product_id=2, unit_price=Decimal('5.50')),
            ),
        ]

        order = Order.create(buyer_id=BUYER_ID, items=items)

        assert order.total == Decimal('27.48')
        assert order.status == OrderStatus.PENDING
        assert order.buyer_id == BUYER_ID
        assert order.created_at == order.updated_at
        assert order.id.version == 7
        assert all(item.id.version == 7 for item in order.items)

    def test_empty_order_is_rejected(self):
        with pytest.raises(InvalidArgumentError, match='at least one item'):
            Order.create(buyer_id=BUYER_ID, items=[])

    def test_item_rejects_non_positive_quantity(self):
        with pytest.raises(InvalidArgumentError):
            OrderItem.create(
                product_id=1,
                quantity=0,
                price_snapshot=PriceSnapshot(product_id=1, unit_price=Decimal('1.00')),
            )


class TestOrderLifecycle:
    def test_transition_returns_new_order_with_fresh_updated_at(self):
        order = make_order()

        accepted = order.transition_to(OrderStatus.ACCEPTED)

        assert accepted.status == OrderStatus.ACCEPTED
        assert order.status == OrderStatus.PENDING
        assert accepted.updated_at >= order.updated_at
        assert accepted.total == order.total

    def test_transition_outside_table_raises(self):
        order = make_order(status=OrderStatus.ACCEPTED)

        with pytest.raises(InvalidTransitionError):
            order.transition_to(OrderStatus.PENDING)

    def test_cancel_pending(self):
        canceled = make_order().cancel()

        assert canceled.status == OrderStatus.CANCELED

    @pytest.mark.parametrize(
        'status', [OrderStatus.ACCEPTED, OrderStatus.DELIVERED, OrderStatus.CANCELED]
    )
    def test_cancel_non_pending_raises_invalid_state(self, status):
        with pytest.raises(InvalidStateError) as exc_info:
            make_order(status=status).cancel()

        assert exc_info.value.message == (
            f'Cannot cancel order with status "{status.value}". Only pending orders can be canceled'
        )

    def test_seller_ids_come_from_item_products(self):
        order = make_order(
            products=[
                (make_product(product_id=1, seller_id=4), 1),
                (make_product(product_id=2, seller_id=5), 1),
                (make_product(product_id=3, seller_id=4), 1),
            ]
        )

        assert order.seller_ids == {4, 5}
