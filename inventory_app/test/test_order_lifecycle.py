"""
Order status transitions and their stock side effects
"""
from decimal import Decimal

import pytest

from inventory_app import db
from inventory_app.buisness.core.transaction import transaction
from inventory_app.buisness.inventory.errors import InvalidStateError, OutOfStockError
from inventory_app.buisness.inventory.ordering import OrderContext, OrderFactory, OrderStateMachine
from inventory_app.data.inventory.order import OrderStatus
from inventory_app.data.inventory.product import Product


def make_order(catalog, order_type, items):
    with transaction():
        order = OrderFactory.create({
            'order_type': order_type,
            'supplier_id': catalog['supplier_id'],
            'items': items,
        })
    return order.id


def stock_of(product_id):
    return db.session.get(Product, product_id).stock_quantity


def run(order_id, action):
    with transaction():
        return getattr(OrderContext(order_id), action)()


class TestStateMachine:

    def test_forward_path_and_cancellation(self):
        assert OrderStateMachine.can_transition(OrderStatus.PENDING, OrderStatus.CONFIRMED)
        assert OrderStateMachine.can_transition(OrderStatus.CONFIRMED, OrderStatus.SHIPPED)
        assert OrderStateMachine.can_transition(OrderStatus.SHIPPED, OrderStatus.DELIVERED)
        for status in (OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.SHIPPED):
            assert OrderStateMachine.can_transition(status, OrderStatus.CANCELLED)

    def test_terminal_states_have_no_exits(self):
        for status in OrderStateMachine.TERMINAL_STATES:
            assert OrderStateMachine.get_allowed_transitions(status) == set()
            assert not OrderStateMachine.can_transition(status, OrderStatus.CANCELLED)

    def test_delayed_is_never_a_target(self):
        for status in OrderStatus:
            assert not OrderStateMachine.can_transition(status, OrderStatus.DELAYED)

    def test_skipping_a_step_is_rejected(self):
        with pytest.raises(InvalidStateError):
            OrderStateMachine.validate_transition('ORD-X', OrderStatus.PENDING, OrderStatus.SHIPPED)


def test_sale_order_reduces_stock_on_process_and_restores_on_cancel(catalog):
    order_id = make_order(catalog, 'SALE', [
        {'product_id': catalog['widget_id'], 'quantity': 4},
        {'product_id': catalog['gadget_id'], 'quantity': 2},
    ])

    order = run(order_id, 'process')
    assert order.status == OrderStatus.CONFIRMED
    assert stock_of(catalog['widget_id']) == 46
    assert stock_of(catalog['gadget_id']) == 0

    order = run(order_id, 'cancel')
    assert order.status == OrderStatus.CANCELLED
    assert stock_of(catalog['widget_id']) == 50, "Cancelling must give back exactly what process took"
    assert stock_of(catalog['gadget_id']) == 2


def test_cancelling_pending_sale_does_not_touch_stock(catalog):
    order_id = make_order(catalog, 'SALE', [{'product_id': catalog['widget_id'], 'quantity': 4}])
    run(order_id, 'cancel')
    assert stock_of(catalog['widget_id']) == 50


def test_process_is_all_or_nothing(catalog):
    order_id = make_order(catalog, 'SALE', [
        {'product_id': catalog['widget_id'], 'quantity': 5},
        {'product_id': catalog['gadget_id'], 'quantity': 3},
    ])

    with pytest.raises(OutOfStockError) as exc_info:
        run(order_id, 'process')

    order_number = OrderContext(order_id).order.order_number
    assert str(exc_info.value).startswith(f"Cannot process order {order_number}: Insufficient stock for product: Gadget")
    assert stock_of(catalog['widget_id']) == 50, "Earlier line reductions must be rolled back"
    assert stock_of(catalog['gadget_id']) == 2
    assert OrderContext(order_id).order.status == OrderStatus.PENDING


def test_purchase_order_adds_stock_on_delivery(catalog):
    order_id = make_order(catalog, 'PURCHASE', [{'product_id': catalog['gadget_id'], 'quantity': 20}])

    run(order_id, 'process')
    assert stock_of(catalog['gadget_id']) == 2, "Processing a purchase does not move stock"
    run(order_id, 'ship')
    order = run(order_id, 'deliver')

    assert order.status == OrderStatus.DELIVERED
    assert order.actual_delivery_date is not None
    assert stock_of(catalog['gadget_id']) == 22


def test_transfer_order_never_moves_stock(catalog):
    order_id = make_order(catalog, 'TRANSFER', [{'product_id': catalog['widget_id'], 'quantity': 10}])
    for action in ('process', 'ship', 'deliver'):
        run(order_id, action)
    assert stock_of(catalog['widget_id']) == 50


def test_illegal_transitions(catalog):
    order_id = make_order(catalog, 'PURCHASE', [{'product_id': catalog['widget_id'], 'quantity': 1}])

    with pytest.raises(InvalidStateError):
        run(order_id, 'ship')
    with pytest.raises(InvalidStateError):
        run(order_id, 'deliver')

    run(order_id, 'process')
    with pytest.raises(InvalidStateError):
        run(order_id, 'process')

    run(order_id, 'ship')
    run(order_id, 'deliver')
    with pytest.raises(InvalidStateError):
        run(order_id, 'cancel')
    assert OrderContext(order_id).order.status == OrderStatus.DELIVERED


def test_cancelled_order_cannot_be_cancelled_again(catalog):
    order_id = make_order(catalog, 'SALE', [{'product_id': catalog['widget_id'], 'quantity': 3}])
    run(order_id, 'process')
    run(order_id, 'cancel')
    with pytest.raises(InvalidStateError):
        run(order_id, 'cancel')
    assert stock_of(catalog['widget_id']) == 50, "A second cancel must not restore stock twice"


def test_total_follows_line_item_changes(catalog):
    order_id = make_order(catalog, 'SALE', [
        {'product_id': catalog['widget_id'], 'quantity': 2, 'unit_price': '10'},
        {'product_id': catalog['gadget_id'], 'quantity': 3, 'unit_price': '5'},
    ])
    ctx = OrderContext(order_id)
    assert ctx.order.total_amount == Decimal('35.00')

    with transaction():
        item = ctx.add_item({'product_id': catalog['widget_id'], 'quantity': 1})
    assert item.unit_price == Decimal('10.00'), "Unit price defaults to the product price"
    assert ctx.order.total_amount == Decimal('45.00')

    with transaction():
        ctx.remove_item(item.id)
    assert ctx.order.total_amount == Decimal('35.00')

    with transaction():
        ctx.replace_items([{'product_id': catalog['gadget_id'], 'quantity': 1, 'unit_price': '0.10'}])
    assert ctx.order.total_amount == Decimal('0.10')
    assert ctx.order.total_amount == sum(i.unit_price * i.quantity for i in ctx.order.items)


def test_items_are_frozen_after_pending(catalog):
    order_id = make_order(catalog, 'PURCHASE', [{'product_id': catalog['widget_id'], 'quantity': 1}])
    run(order_id, 'process')
    with pytest.raises(InvalidStateError):
        with transaction():
            OrderContext(order_id).add_item({'product_id': catalog['gadget_id'], 'quantity': 1})


def test_delete_removes_items_but_not_stock(catalog):
    order_id = make_order(catalog, 'SALE', [{'product_id': catalog['widget_id'], 'quantity': 5}])
    run(order_id, 'process')
    run(order_id, 'delete')

    from inventory_app.data.inventory.order_item import OrderItem
    assert OrderItem.query.count() == 0
    assert stock_of(catalog['widget_id']) == 45
