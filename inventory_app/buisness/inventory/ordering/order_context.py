from __future__ import annotations

from datetime import datetime

from inventory_app import db
from inventory_app.data.inventory.order import Order, OrderStatus, OrderType
from inventory_app.data.inventory.order_item import OrderItem
from inventory_app.buisness.inventory.errors import (
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    OutOfStockError,
)
from inventory_app.buisness.inventory.ordering.order_factory import OrderFactory
from inventory_app.buisness.inventory.ordering.order_state_machine import OrderStateMachine
from inventory_app.buisness.inventory.stock.stock_manager import StockManager
from inventory_app.buisness.inventory.validation import optional_text, parse_datetime
from inventory_app.logger import get_logger

logger = get_logger("inventory_app.buisness.inventory.ordering.context")


class OrderContext:
    """
    Business wrapper around one order.

    Status transitions and their stock side effects:
    - process (PENDING -> CONFIRMED): SALE orders take every line out of stock
    - ship (CONFIRMED -> SHIPPED)
    - deliver (SHIPPED -> DELIVERED): PURCHASE orders put every line into stock
    - cancel (-> CANCELLED): SALE orders past PENDING give their stock back

    Nothing is committed here. When the caller runs a transition inside
    transaction(), a failure on any line rolls back the lines before it.
    """

    def __init__(self, order_id: int, *, stock_manager: StockManager | None = None):
        self.order_id = order_id
        self.stock_manager = stock_manager or StockManager()
        self._order = None

    @property
    def order(self) -> Order:
        if self._order is None:
            self._order = db.session.get(Order, self.order_id)
            if self._order is None:
                raise NotFoundError(f"Order not found with id: {self.order_id}")
        return self._order

    def _move_to(self, target: OrderStatus) -> OrderStatus:
        order = self.order
        previous = order.status
        OrderStateMachine.validate_transition(order.order_number, previous, target)
        order.status = target
        return previous

    # Transitions

    def process(self) -> Order:
        order = self.order
        self._move_to(OrderStatus.CONFIRMED)

        if order.order_type == OrderType.SALE:
            for item in order.items:
                try:
                    self.stock_manager.reduce_stock(item.product_id, item.quantity)
                except OutOfStockError as e:
                    logger.warning(f"Processing of order {order.order_number} failed: {e}")
                    raise OutOfStockError(
                        e.product_name, e.available, e.requested, order_number=order.order_number
                    ) from e

        db.session.flush()
        logger.info(f"Order {order.order_number} processed (CONFIRMED)")
        return order

    def ship(self) -> Order:
        order = self.order
        self._move_to(OrderStatus.SHIPPED)
        db.session.flush()
        logger.info(f"Order {order.order_number} shipped")
        return order

    def deliver(self) -> Order:
        order = self.order
        self._move_to(OrderStatus.DELIVERED)
        order.actual_delivery_date = datetime.utcnow()

        if order.order_type == OrderType.PURCHASE:
            for item in order.items:
                self.stock_manager.increase_stock(item.product_id, item.quantity)

        db.session.flush()
        logger.info(f"Order {order.order_number} delivered")
        return order

    def cancel(self) -> Order:
        order = self.order
        previous = self._move_to(OrderStatus.CANCELLED)

        # Stock was only taken for SALE orders that got past PENDING
        if order.order_type == OrderType.SALE and previous != OrderStatus.PENDING:
            for item in order.items:
                self.stock_manager.increase_stock(item.product_id, item.quantity)

        db.session.flush()
        logger.info(f"Order {order.order_number} cancelled (was {previous.value})")
        return order

    # Line items

    def _require_pending(self, action: str) -> None:
        order = self.order
        if order.status != OrderStatus.PENDING:
            raise InvalidStateError(
                f"Cannot {action} order {order.order_number}: items can only change while PENDING "
                f"(current status {order.status.value})"
            )

    def add_item(self, item_data: dict) -> OrderItem:
        self._require_pending('add items to')
        order = self.order
        item = OrderFactory.build_item(item_data)
        order.items.append(item)
        order.calculate_total_amount()
        db.session.flush()
        logger.info(f"Added product {item.product_id} x{item.quantity} to order {order.order_number}")
        return item

    def remove_item(self, item_id: int) -> Order:
        self._require_pending('remove items from')
        order = self.order
        item = next((i for i in order.items if i.id == item_id), None)
        if item is None:
            raise NotFoundError(f"Order item {item_id} not found on order {order.order_number}")
        order.items.remove(item)
        order.calculate_total_amount()
        db.session.flush()
        logger.info(f"Removed item {item_id} from order {order.order_number}")
        return order

    def replace_items(self, items_data: list) -> Order:
        self._require_pending('replace items of')
        if not isinstance(items_data, list):
            raise InvalidArgumentError("items must be a list")
        order = self.order
        new_items = [OrderFactory.build_item(item_data) for item_data in items_data]
        order.items.clear()
        # Flush the orphan deletes before new rows go in
        db.session.flush()
        order.items.extend(new_items)
        order.calculate_total_amount()
        db.session.flush()
        logger.info(f"Replaced items of order {order.order_number} ({len(new_items)} item(s))")
        return order

    # Header fields

    def update(self, data: dict) -> Order:
        """
        Update supplier, dates, notes and (while PENDING) the line items.

        Status cannot be set here; the transition methods own it.
        """
        order = self.order
        if 'status' in data and data['status'] not in (None, order.status.value):
            raise InvalidArgumentError(
                "Order status cannot be changed directly; use process, ship, deliver or cancel"
            )
        if 'order_type' in data and data['order_type'] not in (None, order.order_type.value):
            raise InvalidArgumentError("Order type cannot be changed after creation")

        if 'supplier_id' in data:
            order.supplier = OrderFactory.resolve_supplier(data.get('supplier_id'))
        if 'expected_delivery_date' in data:
            order.expected_delivery_date = parse_datetime(
                data.get('expected_delivery_date'), 'expected_delivery_date'
            )
        if 'order_date' in data and data.get('order_date'):
            order.order_date = parse_datetime(data.get('order_date'), 'order_date')
        if 'notes' in data:
            order.notes = optional_text(data.get('notes'))
        if 'items' in data:
            self.replace_items(data.get('items'))

        db.session.flush()
        logger.info(f"Updated order {order.order_number}")
        return order

    def delete(self) -> None:
        """Delete the order and its line items; stock levels are left as they are."""
        order = self.order
        order_number = order.order_number
        for item in list(order.items):
            order.items.remove(item)
        db.session.flush()
        db.session.delete(order)
        db.session.flush()
        self._order = None
        logger.info(f"Deleted order {order_number} (ID: {self.order_id})")
