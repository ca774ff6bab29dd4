from __future__ import annotations

from datetime import date, datetime
from uuid import uuid4

from inventory_app import db
from inventory_app.data.inventory.order import Order, OrderStatus, OrderType
from inventory_app.data.inventory.order_item import OrderItem
from inventory_app.data.inventory.product import Product
from inventory_app.data.inventory.supplier import Supplier
from inventory_app.buisness.inventory.errors import InvalidArgumentError, NotFoundError
from inventory_app.buisness.inventory.validation import (
    optional_text,
    parse_datetime,
    parse_enum,
    parse_int,
    parse_positive_decimal,
)
from inventory_app.logger import get_logger

logger = get_logger("inventory_app.buisness.inventory.ordering.factory")


class OrderFactory:
    """
    Creates orders and their line items.

    New orders always start PENDING; later states are reached only through
    OrderContext so their stock side effects are applied.
    """

    @staticmethod
    def _generate_order_number() -> str:
        return f"ORD-{date.today().isoformat()}-{uuid4().hex[:8].upper()}"

    @staticmethod
    def resolve_supplier(supplier_id) -> Supplier | None:
        if supplier_id is None or supplier_id == '':
            return None
        supplier_id = parse_int(supplier_id, 'supplier_id', minimum=1)
        supplier = db.session.get(Supplier, supplier_id)
        if supplier is None:
            raise NotFoundError(f"Supplier not found with id: {supplier_id}")
        return supplier

    @staticmethod
    def build_item(item_data: dict) -> OrderItem:
        """
        Build an unattached line item.

        unit_price defaults to the product's current price when omitted.
        """
        if not isinstance(item_data, dict):
            raise InvalidArgumentError("Each item must be an object with product_id and quantity")

        product_id = parse_int(item_data.get('product_id'), 'product_id', minimum=1)
        product = db.session.get(Product, product_id)
        if product is None:
            raise NotFoundError(f"Product not found with id: {product_id}")

        quantity = parse_int(item_data.get('quantity'), 'quantity', minimum=1)
        if item_data.get('unit_price') is None:
            unit_price = product.price
        else:
            unit_price = parse_positive_decimal(item_data.get('unit_price'), 'unit_price')

        return OrderItem(product=product, quantity=quantity, unit_price=unit_price)

    @classmethod
    def create(cls, data: dict) -> Order:
        """
        Create a PENDING order from request data.

        Args:
            data: order_type (required), supplier_id, order_date,
                expected_delivery_date, notes and an items list

        Returns:
            Order with its total computed (flushed, not committed)
        """
        order_type = parse_enum(OrderType, data.get('order_type'), 'order_type')
        items_data = data.get('items') or []
        if not isinstance(items_data, list):
            raise InvalidArgumentError("items must be a list")

        order = Order(
            order_number=cls._generate_order_number(),
            status=OrderStatus.PENDING,
            order_type=order_type,
            supplier=cls.resolve_supplier(data.get('supplier_id')),
            order_date=parse_datetime(data.get('order_date'), 'order_date') or datetime.utcnow(),
            expected_delivery_date=parse_datetime(data.get('expected_delivery_date'), 'expected_delivery_date'),
            notes=optional_text(data.get('notes')),
        )
        for item_data in items_data:
            order.items.append(cls.build_item(item_data))
        order.calculate_total_amount()

        db.session.add(order)
        db.session.flush()
        logger.info(
            f"Created order {order.order_number} (ID: {order.id}), type {order_type.value}, "
            f"{len(order.items)} item(s), total {order.total_amount}"
        )
        return order
