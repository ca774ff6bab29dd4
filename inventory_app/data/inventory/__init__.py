"""
Inventory data models.

- warehouse / supplier / product - catalog and stock records
- order / order_item - orders and their line items (items owned by the order)
"""

from inventory_app.data.inventory.warehouse import Warehouse
from inventory_app.data.inventory.supplier import Supplier, SupplierStatus
from inventory_app.data.inventory.product import Product
from inventory_app.data.inventory.order import Order, OrderStatus, OrderType
from inventory_app.data.inventory.order_item import OrderItem

__all__ = [
    'Warehouse',
    'Supplier',
    'SupplierStatus',
    'Product',
    'Order',
    'OrderStatus',
    'OrderType',
    'OrderItem',
]
