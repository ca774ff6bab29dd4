"""
Shared test helpers
"""
from datetime import datetime, timedelta
from decimal import Decimal

from inventory_app.buisness.core.transaction import transaction
from inventory_app.buisness.inventory.catalog.product_manager import ProductManager
from inventory_app.buisness.inventory.catalog.supplier_manager import SupplierManager
from inventory_app.buisness.inventory.catalog.warehouse_manager import WarehouseManager


TEST_USER = {'username': 'clerk', 'email': 'clerk@example.com', 'password': 'correct-horse'}


def create_catalog():
    """
    One warehouse, one active supplier and two products:
    - widget: price 10.00, stock 50, min 5
    - gadget: price 5.00, stock 2, min 10 (low stock)
    """
    with transaction():
        warehouse = WarehouseManager().create({'name': 'Central', 'location': '1 Dock Road, Springfield'})
        supplier = SupplierManager().create({
            'name': 'Acme Supply',
            'email': 'orders@acme.example',
            'address': '42 Main Street, Shelbyville',
        })
        widget = ProductManager().create({
            'name': 'Widget',
            'sku': 'WID-001',
            'category': 'Hardware',
            'price': '10.00',
            'stock_quantity': 50,
            'min_stock_level': 5,
            'warehouse_id': warehouse.id,
            'supplier_id': supplier.id,
        })
        gadget = ProductManager().create({
            'name': 'Gadget',
            'sku': 'GAD-001',
            'category': 'Electronics',
            'price': '5.00',
            'stock_quantity': 2,
            'min_stock_level': 10,
            'warehouse_id': warehouse.id,
        })
    return {
        'warehouse_id': warehouse.id,
        'supplier_id': supplier.id,
        'widget_id': widget.id,
        'gadget_id': gadget.id,
    }


def past(days=3):
    return (datetime.utcnow() - timedelta(days=days)).isoformat()


def future(days=3):
    return (datetime.utcnow() + timedelta(days=days)).isoformat()


def money(value):
    return Decimal(value).quantize(Decimal('0.01'))
