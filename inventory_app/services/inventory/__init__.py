from inventory_app.services.inventory.product_service import ProductService
from inventory_app.services.inventory.supplier_service import SupplierService
from inventory_app.services.inventory.warehouse_service import WarehouseService
from inventory_app.services.inventory.order_service import OrderService

__all__ = ['ProductService', 'SupplierService', 'WarehouseService', 'OrderService']
