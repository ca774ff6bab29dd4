from __future__ import annotations

from inventory_app import db
from inventory_app.data.inventory.order_item import OrderItem
from inventory_app.data.inventory.product import Product
from inventory_app.data.inventory.supplier import Supplier
from inventory_app.data.inventory.warehouse import Warehouse
from inventory_app.buisness.inventory.errors import ConflictError, NotFoundError
from inventory_app.buisness.inventory.validation import (
    optional_text,
    parse_int,
    parse_positive_decimal,
    require_text,
)
from inventory_app.logger import get_logger

logger = get_logger("inventory_app.buisness.inventory.catalog.product")


class ProductManager:
    """
    Product create/update/delete.

    Stock levels are changed through StockManager; update() only accepts a
    stock_quantity as an outright overwrite, with the same non-negative rule.
    """

    def get(self, product_id: int) -> Product:
        product = db.session.get(Product, product_id)
        if product is None:
            raise NotFoundError(f"Product not found with id: {product_id}")
        return product

    def _check_sku_free(self, sku: str, exclude_id: int | None = None) -> None:
        query = Product.query.filter(Product.sku == sku)
        if exclude_id is not None:
            query = query.filter(Product.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(f"Product with SKU '{sku}' already exists")

    def _resolve_warehouse(self, warehouse_id) -> Warehouse:
        warehouse_id = parse_int(warehouse_id, 'warehouse_id', minimum=1)
        warehouse = db.session.get(Warehouse, warehouse_id)
        if warehouse is None:
            raise NotFoundError(f"Warehouse not found with id: {warehouse_id}")
        return warehouse

    def _resolve_supplier(self, supplier_id) -> Supplier | None:
        if supplier_id is None or supplier_id == '':
            return None
        supplier_id = parse_int(supplier_id, 'supplier_id', minimum=1)
        supplier = db.session.get(Supplier, supplier_id)
        if supplier is None:
            raise NotFoundError(f"Supplier not found with id: {supplier_id}")
        return supplier

    def create(self, data: dict) -> Product:
        name = require_text(data, 'name')
        sku = require_text(data, 'sku')
        self._check_sku_free(sku)

        product = Product(
            name=name,
            sku=sku,
            description=optional_text(data.get('description')),
            category=optional_text(data.get('category')),
            price=parse_positive_decimal(data.get('price'), 'price'),
            stock_quantity=parse_int(data.get('stock_quantity', 0), 'stock_quantity'),
            min_stock_level=parse_int(data.get('min_stock_level', 0), 'min_stock_level'),
            warehouse=self._resolve_warehouse(data.get('warehouse_id')),
            supplier=self._resolve_supplier(data.get('supplier_id')),
        )
        db.session.add(product)
        db.session.flush()
        logger.info(f"Created product {product.sku} (ID: {product.id})")
        return product

    def update(self, product_id: int, data: dict) -> Product:
        product = self.get(product_id)

        if 'name' in data:
            product.name = require_text(data, 'name')
        if 'sku' in data:
            sku = require_text(data, 'sku')
            self._check_sku_free(sku, exclude_id=product.id)
            product.sku = sku
        if 'description' in data:
            product.description = optional_text(data.get('description'))
        if 'category' in data:
            product.category = optional_text(data.get('category'))
        if 'price' in data:
            product.price = parse_positive_decimal(data.get('price'), 'price')
        if 'stock_quantity' in data:
            product.stock_quantity = parse_int(data.get('stock_quantity'), 'stock_quantity')
        if 'min_stock_level' in data:
            product.min_stock_level = parse_int(data.get('min_stock_level'), 'min_stock_level')
        if 'warehouse_id' in data:
            product.warehouse = self._resolve_warehouse(data.get('warehouse_id'))
        if 'supplier_id' in data:
            product.supplier = self._resolve_supplier(data.get('supplier_id'))

        db.session.flush()
        logger.info(f"Updated product {product.sku} (ID: {product.id})")
        return product

    def delete(self, product_id: int) -> None:
        """Delete a product unless order line items still reference it."""
        product = self.get(product_id)
        item_count = OrderItem.query.filter_by(product_id=product.id).count()
        if item_count:
            raise ConflictError(
                f"Cannot delete product '{product.sku}': referenced by {item_count} order item(s)"
            )
        db.session.delete(product)
        db.session.flush()
        logger.info(f"Deleted product {product.sku} (ID: {product_id})")
