from __future__ import annotations

from inventory_app import db
from inventory_app.data.inventory.warehouse import Warehouse
from inventory_app.buisness.inventory.errors import ConflictError, NotFoundError
from inventory_app.buisness.inventory.validation import require_text
from inventory_app.logger import get_logger

logger = get_logger("inventory_app.buisness.inventory.catalog.warehouse")


class WarehouseManager:
    """Create, update and delete warehouses."""

    def get(self, warehouse_id: int) -> Warehouse:
        warehouse = db.session.get(Warehouse, warehouse_id)
        if warehouse is None:
            raise NotFoundError(f"Warehouse not found with id: {warehouse_id}")
        return warehouse

    def _check_name_free(self, name: str, exclude_id: int | None = None) -> None:
        query = Warehouse.query.filter(db.func.lower(Warehouse.name) == name.lower())
        if exclude_id is not None:
            query = query.filter(Warehouse.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(f"Warehouse with name '{name}' already exists")

    def create(self, data: dict) -> Warehouse:
        name = require_text(data, 'name')
        location = require_text(data, 'location')
        self._check_name_free(name)

        warehouse = Warehouse(name=name, location=location)
        db.session.add(warehouse)
        db.session.flush()
        logger.info(f"Created warehouse {warehouse.name} (ID: {warehouse.id})")
        return warehouse

    def update(self, warehouse_id: int, data: dict) -> Warehouse:
        warehouse = self.get(warehouse_id)
        if 'name' in data:
            name = require_text(data, 'name')
            self._check_name_free(name, exclude_id=warehouse.id)
            warehouse.name = name
        if 'location' in data:
            warehouse.location = require_text(data, 'location')
        db.session.flush()
        logger.info(f"Updated warehouse {warehouse.name} (ID: {warehouse.id})")
        return warehouse

    def delete(self, warehouse_id: int) -> None:
        """Delete an empty warehouse; one still holding products is a conflict."""
        warehouse = self.get(warehouse_id)
        product_count = warehouse.products.count()
        if product_count:
            raise ConflictError(
                f"Cannot delete warehouse '{warehouse.name}': it still holds {product_count} product(s)"
            )
        db.session.delete(warehouse)
        db.session.flush()
        logger.info(f"Deleted warehouse {warehouse.name} (ID: {warehouse_id})")
