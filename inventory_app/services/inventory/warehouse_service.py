"""
Warehouse Service
Read-side queries, utilization and alerts for warehouses.
"""

from decimal import Decimal
from typing import Any, Dict, List, Tuple

from sqlalchemy import or_

from inventory_app import db
from inventory_app.data.inventory.product import Product
from inventory_app.data.inventory.warehouse import Warehouse
from inventory_app.buisness.inventory.errors import NotFoundError
from inventory_app.buisness.inventory.validation import LIKE_ESCAPE, like_pattern
from inventory_app.buisness.reporting import alerts, analytics


class WarehouseService:
    """
    Service for warehouse lookups and per-warehouse stock reporting.
    """

    @staticmethod
    def get_all() -> List[Warehouse]:
        return Warehouse.query.order_by(Warehouse.name).all()

    @staticmethod
    def get_by_id(warehouse_id: int) -> Warehouse:
        warehouse = db.session.get(Warehouse, warehouse_id)
        if warehouse is None:
            raise NotFoundError(f"Warehouse not found with id: {warehouse_id}")
        return warehouse

    @staticmethod
    def get_by_name(name: str) -> Warehouse:
        warehouse = Warehouse.query.filter(db.func.lower(Warehouse.name) == name.lower()).first()
        if warehouse is None:
            raise NotFoundError(f"Warehouse not found with name: {name}")
        return warehouse

    @staticmethod
    def search(term: str) -> List[Warehouse]:
        term = (term or '').strip()
        if not term:
            return WarehouseService.get_all()
        pattern = like_pattern(term)
        return Warehouse.query.filter(or_(
            Warehouse.name.ilike(pattern, escape=LIKE_ESCAPE),
            Warehouse.location.ilike(pattern, escape=LIKE_ESCAPE),
        )).order_by(Warehouse.name).all()

    @staticmethod
    def search_by_location(location: str) -> List[Warehouse]:
        pattern = like_pattern((location or '').strip())
        return Warehouse.query.filter(
            Warehouse.location.ilike(pattern, escape=LIKE_ESCAPE)
        ).order_by(Warehouse.name).all()

    @staticmethod
    def get_names() -> List[str]:
        return [row[0] for row in db.session.query(Warehouse.name).order_by(Warehouse.name).all()]

    @staticmethod
    def low_stock_counts() -> List[Tuple[Warehouse, int]]:
        """Every warehouse paired with its number of low-stock products."""
        counts = dict(
            db.session.query(Product.warehouse_id, db.func.count(Product.id))
            .filter(Product.stock_quantity <= Product.min_stock_level)
            .group_by(Product.warehouse_id)
            .all()
        )
        return [(w, counts.get(w.id, 0)) for w in WarehouseService.get_all()]

    @staticmethod
    def get_with_low_stock() -> List[Warehouse]:
        return [w for w, count in WarehouseService.low_stock_counts() if count > 0]

    @staticmethod
    def get_alerts() -> List[str]:
        return alerts.warehouse_alerts(
            (w.name, count) for w, count in WarehouseService.low_stock_counts()
        )

    @staticmethod
    def get_utilization(warehouse_id: int) -> Dict[str, Any]:
        """
        Stock utilization for one warehouse.

        Returns:
            Dictionary with product totals, low-stock share and inventory value
        """
        warehouse = WarehouseService.get_by_id(warehouse_id)
        products = warehouse.products.all()
        low_stock = sum(1 for p in products if p.is_low_stock)
        return {
            'warehouse_id': warehouse.id,
            'warehouse_name': warehouse.name,
            'location': warehouse.location,
            'total_products': len(products),
            'low_stock_products': low_stock,
            'total_inventory_value': analytics.inventory_value(products),
            'low_stock_percentage': analytics.percentage(low_stock, len(products), empty=0.0),
        }

    @staticmethod
    def inventory_value_by_warehouse() -> Dict[str, Decimal]:
        return {w.name: analytics.inventory_value(w.products.all()) for w in WarehouseService.get_all()}

    @staticmethod
    def product_count_by_warehouse() -> Dict[str, int]:
        return {w.name: w.products.count() for w in WarehouseService.get_all()}

    @staticmethod
    def group_by_city() -> Dict[str, List[str]]:
        groups = analytics.group_by(WarehouseService.get_all(), lambda w: analytics.city_token(w.location))
        return {city: [w.name for w in members] for city, members in groups.items()}

    @staticmethod
    def total_products() -> int:
        return Product.query.filter(Product.warehouse_id.isnot(None)).count()

    @staticmethod
    def get_summary() -> Dict[str, Any]:
        warehouses = WarehouseService.get_all()
        low_stock = WarehouseService.get_with_low_stock()
        return {
            'total_warehouses': len(warehouses),
            'total_products': WarehouseService.total_products(),
            'warehouses_with_low_stock': len(low_stock),
            'total_inventory_value': analytics.inventory_value(Product.query.all()),
            'warehouse_names': [w.name for w in warehouses],
        }

    @staticmethod
    def total_count() -> int:
        return Warehouse.query.count()
