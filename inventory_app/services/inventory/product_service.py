"""
Product Service
Read-side queries and analytics for products.
"""

from decimal import Decimal
from typing import Dict, List

from sqlalchemy import or_

from inventory_app import db
from inventory_app.data.inventory.product import Product
from inventory_app.buisness.inventory.errors import NotFoundError
from inventory_app.buisness.inventory.validation import LIKE_ESCAPE, like_pattern
from inventory_app.buisness.reporting import alerts, analytics


class ProductService:
    """
    Service for product lookups, search and stock analytics.
    """

    @staticmethod
    def get_all() -> List[Product]:
        return Product.query.order_by(Product.name).all()

    @staticmethod
    def get_by_id(product_id: int) -> Product:
        product = db.session.get(Product, product_id)
        if product is None:
            raise NotFoundError(f"Product not found with id: {product_id}")
        return product

    @staticmethod
    def get_by_sku(sku: str) -> Product:
        product = Product.query.filter_by(sku=sku).first()
        if product is None:
            raise NotFoundError(f"Product not found with SKU: {sku}")
        return product

    @staticmethod
    def get_by_category(category: str) -> List[Product]:
        return Product.query.filter(
            db.func.lower(Product.category) == category.lower()
        ).order_by(Product.name).all()

    @staticmethod
    def get_by_warehouse(warehouse_id: int) -> List[Product]:
        return Product.query.filter_by(warehouse_id=warehouse_id).order_by(Product.name).all()

    @staticmethod
    def get_by_supplier(supplier_id: int) -> List[Product]:
        return Product.query.filter_by(supplier_id=supplier_id).order_by(Product.name).all()

    @staticmethod
    def get_categories() -> List[str]:
        rows = db.session.query(Product.category).filter(
            Product.category.isnot(None)
        ).distinct().order_by(Product.category).all()
        return [row[0] for row in rows]

    @staticmethod
    def search(term: str) -> List[Product]:
        """
        Case-insensitive search over name, description, SKU and category.

        Args:
            term: Search text; blank returns every product

        Returns:
            Matching products ordered by name
        """
        term = (term or '').strip()
        if not term:
            return ProductService.get_all()
        pattern = like_pattern(term)
        return Product.query.filter(or_(
            Product.name.ilike(pattern, escape=LIKE_ESCAPE),
            Product.description.ilike(pattern, escape=LIKE_ESCAPE),
            Product.sku.ilike(pattern, escape=LIKE_ESCAPE),
            Product.category.ilike(pattern, escape=LIKE_ESCAPE),
        )).order_by(Product.name).all()

    @staticmethod
    def get_low_stock() -> List[Product]:
        """Products at or below their minimum level, lowest stock first."""
        return Product.query.filter(
            Product.stock_quantity <= Product.min_stock_level
        ).order_by(Product.stock_quantity.asc(), Product.name).all()

    @staticmethod
    def count_low_stock() -> int:
        return Product.query.filter(Product.stock_quantity <= Product.min_stock_level).count()

    @staticmethod
    def get_low_stock_alerts() -> List[str]:
        return alerts.low_stock_alerts(ProductService.get_low_stock())

    @staticmethod
    def total_inventory_value() -> Decimal:
        return analytics.inventory_value(Product.query.all())

    @staticmethod
    def inventory_value_by_category() -> Dict[str, Decimal]:
        return analytics.inventory_value_by(Product.query.all(), lambda p: p.category)

    @staticmethod
    def count_by_category() -> Dict[str, int]:
        return analytics.count_by(Product.query.all(), lambda p: p.category)

    @staticmethod
    def top_expensive(limit: int = 10) -> List[Product]:
        return Product.query.order_by(Product.price.desc(), Product.name).limit(limit).all()

    @staticmethod
    def total_count() -> int:
        return Product.query.count()
