from __future__ import annotations

from datetime import datetime

from sqlalchemy import update

from inventory_app import db
from inventory_app.data.inventory.product import Product
from inventory_app.buisness.inventory.errors import (
    InvalidArgumentError,
    NotFoundError,
    OutOfStockError,
)
from inventory_app.logger import get_logger

logger = get_logger("inventory_app.buisness.inventory.stock")


class StockManager:
    """
    Product stock level operations.

    Reductions and increases are single conditional UPDATE statements so that
    concurrent requests cannot drive stock below zero. Nothing is committed
    here; callers own the transaction.
    """

    def _get_product(self, product_id: int) -> Product:
        product = db.session.get(Product, product_id)
        if product is None:
            raise NotFoundError(f"Product not found with id: {product_id}")
        return product

    def _check_quantity(self, quantity: int) -> None:
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise InvalidArgumentError("quantity must be an integer")
        if quantity < 0:
            raise InvalidArgumentError("quantity must not be negative")

    def reduce_stock(self, product_id: int, quantity: int) -> Product:
        """Take quantity out of stock, failing with OutOfStockError when not enough is on hand."""
        self._check_quantity(quantity)
        product = self._get_product(product_id)

        result = db.session.execute(
            update(Product)
            .where(Product.id == product_id, Product.stock_quantity >= quantity)
            .values(
                stock_quantity=Product.stock_quantity - quantity,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        db.session.refresh(product)

        if result.rowcount != 1:
            logger.warning(
                f"Stock reduction refused for {product.sku}: "
                f"available {product.stock_quantity}, requested {quantity}"
            )
            raise OutOfStockError(product.name, product.stock_quantity, quantity)

        logger.info(f"Reduced stock of {product.sku} by {quantity} to {product.stock_quantity}")
        return product

    def increase_stock(self, product_id: int, quantity: int) -> Product:
        self._check_quantity(quantity)
        product = self._get_product(product_id)

        db.session.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(
                stock_quantity=Product.stock_quantity + quantity,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        db.session.refresh(product)

        logger.info(f"Increased stock of {product.sku} by {quantity} to {product.stock_quantity}")
        return product

    def set_stock(self, product_id: int, quantity: int) -> Product:
        """Overwrite the stock level; negative values are rejected."""
        if isinstance(quantity, int) and not isinstance(quantity, bool) and quantity < 0:
            raise InvalidArgumentError("Stock quantity cannot be negative")
        self._check_quantity(quantity)
        product = self._get_product(product_id)

        previous = product.stock_quantity
        product.stock_quantity = quantity
        db.session.flush()

        logger.info(f"Set stock of {product.sku} from {previous} to {quantity}")
        return product
