"""
Stock level rules: reductions never go below zero, increases and reductions
cancel out, and negative quantities are rejected.
"""
import pytest

from inventory_app import db
from inventory_app.buisness.core.transaction import transaction
from inventory_app.buisness.inventory.errors import (
    InvalidArgumentError,
    NotFoundError,
    OutOfStockError,
)
from inventory_app.buisness.inventory.stock.stock_manager import StockManager
from inventory_app.data.inventory.product import Product


def stock_of(product_id):
    return db.session.get(Product, product_id).stock_quantity


def test_reduce_more_than_available_leaves_stock_unchanged(catalog):
    manager = StockManager()
    with pytest.raises(OutOfStockError) as exc_info:
        with transaction():
            manager.reduce_stock(catalog['gadget_id'], 3)

    assert stock_of(catalog['gadget_id']) == 2, "Stock should be untouched after a refused reduction"
    message = str(exc_info.value)
    assert message == "Insufficient stock for product: Gadget. Available: 2, Requested: 3"


def test_reduce_exact_stock_reaches_zero(catalog):
    with transaction():
        product = StockManager().reduce_stock(catalog['gadget_id'], 2)
    assert product.stock_quantity == 0
    assert product.is_low_stock


def test_increase_then_reduce_restores_original(catalog):
    manager = StockManager()
    original = stock_of(catalog['widget_id'])
    for quantity in (0, 1, 7, 50):
        with transaction():
            manager.increase_stock(catalog['widget_id'], quantity)
            manager.reduce_stock(catalog['widget_id'], quantity)
        assert stock_of(catalog['widget_id']) == original, f"Round trip of {quantity} changed stock"


def test_set_stock_overwrites_and_rejects_negative(catalog):
    manager = StockManager()
    with transaction():
        manager.set_stock(catalog['widget_id'], 7)
    assert stock_of(catalog['widget_id']) == 7

    with pytest.raises(InvalidArgumentError):
        manager.set_stock(catalog['widget_id'], -1)
    assert stock_of(catalog['widget_id']) == 7


def test_negative_quantities_are_invalid(catalog):
    manager = StockManager()
    with pytest.raises(InvalidArgumentError):
        manager.reduce_stock(catalog['widget_id'], -5)
    with pytest.raises(InvalidArgumentError):
        manager.increase_stock(catalog['widget_id'], -5)
    assert stock_of(catalog['widget_id']) == 50


def test_unknown_product_is_not_found(catalog):
    with pytest.raises(NotFoundError):
        StockManager().increase_stock(9999, 1)


def test_low_stock_is_derived_from_current_levels(catalog):
    gadget = db.session.get(Product, catalog['gadget_id'])
    assert gadget.is_low_stock, "stock 2 with min 10 is low"

    with transaction():
        StockManager().increase_stock(catalog['gadget_id'], 8)
    assert gadget.stock_quantity == 10
    assert gadget.is_low_stock, "stock equal to min level still counts as low"

    with transaction():
        StockManager().increase_stock(catalog['gadget_id'], 1)
    assert not gadget.is_low_stock
