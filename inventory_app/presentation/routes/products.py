"""
Product routes - CRUD, stock mutation, search and analytics
"""
from flask import Blueprint, jsonify

from inventory_app.auth import require_login
from inventory_app.buisness.core.transaction import transaction
from inventory_app.buisness.inventory.catalog.product_manager import ProductManager
from inventory_app.buisness.inventory.stock.stock_manager import StockManager
from inventory_app.logger import get_logger
from inventory_app.presentation.routes.request_helpers import (
    int_arg,
    json_body,
    quantity_param,
    search_term,
    to_dicts,
)
from inventory_app.services.inventory.product_service import ProductService

logger = get_logger("inventory_app.routes.products")

bp = Blueprint('products', __name__)
bp.before_request(require_login)


@bp.route('', methods=['GET'])
def list_products():
    return jsonify(to_dicts(ProductService.get_all()))


@bp.route('/<int:product_id>', methods=['GET'])
def get_product(product_id):
    return jsonify(ProductService.get_by_id(product_id).to_dict())


@bp.route('/sku/<string:sku>', methods=['GET'])
def get_product_by_sku(sku):
    return jsonify(ProductService.get_by_sku(sku).to_dict())


@bp.route('/category/<string:category>', methods=['GET'])
def products_by_category(category):
    return jsonify(to_dicts(ProductService.get_by_category(category)))


@bp.route('/warehouse/<int:warehouse_id>', methods=['GET'])
def products_by_warehouse(warehouse_id):
    return jsonify(to_dicts(ProductService.get_by_warehouse(warehouse_id)))


@bp.route('/supplier/<int:supplier_id>', methods=['GET'])
def products_by_supplier(supplier_id):
    return jsonify(to_dicts(ProductService.get_by_supplier(supplier_id)))


@bp.route('/categories', methods=['GET'])
def categories():
    return jsonify(ProductService.get_categories())


@bp.route('/search', methods=['GET'])
def search_products():
    return jsonify(to_dicts(ProductService.search(search_term())))


@bp.route('/low-stock', methods=['GET'])
def low_stock_products():
    return jsonify(to_dicts(ProductService.get_low_stock()))


@bp.route('/low-stock/alerts', methods=['GET'])
def low_stock_alerts():
    return jsonify(ProductService.get_low_stock_alerts())


@bp.route('', methods=['POST'])
def create_product():
    with transaction():
        product = ProductManager().create(json_body())
    logger.info(f"Product {product.sku} created via API")
    return jsonify(product.to_dict()), 201


@bp.route('/<int:product_id>', methods=['PUT'])
def update_product(product_id):
    with transaction():
        product = ProductManager().update(product_id, json_body())
    return jsonify(product.to_dict())


@bp.route('/<int:product_id>', methods=['DELETE'])
def delete_product(product_id):
    with transaction():
        ProductManager().delete(product_id)
    return '', 204


# Stock mutation

@bp.route('/<int:product_id>/stock', methods=['PUT'])
def set_stock(product_id):
    quantity = quantity_param()
    with transaction():
        product = StockManager().set_stock(product_id, quantity)
    return jsonify(product.to_dict())


@bp.route('/<int:product_id>/reduce-stock', methods=['PUT'])
def reduce_stock(product_id):
    quantity = quantity_param()
    with transaction():
        product = StockManager().reduce_stock(product_id, quantity)
    return jsonify(product.to_dict())


@bp.route('/<int:product_id>/increase-stock', methods=['PUT'])
def increase_stock(product_id):
    quantity = quantity_param()
    with transaction():
        product = StockManager().increase_stock(product_id, quantity)
    return jsonify(product.to_dict())


# Analytics

@bp.route('/analytics/inventory-value', methods=['GET'])
def inventory_value():
    return jsonify({'total_inventory_value': str(ProductService.total_inventory_value())})


@bp.route('/analytics/value-by-category', methods=['GET'])
def value_by_category():
    values = ProductService.inventory_value_by_category()
    return jsonify({category: str(value) for category, value in values.items()})


@bp.route('/analytics/count-by-category', methods=['GET'])
def count_by_category():
    return jsonify(ProductService.count_by_category())


@bp.route('/analytics/top-expensive', methods=['GET'])
def top_expensive():
    limit = int_arg('limit', 10)
    return jsonify(to_dicts(ProductService.top_expensive(limit)))
