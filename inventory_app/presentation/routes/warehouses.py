"""
Warehouse routes - CRUD, search, utilization and analytics
"""
from flask import Blueprint, jsonify, request

from inventory_app.auth import require_login
from inventory_app.buisness.core.transaction import transaction
from inventory_app.buisness.inventory.catalog.warehouse_manager import WarehouseManager
from inventory_app.logger import get_logger
from inventory_app.presentation.routes.request_helpers import json_body, search_term, to_dicts
from inventory_app.services.inventory.product_service import ProductService
from inventory_app.services.inventory.warehouse_service import WarehouseService

logger = get_logger("inventory_app.routes.warehouses")

bp = Blueprint('warehouses', __name__)
bp.before_request(require_login)


@bp.route('', methods=['GET'])
def list_warehouses():
    return jsonify(to_dicts(WarehouseService.get_all()))


@bp.route('/<int:warehouse_id>', methods=['GET'])
def get_warehouse(warehouse_id):
    return jsonify(WarehouseService.get_by_id(warehouse_id).to_dict())


@bp.route('/name/<string:name>', methods=['GET'])
def get_warehouse_by_name(name):
    return jsonify(WarehouseService.get_by_name(name).to_dict())


@bp.route('/search', methods=['GET'])
def search_warehouses():
    return jsonify(to_dicts(WarehouseService.search(search_term())))


@bp.route('/location', methods=['GET'])
def warehouses_by_location():
    return jsonify(to_dicts(WarehouseService.search_by_location(request.args.get('q', ''))))


@bp.route('/names', methods=['GET'])
def warehouse_names():
    return jsonify(WarehouseService.get_names())


@bp.route('/low-stock', methods=['GET'])
def warehouses_with_low_stock():
    return jsonify(to_dicts(WarehouseService.get_with_low_stock()))


@bp.route('/alerts', methods=['GET'])
def warehouse_alerts():
    return jsonify(WarehouseService.get_alerts())


@bp.route('/<int:warehouse_id>/products', methods=['GET'])
def warehouse_products(warehouse_id):
    WarehouseService.get_by_id(warehouse_id)
    return jsonify(to_dicts(ProductService.get_by_warehouse(warehouse_id)))


@bp.route('/<int:warehouse_id>/utilization', methods=['GET'])
def warehouse_utilization(warehouse_id):
    utilization = WarehouseService.get_utilization(warehouse_id)
    utilization['total_inventory_value'] = str(utilization['total_inventory_value'])
    return jsonify(utilization)


@bp.route('', methods=['POST'])
def create_warehouse():
    with transaction():
        warehouse = WarehouseManager().create(json_body())
    return jsonify(warehouse.to_dict()), 201


@bp.route('/<int:warehouse_id>', methods=['PUT'])
def update_warehouse(warehouse_id):
    with transaction():
        warehouse = WarehouseManager().update(warehouse_id, json_body())
    return jsonify(warehouse.to_dict())


@bp.route('/<int:warehouse_id>', methods=['DELETE'])
def delete_warehouse(warehouse_id):
    with transaction():
        WarehouseManager().delete(warehouse_id)
    return '', 204


# Analytics

@bp.route('/analytics/summary', methods=['GET'])
def warehouse_summary():
    summary = WarehouseService.get_summary()
    summary['total_inventory_value'] = str(summary['total_inventory_value'])
    return jsonify(summary)


@bp.route('/analytics/inventory-value', methods=['GET'])
def inventory_value_by_warehouse():
    values = WarehouseService.inventory_value_by_warehouse()
    return jsonify({name: str(value) for name, value in values.items()})


@bp.route('/analytics/product-count', methods=['GET'])
def product_count_by_warehouse():
    return jsonify(WarehouseService.product_count_by_warehouse())


@bp.route('/analytics/by-city', methods=['GET'])
def warehouses_by_city():
    return jsonify(WarehouseService.group_by_city())


@bp.route('/analytics/total-products', methods=['GET'])
def total_products():
    return jsonify({'total_products': WarehouseService.total_products()})
