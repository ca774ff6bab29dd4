"""
Supplier routes - CRUD, status changes, search and analytics
"""
from flask import Blueprint, jsonify

from inventory_app.auth import require_login
from inventory_app.buisness.core.transaction import transaction
from inventory_app.buisness.inventory.catalog.supplier_manager import SupplierManager
from inventory_app.buisness.inventory.validation import parse_enum
from inventory_app.data.inventory.supplier import SupplierStatus
from inventory_app.logger import get_logger
from inventory_app.presentation.routes.request_helpers import json_body, search_term, to_dicts
from inventory_app.services.inventory.product_service import ProductService
from inventory_app.services.inventory.supplier_service import SupplierService

logger = get_logger("inventory_app.routes.suppliers")

bp = Blueprint('suppliers', __name__)
bp.before_request(require_login)


@bp.route('', methods=['GET'])
def list_suppliers():
    return jsonify(to_dicts(SupplierService.get_all()))


@bp.route('/<int:supplier_id>', methods=['GET'])
def get_supplier(supplier_id):
    return jsonify(SupplierService.get_by_id(supplier_id).to_dict())


@bp.route('/name/<string:name>', methods=['GET'])
def get_supplier_by_name(name):
    return jsonify(SupplierService.get_by_name(name).to_dict())


@bp.route('/active', methods=['GET'])
def active_suppliers():
    return jsonify(to_dicts(SupplierService.get_active()))


@bp.route('/status/<string:status>', methods=['GET'])
def suppliers_by_status(status):
    supplier_status = parse_enum(SupplierStatus, status, 'status')
    return jsonify(to_dicts(SupplierService.get_by_status(supplier_status)))


@bp.route('/search', methods=['GET'])
def search_suppliers():
    return jsonify(to_dicts(SupplierService.search(search_term())))


@bp.route('/names', methods=['GET'])
def supplier_names():
    return jsonify(SupplierService.get_names())


@bp.route('/reliable', methods=['GET'])
def reliable_suppliers():
    return jsonify(to_dicts(SupplierService.get_reliable()))


@bp.route('/alerts', methods=['GET'])
def supplier_alerts():
    return jsonify(SupplierService.get_alerts())


@bp.route('/<int:supplier_id>/products', methods=['GET'])
def supplier_products(supplier_id):
    SupplierService.get_by_id(supplier_id)
    return jsonify(to_dicts(ProductService.get_by_supplier(supplier_id)))


@bp.route('', methods=['POST'])
def create_supplier():
    with transaction():
        supplier = SupplierManager().create(json_body())
    return jsonify(supplier.to_dict()), 201


@bp.route('/<int:supplier_id>', methods=['PUT'])
def update_supplier(supplier_id):
    with transaction():
        supplier = SupplierManager().update(supplier_id, json_body())
    return jsonify(supplier.to_dict())


@bp.route('/<int:supplier_id>', methods=['DELETE'])
def delete_supplier(supplier_id):
    with transaction():
        SupplierManager().delete(supplier_id)
    return '', 204


# Status changes

@bp.route('/<int:supplier_id>/activate', methods=['PUT'])
def activate_supplier(supplier_id):
    with transaction():
        supplier = SupplierManager().activate(supplier_id)
    return jsonify(supplier.to_dict())


@bp.route('/<int:supplier_id>/deactivate', methods=['PUT'])
def deactivate_supplier(supplier_id):
    with transaction():
        supplier = SupplierManager().deactivate(supplier_id)
    return jsonify(supplier.to_dict())


@bp.route('/<int:supplier_id>/suspend', methods=['PUT'])
def suspend_supplier(supplier_id):
    with transaction():
        supplier = SupplierManager().suspend(supplier_id)
    return jsonify(supplier.to_dict())


# Analytics

@bp.route('/analytics/count-by-status', methods=['GET'])
def count_by_status():
    return jsonify(SupplierService.count_by_status())


@bp.route('/analytics/by-city', methods=['GET'])
def suppliers_by_city():
    return jsonify(SupplierService.group_by_city())
