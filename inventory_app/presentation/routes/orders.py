"""
Order routes - CRUD, line items, status transitions, search and analytics
"""
from flask import Blueprint, current_app, jsonify, request

from inventory_app.auth import require_login
from inventory_app.buisness.core.transaction import transaction
from inventory_app.buisness.inventory.errors import InvalidArgumentError
from inventory_app.buisness.inventory.ordering import OrderContext, OrderFactory
from inventory_app.buisness.inventory.validation import parse_datetime, parse_enum
from inventory_app.data.inventory.order import OrderStatus, OrderType
from inventory_app.logger import get_logger
from inventory_app.presentation.routes.request_helpers import int_arg, json_body, search_term, to_dicts
from inventory_app.services.inventory.order_service import OrderService

logger = get_logger("inventory_app.routes.orders")

bp = Blueprint('orders', __name__)
bp.before_request(require_login)


@bp.route('', methods=['GET'])
def list_orders():
    return jsonify(to_dicts(OrderService.get_all()))


@bp.route('/<int:order_id>', methods=['GET'])
def get_order(order_id):
    return jsonify(OrderService.get_by_id(order_id).to_dict())


@bp.route('/number/<string:order_number>', methods=['GET'])
def get_order_by_number(order_number):
    return jsonify(OrderService.get_by_number(order_number).to_dict())


@bp.route('/status/<string:status>', methods=['GET'])
def orders_by_status(status):
    order_status = parse_enum(OrderStatus, status, 'status')
    return jsonify(to_dicts(OrderService.get_by_status(order_status)))


@bp.route('/type/<string:order_type>', methods=['GET'])
def orders_by_type(order_type):
    parsed_type = parse_enum(OrderType, order_type, 'order_type')
    return jsonify(to_dicts(OrderService.get_by_type(parsed_type)))


@bp.route('/supplier/<int:supplier_id>', methods=['GET'])
def orders_by_supplier(supplier_id):
    return jsonify(to_dicts(OrderService.get_by_supplier(supplier_id)))


@bp.route('/pending', methods=['GET'])
def pending_orders():
    return jsonify(to_dicts(OrderService.get_pending()))


@bp.route('/delayed', methods=['GET'])
def delayed_orders():
    return jsonify(to_dicts(OrderService.get_delayed()))


@bp.route('/recent', methods=['GET'])
def recent_orders():
    limit = int_arg('limit', current_app.config['RECENT_ORDERS_LIMIT'])
    return jsonify(to_dicts(OrderService.get_recent(limit)))


@bp.route('/search', methods=['GET'])
def search_orders():
    return jsonify(to_dicts(OrderService.search(search_term())))


@bp.route('/alerts', methods=['GET'])
def order_alerts():
    return jsonify(OrderService.get_alerts())


@bp.route('', methods=['POST'])
def create_order():
    with transaction():
        order = OrderFactory.create(json_body())
    return jsonify(order.to_dict()), 201


@bp.route('/<int:order_id>', methods=['PUT'])
def update_order(order_id):
    with transaction():
        order = OrderContext(order_id).update(json_body())
    return jsonify(order.to_dict())


@bp.route('/<int:order_id>', methods=['DELETE'])
def delete_order(order_id):
    with transaction():
        OrderContext(order_id).delete()
    return '', 204


# Line items

@bp.route('/<int:order_id>/items', methods=['POST'])
def add_order_item(order_id):
    ctx = OrderContext(order_id)
    with transaction():
        ctx.add_item(json_body())
    return jsonify(ctx.order.to_dict()), 201


@bp.route('/<int:order_id>/items/<int:item_id>', methods=['DELETE'])
def remove_order_item(order_id, item_id):
    with transaction():
        order = OrderContext(order_id).remove_item(item_id)
    return jsonify(order.to_dict())


# Status transitions

@bp.route('/<int:order_id>/process', methods=['PUT'])
def process_order(order_id):
    with transaction():
        order = OrderContext(order_id).process()
    return jsonify(order.to_dict())


@bp.route('/<int:order_id>/ship', methods=['PUT'])
def ship_order(order_id):
    with transaction():
        order = OrderContext(order_id).ship()
    return jsonify(order.to_dict())


@bp.route('/<int:order_id>/deliver', methods=['PUT'])
def deliver_order(order_id):
    with transaction():
        order = OrderContext(order_id).deliver()
    return jsonify(order.to_dict())


@bp.route('/<int:order_id>/cancel', methods=['PUT'])
def cancel_order(order_id):
    with transaction():
        order = OrderContext(order_id).cancel()
    return jsonify(order.to_dict())


# Analytics

@bp.route('/analytics/revenue', methods=['GET'])
def revenue():
    start = parse_datetime(request.args.get('start_date'), 'start_date')
    end = parse_datetime(request.args.get('end_date'), 'end_date')
    if start is None or end is None:
        raise InvalidArgumentError("start_date and end_date are required")
    if end < start:
        raise InvalidArgumentError("end_date must not be before start_date")
    return jsonify({
        'start_date': start.isoformat(),
        'end_date': end.isoformat(),
        'revenue': str(OrderService.revenue(start, end)),
    })


@bp.route('/analytics/count-by-status', methods=['GET'])
def count_by_status():
    return jsonify(OrderService.count_by_status())


@bp.route('/analytics/count-by-type', methods=['GET'])
def count_by_type():
    return jsonify(OrderService.count_by_type())


@bp.route('/analytics/by-supplier', methods=['GET'])
def orders_by_supplier_name():
    return jsonify(OrderService.group_by_supplier())
