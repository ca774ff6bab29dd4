"""
Routes package for the inventory API
One blueprint per resource, all under /api except the health check
"""

from flask import Blueprint, jsonify
from inventory_app.logger import get_logger

logger = get_logger("inventory_app.routes")

# Public health check
main = Blueprint('main', __name__)


@main.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from .errors import register_error_handlers
    from . import products, suppliers, warehouses, orders, dashboard

    register_error_handlers(app)

    app.register_blueprint(main)
    app.register_blueprint(products.bp, url_prefix='/api/products')
    app.register_blueprint(suppliers.bp, url_prefix='/api/suppliers')
    app.register_blueprint(warehouses.bp, url_prefix='/api/warehouses')
    app.register_blueprint(orders.bp, url_prefix='/api/orders')
    app.register_blueprint(dashboard.bp, url_prefix='/api/dashboard')

    logger.info("All route blueprints registered successfully")
