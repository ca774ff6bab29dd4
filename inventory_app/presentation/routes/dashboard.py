"""
Dashboard routes - aggregated views over the whole inventory
"""
from flask import Blueprint, jsonify
from flask_login import current_user

from inventory_app.auth import require_login
from inventory_app.logger import get_logger
from inventory_app.presentation.routes.request_helpers import int_arg
from inventory_app.services.dashboard.dashboard_service import DashboardService

logger = get_logger("inventory_app.routes.dashboard")

bp = Blueprint('dashboard', __name__)
bp.before_request(require_login)


@bp.route('/summary', methods=['GET'])
def summary():
    logger.debug(f"Dashboard summary requested by {current_user.username}")
    return jsonify(DashboardService.get_summary())


@bp.route('/alerts', methods=['GET'])
def alerts():
    return jsonify(DashboardService.get_alerts())


@bp.route('/analytics', methods=['GET'])
def analytics():
    return jsonify(DashboardService.get_analytics())


@bp.route('/quick-stats', methods=['GET'])
def quick_stats():
    return jsonify(DashboardService.get_quick_stats())


@bp.route('/performance', methods=['GET'])
def performance():
    return jsonify(DashboardService.get_performance())


@bp.route('/trends', methods=['GET'])
def trends():
    days = int_arg('days', 7, minimum=1)
    return jsonify(DashboardService.get_trends(days))
