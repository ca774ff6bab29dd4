"""
JSON error responses for the API

Domain errors map to their status code; werkzeug HTTP errors keep theirs;
anything else is logged and reported as a 500.
"""

from datetime import datetime

from flask import jsonify
from werkzeug.exceptions import HTTPException

from inventory_app.buisness.inventory.errors import InventoryDomainError
from inventory_app.logger import get_logger

logger = get_logger("inventory_app.routes.errors")


def error_response(message, status):
    response = jsonify({
        'error': message,
        'status': status,
        'timestamp': datetime.utcnow().isoformat(),
    })
    response.status_code = status
    return response


def register_error_handlers(app):
    """Attach the JSON error handlers to the app"""

    @app.errorhandler(InventoryDomainError)
    def handle_domain_error(error):
        status = getattr(error, 'status_code', 500)
        if status >= 500:
            logger.error(f"Domain error: {error}", exc_info=True)
        else:
            logger.info(f"{type(error).__name__}: {error}")
        return error_response(str(error), status)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return error_response(error.description, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.error(f"Unhandled exception: {error}", exc_info=True)
        return error_response("An unexpected error occurred", 500)
