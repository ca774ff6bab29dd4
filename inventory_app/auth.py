from flask import Blueprint, current_app, g, jsonify, request
from flask_login import current_user, login_required

from inventory_app import limiter, login_manager
from inventory_app.buisness.core.token_manager import TokenManager
from inventory_app.buisness.core.transaction import transaction
from inventory_app.buisness.core.user_context import UserContext
from inventory_app.buisness.inventory.errors import UnauthorizedError
from inventory_app.logger import get_logger
from inventory_app.presentation.routes.errors import error_response
from inventory_app.services.core.user_service import UserService
from inventory_app.utils.logging_sanitizer import sanitize_dict

logger = get_logger("inventory_app.auth")
auth = Blueprint('auth', __name__)

MISSING_HEADER = "Missing or invalid Authorization header"
INVALID_TOKEN = "Invalid or expired token"

# Tokens only, never a cookie session
login_manager.session_protection = None


def _auth_rate_limit():
    return current_app.config.get('AUTH_RATE_LIMIT', '20 per minute')


@login_manager.request_loader
def load_user_from_request(req):
    """Resolve the user from an `Authorization: Bearer <token>` header."""
    header = req.headers.get('Authorization', '')
    if not header.startswith('Bearer ') or not header[len('Bearer '):].strip():
        g.auth_error = MISSING_HEADER
        return None

    try:
        claims = TokenManager.decode(header[len('Bearer '):].strip())
    except UnauthorizedError as e:
        logger.debug(f"Rejected bearer token: {e}")
        g.auth_error = str(e)
        return None

    user = UserService.get_by_username(claims.get('sub'))
    if user is None or not user.is_active:
        g.auth_error = INVALID_TOKEN
        return None
    return user


@login_manager.unauthorized_handler
def unauthorized():
    return error_response(g.get('auth_error', MISSING_HEADER), 401)


def require_login():
    """before_request hook for blueprints whose every route needs a user"""
    if not current_user.is_authenticated:
        return login_manager.unauthorized()
    return None


@auth.route('/signup', methods=['POST'])
@limiter.limit(_auth_rate_limit)
def signup():
    data = request.get_json(silent=True) or {}
    logger.debug(f"Signup attempt: {sanitize_dict(data)}")

    with transaction():
        user = UserContext.create(
            username=data.get('username'),
            email=data.get('email'),
            password=data.get('password'),
        ).user

    logger.info(f"User registered: {user.username}")
    return jsonify({'message': 'User registered successfully', 'user': user.username}), 201


@auth.route('/login', methods=['POST'])
@limiter.limit(_auth_rate_limit)
def login():
    data = request.get_json(silent=True) or {}
    username = data.get('username')
    logger.debug(f"Login attempt: {sanitize_dict(data)}")

    ctx = UserContext.authenticate(username, data.get('password'))
    if ctx is None:
        logger.warning(f"Failed login attempt for username: {username}")
        return error_response('Invalid username or password', 401)

    user = ctx.user
    token = TokenManager.issue(user.username, user.email)
    logger.info(f"Successful login for user: {user.username}")
    return jsonify({
        'message': 'Login successful',
        'user': user.username,
        'email': user.email,
        'token': token,
    })


@auth.route('/me', methods=['GET'])
@login_required
def me():
    return jsonify({'username': current_user.username, 'email': current_user.email})
