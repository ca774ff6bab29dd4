"""
User Context (Core)
Registration and credential checks for API users.
"""

from typing import Optional
from inventory_app import db
from inventory_app.data.core.user_info.user import User
from inventory_app.buisness.inventory.errors import ConflictError, InvalidArgumentError
from inventory_app.logger import get_logger

logger = get_logger("inventory_app.buisness.core.user_context")

MIN_PASSWORD_LENGTH = 8


class UserContext:
    """
    Core context for user operations.

    Provides:
    - Creating users with unique username and email
    - Authenticating a username/password pair
    """

    def __init__(self, user: User):
        self._user = user

    @property
    def user(self) -> User:
        return self._user

    @classmethod
    def create(cls, username: str, email: str, password: str) -> 'UserContext':
        """
        Create a new user.

        Args:
            username: Username (must be unique)
            email: Email address (must be unique)
            password: Plain text password (will be hashed)

        Returns:
            UserContext for the new user (flushed, not committed)

        Raises:
            InvalidArgumentError: If a field is missing or the password is too short
            ConflictError: If username or email already exists
        """
        username = (username or '').strip()
        email = (email or '').strip()
        if not username or not email or not password:
            raise InvalidArgumentError("username, email and password are required")
        if '@' not in email:
            raise InvalidArgumentError("email must be a valid email address")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidArgumentError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        if User.query.filter_by(username=username).first():
            raise ConflictError("Username already taken")
        if User.query.filter(db.func.lower(User.email) == email.lower()).first():
            raise ConflictError("Email already registered")

        user = User(username=username, email=email, is_active=True)
        user.set_password(password)
        db.session.add(user)
        db.session.flush()

        logger.info(f"Created user: {username} (ID: {user.id})")
        return cls(user)

    @classmethod
    def authenticate(cls, username: str, password: str) -> Optional['UserContext']:
        """Return the context for valid, active credentials, otherwise None."""
        if not username or not password:
            return None
        user = User.query.filter_by(username=username).first()
        if user is None or not user.check_password(password):
            return None
        if not user.is_active:
            logger.warning(f"Login attempt for disabled account: {username}")
            return None
        return cls(user)

    def __repr__(self):
        return f'<UserContext {self._user.username}>'
