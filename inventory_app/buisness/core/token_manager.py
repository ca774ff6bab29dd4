"""
Bearer token issuing and validation
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from flask import current_app

from inventory_app.buisness.inventory.errors import UnauthorizedError


class TokenManager:
    """
    Issues and validates signed, time-limited tokens binding a username and email.

    Settings come from the app config: JWT_SECRET_KEY, JWT_ALGORITHM and
    JWT_EXPIRATION_SECONDS.
    """

    @staticmethod
    def issue(username: str, email: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': username,
            'email': email,
            'iat': now,
            'exp': now + timedelta(seconds=current_app.config['JWT_EXPIRATION_SECONDS']),
        }
        return jwt.encode(
            payload,
            current_app.config['JWT_SECRET_KEY'],
            algorithm=current_app.config['JWT_ALGORITHM'],
        )

    @staticmethod
    def decode(token: str) -> Dict[str, Any]:
        """
        Validate signature and expiry and return the claims.

        Raises:
            UnauthorizedError: For expired, malformed or otherwise invalid tokens
        """
        try:
            claims = jwt.decode(
                token,
                current_app.config['JWT_SECRET_KEY'],
                algorithms=[current_app.config['JWT_ALGORITHM']],
                options={'require': ['sub', 'exp']},
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("Token has expired")
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Invalid or expired token")
        return claims
