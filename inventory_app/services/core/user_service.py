"""
User Service
Lookups for authenticated users.
"""

from typing import Optional
from inventory_app.data.core.user_info.user import User


class UserService:

    @staticmethod
    def get_by_username(username: str) -> Optional[User]:
        if not username:
            return None
        return User.query.filter_by(username=username).first()
