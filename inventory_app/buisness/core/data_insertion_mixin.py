"""
Generic serialization mixin for SQLAlchemy models
Provides the to_dict method used by the API layer.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from sqlalchemy import inspect


def serialize_value(value):
    """Turn column values into JSON-friendly primitives."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


class DataInsertionMixin:
    """
    Mixin that turns a model's mapped columns into a JSON-ready dictionary
    """

    def to_dict(self, include_audit_fields=True):
        """
        Convert model instance to dictionary

        Args:
            include_audit_fields (bool): Whether to include created_at / updated_at

        Returns:
            dict: Dictionary representation of the model
        """
        result = {}

        mapper = inspect(self.__class__)

        for column in mapper.columns:
            if not include_audit_fields and column.key in ['created_at', 'updated_at']:
                continue
            result[column.key] = serialize_value(getattr(self, column.key))

        return result
