from inventory_app import db
from datetime import datetime
from sqlalchemy.orm import declared_attr
from inventory_app.buisness.core.data_insertion_mixin import DataInsertionMixin


class TimestampedBase(db.Model, DataInsertionMixin):
    """Abstract base class for inventory entities with created/updated timestamps"""

    __abstract__ = True

    @declared_attr
    def __tablename__(cls):
        return cls.__name__.lower() + 's'

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
