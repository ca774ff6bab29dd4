from inventory_app import db
from inventory_app.data.core.timestamped_base import TimestampedBase


class Warehouse(TimestampedBase):
    """Physical storage site holding products"""
    __tablename__ = 'warehouses'

    name = db.Column(db.String(100), unique=True, nullable=False)
    location = db.Column(db.String(255), nullable=False)

    # Non-owning back-reference; products are deleted on their own
    products = db.relationship('Product', back_populates='warehouse', lazy='dynamic')

    def __repr__(self):
        return f'<Warehouse {self.name}>'

    @property
    def product_count(self):
        return self.products.count()

    def to_dict(self, include_audit_fields=True):
        result = super().to_dict(include_audit_fields)
        result['product_count'] = self.product_count
        return result
