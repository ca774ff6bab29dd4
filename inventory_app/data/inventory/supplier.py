import enum
from inventory_app import db
from inventory_app.data.core.timestamped_base import TimestampedBase


class SupplierStatus(enum.Enum):
    ACTIVE = 'ACTIVE'
    INACTIVE = 'INACTIVE'
    SUSPENDED = 'SUSPENDED'


class Supplier(TimestampedBase):
    """Vendor that supplies products and receives purchase orders"""
    __tablename__ = 'suppliers'

    name = db.Column(db.String(100), unique=True, nullable=False)
    contact_person = db.Column(db.String(100), nullable=True)
    email = db.Column(db.String(120), unique=True, nullable=True)
    phone = db.Column(db.String(40), nullable=True)
    address = db.Column(db.String(255), nullable=True)
    status = db.Column(db.Enum(SupplierStatus), nullable=False, default=SupplierStatus.ACTIVE)

    # Reporting back-references only; the supplier does not own these rows
    products = db.relationship('Product', back_populates='supplier', lazy='dynamic')
    orders = db.relationship('Order', back_populates='supplier', lazy='dynamic')

    def __repr__(self):
        return f'<Supplier {self.name} ({self.status.value if self.status else None})>'

    @property
    def is_active(self):
        return self.status == SupplierStatus.ACTIVE

    @property
    def product_count(self):
        return self.products.count()

    def to_dict(self, include_audit_fields=True):
        result = super().to_dict(include_audit_fields)
        result['product_count'] = self.product_count
        return result
