from inventory_app import db
from inventory_app.data.core.timestamped_base import TimestampedBase


class Product(TimestampedBase):
    """Stocked item kept in one warehouse, optionally sourced from a supplier"""
    __tablename__ = 'products'
    __table_args__ = (
        db.CheckConstraint('stock_quantity >= 0', name='ck_products_stock_non_negative'),
        db.CheckConstraint('min_stock_level >= 0', name='ck_products_min_stock_non_negative'),
        db.CheckConstraint('price > 0', name='ck_products_price_positive'),
    )

    name = db.Column(db.String(200), nullable=False)
    sku = db.Column(db.String(64), unique=True, nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(100), nullable=True, index=True)
    price = db.Column(db.Numeric(12, 2), nullable=False)
    stock_quantity = db.Column(db.Integer, nullable=False, default=0)
    min_stock_level = db.Column(db.Integer, nullable=False, default=0)

    # Foreign Keys
    warehouse_id = db.Column(db.Integer, db.ForeignKey('warehouses.id'), nullable=False, index=True)
    supplier_id = db.Column(db.Integer, db.ForeignKey('suppliers.id'), nullable=True, index=True)

    # Relationships
    warehouse = db.relationship('Warehouse', back_populates='products')
    supplier = db.relationship('Supplier', back_populates='products')

    def __repr__(self):
        return f'<Product {self.sku}: {self.name}>'

    @property
    def is_low_stock(self):
        """Stock at or below the minimum level"""
        return (self.stock_quantity or 0) <= (self.min_stock_level or 0)

    def to_dict(self, include_audit_fields=True):
        result = super().to_dict(include_audit_fields)
        result['is_low_stock'] = self.is_low_stock
        result['warehouse_name'] = self.warehouse.name if self.warehouse else None
        result['supplier_name'] = self.supplier.name if self.supplier else None
        return result
