from decimal import Decimal
from inventory_app import db
from inventory_app.data.core.timestamped_base import TimestampedBase


class OrderItem(TimestampedBase):
    """One product, quantity and unit price within an order"""
    __tablename__ = 'order_items'
    __table_args__ = (
        db.CheckConstraint('quantity >= 1', name='ck_order_items_quantity_positive'),
        db.CheckConstraint('unit_price > 0', name='ck_order_items_unit_price_positive'),
    )

    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Numeric(12, 2), nullable=False)

    # Foreign Keys
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False, index=True)

    # Relationships
    order = db.relationship('Order', back_populates='items')
    product = db.relationship('Product')

    def __repr__(self):
        return f'<OrderItem order={self.order_id} product={self.product_id} x{self.quantity}>'

    @property
    def total_price(self):
        return (Decimal(self.unit_price) * self.quantity).quantize(Decimal('0.01'))

    def to_dict(self, include_audit_fields=True):
        result = super().to_dict(include_audit_fields)
        result['total_price'] = str(self.total_price)
        result['product_name'] = self.product.name if self.product else None
        result['product_sku'] = self.product.sku if self.product else None
        return result
