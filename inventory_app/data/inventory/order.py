import enum
from datetime import datetime
from decimal import Decimal
from inventory_app import db
from inventory_app.data.core.timestamped_base import TimestampedBase


class OrderStatus(enum.Enum):
    PENDING = 'PENDING'
    CONFIRMED = 'CONFIRMED'
    SHIPPED = 'SHIPPED'
    DELIVERED = 'DELIVERED'
    CANCELLED = 'CANCELLED'
    # Display-only, never stored
    DELAYED = 'DELAYED'


class OrderType(enum.Enum):
    PURCHASE = 'PURCHASE'
    SALE = 'SALE'
    TRANSFER = 'TRANSFER'


class Order(TimestampedBase):
    """Purchase, sale or transfer order with its line items"""
    __tablename__ = 'orders'

    order_number = db.Column(db.String(50), unique=True, nullable=False, index=True)
    status = db.Column(db.Enum(OrderStatus), nullable=False, default=OrderStatus.PENDING, index=True)
    order_type = db.Column(db.Enum(OrderType), nullable=False)
    total_amount = db.Column(db.Numeric(12, 2), nullable=False, default=Decimal('0.00'))

    # Dates
    order_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    expected_delivery_date = db.Column(db.DateTime, nullable=True)
    actual_delivery_date = db.Column(db.DateTime, nullable=True)

    notes = db.Column(db.Text, nullable=True)

    # Foreign Keys
    supplier_id = db.Column(db.Integer, db.ForeignKey('suppliers.id'), nullable=True, index=True)

    # Relationships
    supplier = db.relationship('Supplier', back_populates='orders')
    items = db.relationship(
        'OrderItem',
        back_populates='order',
        cascade='all, delete-orphan',
        order_by='OrderItem.id',
    )

    def __repr__(self):
        return f'<Order {self.order_number}: {self.status.value if self.status else None}>'

    # Derived state
    def is_delayed(self, now=None):
        """Expected delivery has passed, nothing delivered yet and not completed."""
        if self.expected_delivery_date is None or self.actual_delivery_date is not None:
            return False
        if self.status == OrderStatus.DELIVERED:
            return False
        now = now or datetime.utcnow()
        return self.expected_delivery_date < now

    @property
    def display_status(self):
        return OrderStatus.DELAYED if self.is_delayed() else self.status

    # Methods
    def calculate_total_amount(self):
        """Recalculate total_amount from the current line items"""
        total = sum((item.total_price for item in self.items), Decimal('0.00'))
        self.total_amount = total.quantize(Decimal('0.01'))
        return self.total_amount

    def to_dict(self, include_audit_fields=True, include_items=True):
        result = super().to_dict(include_audit_fields)
        result['display_status'] = self.display_status.value
        result['is_delayed'] = self.is_delayed()
        result['supplier_name'] = self.supplier.name if self.supplier else None
        result['item_count'] = len(self.items)
        if include_items:
            result['items'] = [item.to_dict(include_audit_fields=False) for item in self.items]
        return result
