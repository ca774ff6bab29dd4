"""
Order Service
Read-side order queries, revenue and order alerts.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import or_

from inventory_app import db
from inventory_app.data.inventory.order import Order, OrderStatus, OrderType
from inventory_app.data.inventory.supplier import Supplier
from inventory_app.buisness.inventory.errors import NotFoundError
from inventory_app.buisness.inventory.validation import LIKE_ESCAPE, like_pattern
from inventory_app.buisness.reporting import alerts, analytics


class OrderService:
    """
    Service for order lookups, derived delay status and revenue.
    """

    @staticmethod
    def get_all() -> List[Order]:
        return Order.query.order_by(Order.order_date.desc(), Order.id.desc()).all()

    @staticmethod
    def get_by_id(order_id: int) -> Order:
        order = db.session.get(Order, order_id)
        if order is None:
            raise NotFoundError(f"Order not found with id: {order_id}")
        return order

    @staticmethod
    def get_by_number(order_number: str) -> Order:
        order = Order.query.filter_by(order_number=order_number).first()
        if order is None:
            raise NotFoundError(f"Order not found with number: {order_number}")
        return order

    @staticmethod
    def get_by_status(status: OrderStatus) -> List[Order]:
        """Orders with a stored status; DELAYED returns the derived delayed set."""
        if status == OrderStatus.DELAYED:
            return OrderService.get_delayed()
        return Order.query.filter_by(status=status).order_by(Order.order_date.desc()).all()

    @staticmethod
    def get_by_type(order_type: OrderType) -> List[Order]:
        return Order.query.filter_by(order_type=order_type).order_by(Order.order_date.desc()).all()

    @staticmethod
    def get_by_supplier(supplier_id: int) -> List[Order]:
        return Order.query.filter_by(supplier_id=supplier_id).order_by(Order.order_date.desc()).all()

    @staticmethod
    def get_pending() -> List[Order]:
        """Pending orders, oldest first."""
        return Order.query.filter_by(status=OrderStatus.PENDING).order_by(Order.order_date.asc()).all()

    @staticmethod
    def count_pending() -> int:
        return Order.query.filter_by(status=OrderStatus.PENDING).count()

    @staticmethod
    def get_delayed(now: Optional[datetime] = None) -> List[Order]:
        now = now or datetime.utcnow()
        return Order.query.filter(
            Order.expected_delivery_date.isnot(None),
            Order.expected_delivery_date < now,
            Order.actual_delivery_date.is_(None),
            Order.status != OrderStatus.DELIVERED,
        ).order_by(Order.expected_delivery_date.asc()).all()

    @staticmethod
    def get_recent(limit: int = 10) -> List[Order]:
        return Order.query.order_by(Order.order_date.desc(), Order.id.desc()).limit(limit).all()

    @staticmethod
    def search(term: str) -> List[Order]:
        """Match order number or supplier name, case-insensitive."""
        term = (term or '').strip()
        if not term:
            return OrderService.get_all()
        pattern = like_pattern(term)
        return Order.query.outerjoin(Supplier, Order.supplier_id == Supplier.id).filter(or_(
            Order.order_number.ilike(pattern, escape=LIKE_ESCAPE),
            Supplier.name.ilike(pattern, escape=LIKE_ESCAPE),
        )).order_by(Order.order_date.desc()).all()

    @staticmethod
    def revenue(start: datetime, end: datetime) -> Decimal:
        """Revenue of DELIVERED orders with order_date in [start, end)."""
        orders = Order.query.filter(
            Order.status == OrderStatus.DELIVERED,
            Order.order_date >= start,
            Order.order_date < end,
        ).all()
        return analytics.revenue(orders, start, end)

    @staticmethod
    def orders_since(start: datetime) -> List[Order]:
        return Order.query.filter(Order.order_date >= start).all()

    @staticmethod
    def count_by_status() -> Dict[str, int]:
        return analytics.count_by(Order.query.all(), lambda o: o.status)

    @staticmethod
    def count_by_type() -> Dict[str, int]:
        return analytics.count_by(Order.query.all(), lambda o: o.order_type)

    @staticmethod
    def group_by_supplier() -> Dict[str, List[str]]:
        """Order numbers grouped by supplier name; orders without a supplier go under "No Supplier"."""
        groups = analytics.group_by(
            OrderService.get_all(),
            lambda o: o.supplier.name if o.supplier else None,
            default="No Supplier",
        )
        return {name: [o.order_number for o in members] for name, members in groups.items()}

    @staticmethod
    def get_alerts(now: Optional[datetime] = None) -> List[str]:
        return alerts.order_alerts(OrderService.count_pending(), OrderService.get_delayed(now), now)

    @staticmethod
    def total_count() -> int:
        return Order.query.count()
