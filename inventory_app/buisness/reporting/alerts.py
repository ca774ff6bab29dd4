"""
Alert text generation.

Pure functions over snapshots loaded by the services; nothing here touches
the session or keeps state between calls.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from inventory_app.data.inventory.supplier import SupplierStatus


def low_stock_alert(product) -> str:
    return (
        f"LOW STOCK ALERT: {product.name} (SKU: {product.sku}) - "
        f"Current Stock: {product.stock_quantity}, Min Level: {product.min_stock_level}"
    )


def low_stock_alerts(products: Iterable) -> List[str]:
    return [low_stock_alert(p) for p in products if p.is_low_stock]


def pending_orders_alert(pending_count: int) -> Optional[str]:
    if pending_count <= 0:
        return None
    return f"PENDING ORDERS: {pending_count} orders awaiting processing"


def delayed_orders_alerts(orders: Iterable, now: Optional[datetime] = None) -> List[str]:
    """Summary line followed by one line per delayed order; empty when nothing is late."""
    now = now or datetime.utcnow()
    delayed = [o for o in orders if o.is_delayed(now)]
    if not delayed:
        return []
    alerts = [f"DELAYED ORDERS: {len(delayed)} orders past expected delivery date"]
    for order in delayed:
        expected = order.expected_delivery_date.isoformat()
        alerts.append(f"  - Order {order.order_number} (Expected: {expected})")
    return alerts


def order_alerts(pending_count: int, orders: Iterable, now: Optional[datetime] = None) -> List[str]:
    alerts = []
    pending = pending_orders_alert(pending_count)
    if pending:
        alerts.append(pending)
    alerts.extend(delayed_orders_alerts(orders, now))
    return alerts


def supplier_alert(supplier) -> str:
    contact = supplier.email or "No email"
    return f"SUPPLIER ALERT: {supplier.name} is {supplier.status.value.lower()} - Contact: {contact}"


def supplier_alerts(suppliers: Iterable) -> List[str]:
    return [supplier_alert(s) for s in suppliers if s.status != SupplierStatus.ACTIVE]


def warehouse_alerts(low_stock_counts: Iterable[Tuple[str, int]]) -> List[str]:
    """
    Args:
        low_stock_counts: (warehouse name, number of low-stock products) pairs
    """
    return [
        f"WAREHOUSE ALERT: {name} has {count} products with low stock"
        for name, count in low_stock_counts
        if count >= 1
    ]
