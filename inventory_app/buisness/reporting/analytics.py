"""
Aggregations used by the analytics and dashboard endpoints.

All functions are pure: they take already-loaded rows (or plain values) and
return dictionaries and numbers. Money stays Decimal throughout.
"""

from collections import OrderedDict
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from inventory_app.data.inventory.order import OrderStatus

ZERO = Decimal('0.00')
CENT = Decimal('0.01')
UNKNOWN_CITY = "Unknown"


def _key_name(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def city_token(address: Optional[str]) -> str:
    """Last comma-separated segment of an address, or "Unknown"."""
    if not address or not address.strip():
        return UNKNOWN_CITY
    token = address.split(',')[-1].strip()
    return token or UNKNOWN_CITY


def count_by(rows: Iterable, key: Callable[[Any], Any], default: str = "Uncategorized") -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for row in rows:
        name = _key_name(key(row))
        if name is None:
            name = default
        counts[name] = counts.get(name, 0) + 1
    return dict(sorted(counts.items()))


def group_by(rows: Iterable, key: Callable[[Any], Any], default: str = "Unknown") -> Dict[str, list]:
    groups: Dict[str, list] = {}
    for row in rows:
        name = _key_name(key(row))
        if name is None:
            name = default
        groups.setdefault(name, []).append(row)
    return dict(sorted(groups.items()))


def inventory_value(products: Iterable) -> Decimal:
    total = sum((Decimal(p.price) * p.stock_quantity for p in products), ZERO)
    return total.quantize(CENT)


def inventory_value_by(products: Iterable, key: Callable[[Any], Any], default: str = "Uncategorized") -> Dict[str, Decimal]:
    return {
        name: inventory_value(group)
        for name, group in group_by(products, key, default).items()
    }


def revenue(orders: Iterable, start: datetime, end: datetime) -> Decimal:
    """Total of DELIVERED orders whose order_date falls in [start, end)."""
    total = sum(
        (
            Decimal(o.total_amount or 0)
            for o in orders
            if o.status == OrderStatus.DELIVERED and start <= o.order_date < end
        ),
        ZERO,
    )
    return total.quantize(CENT)


def percentage(part: int, whole: int, empty: float = 100.0) -> float:
    if whole <= 0:
        return empty
    return round(part * 100.0 / whole, 2)


def performance(products: List, orders: List, suppliers: List, now: Optional[datetime] = None) -> Dict[str, float]:
    """
    Health percentages:
    - stock health: products not low on stock
    - order performance: open orders (not cancelled) that are not delayed
    - supplier reliability: active suppliers
    Overall score is the mean of the three.
    """
    now = now or datetime.utcnow()
    healthy_products = sum(1 for p in products if not p.is_low_stock)
    live_orders = [o for o in orders if o.status != OrderStatus.CANCELLED]
    on_time_orders = sum(1 for o in live_orders if not o.is_delayed(now))
    active_suppliers = sum(1 for s in suppliers if s.is_active)

    stock_health = percentage(healthy_products, len(products))
    order_performance = percentage(on_time_orders, len(live_orders))
    supplier_reliability = percentage(active_suppliers, len(suppliers))
    overall = round((stock_health + order_performance + supplier_reliability) / 3, 2)

    return {
        'stock_health_percentage': stock_health,
        'order_performance_percentage': order_performance,
        'supplier_reliability_percentage': supplier_reliability,
        'overall_health_score': overall,
    }


def trends(orders: Iterable, days: int, today: Optional[date] = None) -> Dict[str, Dict[str, Any]]:
    """
    Per-day order counts and delivered revenue for the last `days` days,
    oldest first, keyed by ISO date. Days without orders are present with zeros.
    """
    today = today or datetime.utcnow().date()
    first_day = today - timedelta(days=days - 1)

    buckets: Dict[str, Dict[str, Any]] = OrderedDict()
    for offset in range(days):
        day = first_day + timedelta(days=offset)
        buckets[day.isoformat()] = {'order_count': 0, 'delivered_count': 0, 'revenue': ZERO}

    for order in orders:
        key = order.order_date.date().isoformat()
        if key not in buckets:
            continue
        bucket = buckets[key]
        bucket['order_count'] += 1
        if order.status == OrderStatus.DELIVERED:
            bucket['delivered_count'] += 1
            bucket['revenue'] = (bucket['revenue'] + Decimal(order.total_amount or 0)).quantize(CENT)

    return buckets
