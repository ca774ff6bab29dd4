"""
Dashboard Service
Aggregates the inventory services into dashboard payloads.

Each call recomputes from the database; nothing is cached.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from flask import current_app

from inventory_app.data.inventory.order import Order
from inventory_app.data.inventory.product import Product
from inventory_app.data.inventory.supplier import Supplier
from inventory_app.buisness.inventory.errors import InvalidArgumentError
from inventory_app.buisness.reporting import analytics
from inventory_app.services.inventory.order_service import OrderService
from inventory_app.services.inventory.product_service import ProductService
from inventory_app.services.inventory.supplier_service import SupplierService
from inventory_app.services.inventory.warehouse_service import WarehouseService

MAX_TREND_DAYS = 90


def _money_map(values):
    return {key: str(value) for key, value in values.items()}


class DashboardService:
    """
    Builds the summary, alerts, analytics, quick stats, performance and
    trends payloads.
    """

    @staticmethod
    def get_summary(now: Optional[datetime] = None) -> Dict[str, Any]:
        now = now or datetime.utcnow()
        return {
            'total_products': ProductService.total_count(),
            'total_suppliers': SupplierService.total_count(),
            'total_warehouses': WarehouseService.total_count(),
            'total_orders': OrderService.total_count(),
            'low_stock_count': ProductService.count_low_stock(),
            'pending_orders': OrderService.count_pending(),
            'delayed_orders': len(OrderService.get_delayed(now)),
            'active_suppliers': SupplierService.count_active(),
            'total_inventory_value': str(ProductService.total_inventory_value()),
            'weekly_revenue': str(OrderService.revenue(now - timedelta(days=7), now)),
        }

    @staticmethod
    def get_alerts(now: Optional[datetime] = None) -> Dict[str, Any]:
        product_alerts = ProductService.get_low_stock_alerts()
        order_alerts = OrderService.get_alerts(now)
        supplier_alerts = SupplierService.get_alerts()
        warehouse_alerts = WarehouseService.get_alerts()
        return {
            'product_alerts': product_alerts,
            'order_alerts': order_alerts,
            'supplier_alerts': supplier_alerts,
            'warehouse_alerts': warehouse_alerts,
            'total_alerts': (
                len(product_alerts) + len(order_alerts) + len(supplier_alerts) + len(warehouse_alerts)
            ),
        }

    @staticmethod
    def get_analytics() -> Dict[str, Any]:
        recent_limit = current_app.config.get('RECENT_ORDERS_LIMIT', 10)
        warehouse_summary = WarehouseService.get_summary()
        warehouse_summary['total_inventory_value'] = str(warehouse_summary['total_inventory_value'])
        return {
            'inventory_value_by_category': _money_map(ProductService.inventory_value_by_category()),
            'product_count_by_category': ProductService.count_by_category(),
            'top_expensive_products': [p.to_dict(include_audit_fields=False) for p in ProductService.top_expensive(5)],
            'order_count_by_status': OrderService.count_by_status(),
            'order_count_by_type': OrderService.count_by_type(),
            'recent_orders': [
                o.to_dict(include_audit_fields=False, include_items=False)
                for o in OrderService.get_recent(recent_limit)
            ],
            'supplier_count_by_status': SupplierService.count_by_status(),
            'reliable_suppliers': [s.name for s in SupplierService.get_reliable()],
            'warehouse_summary': warehouse_summary,
            'inventory_value_by_warehouse': _money_map(WarehouseService.inventory_value_by_warehouse()),
        }

    @staticmethod
    def get_quick_stats(now: Optional[datetime] = None) -> Dict[str, Any]:
        low_stock_limit = current_app.config.get('LOW_STOCK_REPORT_LIMIT', 5)
        low_stock = ProductService.get_low_stock()
        return {
            'products': ProductService.total_count(),
            'low_stock': len(low_stock),
            'pending_orders': OrderService.count_pending(),
            'delayed_orders': len(OrderService.get_delayed(now)),
            'active_suppliers': SupplierService.count_active(),
            'warehouses': WarehouseService.total_count(),
            'lowest_stock_products': [
                {'id': p.id, 'name': p.name, 'sku': p.sku, 'stock_quantity': p.stock_quantity}
                for p in low_stock[:low_stock_limit]
            ],
        }

    @staticmethod
    def get_performance(now: Optional[datetime] = None) -> Dict[str, float]:
        return analytics.performance(
            Product.query.all(),
            Order.query.all(),
            Supplier.query.all(),
            now,
        )

    @staticmethod
    def get_trends(days: int = 7, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Daily order activity for the last `days` days.

        Raises:
            InvalidArgumentError: If days is outside 1..90
        """
        if days < 1 or days > MAX_TREND_DAYS:
            raise InvalidArgumentError(f"days must be between 1 and {MAX_TREND_DAYS}")
        now = now or datetime.utcnow()
        today = now.date()
        start = datetime.combine(today - timedelta(days=days - 1), datetime.min.time())

        buckets = analytics.trends(OrderService.orders_since(start), days, today)
        daily = [
            {
                'date': day,
                'order_count': bucket['order_count'],
                'delivered_count': bucket['delivered_count'],
                'revenue': str(bucket['revenue']),
            }
            for day, bucket in buckets.items()
        ]
        return {
            'days': days,
            'daily': daily,
            'total_orders': sum(d['order_count'] for d in daily),
            'total_revenue': str(sum((b['revenue'] for b in buckets.values()), analytics.ZERO)),
        }
