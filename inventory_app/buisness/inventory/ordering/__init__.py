"""
Order business logic: creation, status transitions and line-item changes.
"""

from inventory_app.buisness.inventory.ordering.order_factory import OrderFactory
from inventory_app.buisness.inventory.ordering.order_state_machine import OrderStateMachine
from inventory_app.buisness.inventory.ordering.order_context import OrderContext

__all__ = ['OrderFactory', 'OrderStateMachine', 'OrderContext']
