"""
State machine for order status

Encodes valid transitions only. Stock side effects live in OrderContext.
"""

from typing import Dict, Set
from inventory_app.data.inventory.order import OrderStatus
from inventory_app.buisness.inventory.errors import InvalidStateError


class OrderStateMachine:
    """
    PENDING -> CONFIRMED -> SHIPPED -> DELIVERED, and any state before
    DELIVERED may go to CANCELLED.

    DELAYED is derived from the delivery dates at read time and is never a
    stored target.
    """

    TERMINAL_STATES = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}

    TRANSITIONS: Dict[OrderStatus, Set[OrderStatus]] = {
        OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
        OrderStatus.CONFIRMED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
        OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
        # DELIVERED and CANCELLED are terminal
    }

    # Human readable requirement for each target, used in error messages
    REQUIRED_STATUS = {
        OrderStatus.CONFIRMED: 'PENDING',
        OrderStatus.SHIPPED: 'CONFIRMED',
        OrderStatus.DELIVERED: 'SHIPPED',
        OrderStatus.CANCELLED: 'not DELIVERED or CANCELLED',
    }

    @classmethod
    def can_transition(cls, from_status: OrderStatus, to_status: OrderStatus) -> bool:
        if from_status in cls.TERMINAL_STATES:
            return False
        return to_status in cls.TRANSITIONS.get(from_status, set())

    @classmethod
    def validate_transition(cls, order_number: str, from_status: OrderStatus, to_status: OrderStatus) -> None:
        """
        Raise InvalidStateError unless from_status may move to to_status.

        Args:
            order_number: Order number used in the error message
            from_status: Current stored status
            to_status: Target status
        """
        if not cls.can_transition(from_status, to_status):
            required = cls.REQUIRED_STATUS.get(to_status, 'a valid status')
            raise InvalidStateError(
                f"Cannot move order {order_number} from {from_status.value} to {to_status.value}: "
                f"order must be {required}"
            )

    @classmethod
    def get_allowed_transitions(cls, from_status: OrderStatus) -> Set[OrderStatus]:
        if from_status in cls.TERMINAL_STATES:
            return set()
        return cls.TRANSITIONS.get(from_status, set())
