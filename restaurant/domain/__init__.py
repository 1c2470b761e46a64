"""
Domain layer для бизнес-логики позиций заказа
"""

from restaurant.domain.exceptions import (
    IllegalFieldChangeError,
    IllegalStateTransitionError,
    ObjectNotFoundError,
    WorkflowError,
)
from restaurant.domain.order_position_state_machine import OrderPositionStateMachine


__all__ = [
    "IllegalFieldChangeError",
    "IllegalStateTransitionError",
    "ObjectNotFoundError",
    "OrderPositionStateMachine",
    "WorkflowError",
]
