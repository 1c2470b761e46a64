"""
Service layer: бизнес-логика позиций заказа
"""

from restaurant.services.order_closure import OrderClosureReconciler
from restaurant.services.order_position_service import OrderPositionService
from restaurant.services.service_factory import ServiceFactory


__all__ = [
    "OrderClosureReconciler",
    "OrderPositionService",
    "ServiceFactory",
]
