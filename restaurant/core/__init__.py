"""Ядро приложения - конфигурация, константы и логирование"""

from restaurant.core.config import MAX_COMMENT_LENGTH, Config
from restaurant.core.constants import OrderPositionState, OrderState, ProductOrderState
from restaurant.core.logging import setup_logging


__all__ = [
    "MAX_COMMENT_LENGTH",
    "Config",
    "OrderPositionState",
    "OrderState",
    "ProductOrderState",
    "setup_logging",
]
