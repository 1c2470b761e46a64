"""
Database package: подключение, схема и модели данных
"""

from restaurant.database.db import Database
from restaurant.database.models import Offer, Order, OrderPosition, PositionStateHistory
from restaurant.database.transaction import TransactionGuard


def get_database(db_path: str | None = None) -> Database:
    """
    Фабрика для получения экземпляра БД

    Используйте эту функцию вместо прямого вызова `Database()`.
    """
    return Database(db_path)


__all__ = [
    "Database",
    "Offer",
    "Order",
    "OrderPosition",
    "PositionStateHistory",
    "TransactionGuard",
    "get_database",
]
