"""
Вспомогательные функции
"""

from datetime import datetime, timezone
from typing import Any


def get_now() -> datetime:
    """
    Получить текущее время

    Returns:
        datetime объект с UTC timezone
    """
    return datetime.now(timezone.utc)


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """
    Разбор даты из БД (ISO строка)

    Args:
        value: Значение из строки БД

    Returns:
        datetime или None
    """
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def format_price(price: float | None) -> str:
    """
    Форматирование цены

    Args:
        price: Цена

    Returns:
        Строка вида "12.50"
    """
    if price is None:
        return "—"
    return f"{price:.2f}"


def describe_position(position: Any) -> str:
    """
    Короткое описание позиции для логов

    Args:
        position: Позиция заказа (модель или схема)

    Returns:
        Строка вида "#3 'Cola' (order #9, PREPARED)"
    """
    state = getattr(position.state, "value", position.state)
    name = position.offer_name or f"offer #{position.offer_id}"
    return f"#{position.id} '{name}' (order #{position.order_id}, {state})"
