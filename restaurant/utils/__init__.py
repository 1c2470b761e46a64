"""Утилиты и вспомогательные функции"""
from restaurant.utils.helpers import describe_position, format_price, get_now, parse_datetime


__all__ = [
    "describe_position",
    "format_price",
    "get_now",
    "parse_datetime",
]
