"""Pydantic схемы для валидации данных"""
from restaurant.schemas.order_position import OfferSchema, OrderPositionSchema, OrderSchema


__all__ = [
    "OfferSchema",
    "OrderPositionSchema",
    "OrderSchema",
]
