"""
Repository layer для абстракции работы с базой данных
"""

from restaurant.repositories.base import BaseRepository
from restaurant.repositories.exceptions import EntityNotFoundError, RepositoryError
from restaurant.repositories.offer_repository import OfferRepository
from restaurant.repositories.order_position_repository import OrderPositionRepository
from restaurant.repositories.order_repository import OrderRepository


__all__ = [
    "BaseRepository",
    "EntityNotFoundError",
    "OfferRepository",
    "OrderPositionRepository",
    "OrderRepository",
    "RepositoryError",
]
