"""
Репозиторий для работы с предложениями меню
"""

import logging

import aiosqlite

from restaurant.database.models import Offer
from restaurant.repositories.base import BaseRepository


logger = logging.getLogger(__name__)


class OfferRepository(BaseRepository[Offer]):
    """Репозиторий для работы с предложениями (только чтение для бизнес-логики)"""

    async def create(self, name: str, price: float, description: str | None = None) -> Offer:
        """
        Создание предложения

        Args:
            name: Название
            price: Цена
            description: Описание

        Returns:
            Объект Offer
        """
        cursor = await self._execute_commit(
            "INSERT INTO offers (name, description, price) VALUES (?, ?, ?)",
            (name, description, price),
        )
        offer = Offer(id=cursor.lastrowid, name=name, description=description, price=price)
        logger.info(f"Создано предложение #{offer.id}")
        return offer

    async def find_offer(self, offer_id: int) -> Offer | None:
        """
        Получение предложения по ID

        Args:
            offer_id: ID предложения

        Returns:
            Объект Offer или None
        """
        row = await self._fetch_one("SELECT * FROM offers WHERE id = ?", (offer_id,))
        if row:
            return self._row_to_offer(row)
        return None

    async def get_all(self) -> list[Offer]:
        """Получение всех предложений"""
        rows = await self._fetch_all("SELECT * FROM offers ORDER BY id")
        return [self._row_to_offer(row) for row in rows]

    def _row_to_offer(self, row: aiosqlite.Row) -> Offer:
        return Offer(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            price=row["price"],
        )
