"""
Базовый репозиторий для работы с базой данных
"""

import logging
from typing import Generic, TypeVar

import aiosqlite

from restaurant.database.transaction import TransactionGuard


logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Базовый класс для всех репозиториев

    Все записи идут через TransactionGuard соединения: одиночный запрос
    фиксируется сразу, а внутри открытой транзакции ждёт её commit.
    """

    def __init__(self, db_connection: aiosqlite.Connection, guard: TransactionGuard | None = None):
        """
        Инициализация репозитория

        Args:
            db_connection: Подключение к базе данных (общее для всех репозиториев)
            guard: Очередь транзакций этого соединения (общая для всех репозиториев)
        """
        self.db = db_connection
        self.guard = guard or TransactionGuard(db_connection)

    def transaction(self):
        """Транзакция на соединении репозитория (см. TransactionGuard.transaction)"""
        return self.guard.transaction()

    async def _execute(self, query: str, params: tuple | dict | None = None) -> aiosqlite.Cursor:
        if params:
            return await self.db.execute(query, params)
        return await self.db.execute(query)

    async def _fetch_one(
        self, query: str, params: tuple | dict | None = None
    ) -> aiosqlite.Row | None:
        """Первая строка результата или None"""
        cursor = await self._execute(query, params)
        return await cursor.fetchone()

    async def _fetch_all(
        self, query: str, params: tuple | dict | None = None
    ) -> list[aiosqlite.Row]:
        cursor = await self._execute(query, params)
        return list(await cursor.fetchall())

    async def _execute_commit(
        self, query: str, params: tuple | dict | None = None
    ) -> aiosqlite.Cursor:
        """
        Запрос на запись (INSERT, UPDATE) в транзакции guard

        Args:
            query: SQL запрос
            params: Параметры запроса

        Returns:
            Cursor (lastrowid для INSERT, rowcount для UPDATE)
        """
        async with self.transaction():
            return await self._execute(query, params)
