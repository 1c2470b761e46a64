"""
Транзакции на общем соединении с БД
"""

import asyncio
import logging
from contextlib import asynccontextmanager

import aiosqlite


logger = logging.getLogger(__name__)


class TransactionGuard:
    """
    Очередь транзакций на одном соединении aiosqlite

    Соединение общее для всех репозиториев, поэтому транзакции разных задач
    выполняются строго по очереди (asyncio.Lock). Повторный вход из задачи,
    которая уже держит транзакцию, присоединяется к ней: без BEGIN и без commit.

    Задачи, запущенные изнутри транзакции, ждут её завершения.
    """

    def __init__(self, connection: aiosqlite.Connection):
        """
        Инициализация

        Args:
            connection: Подключение к базе данных
        """
        self.connection = connection
        self._lock = asyncio.Lock()
        self._owner: asyncio.Task | None = None

    @property
    def owned_by_current_task(self) -> bool:
        """Держит ли текущая задача транзакцию"""
        return self._owner is not None and self._owner is asyncio.current_task()

    @asynccontextmanager
    async def transaction(self):
        """
        Контекстный менеджер для транзакций

        Внешний уровень делает BEGIN IMMEDIATE, commit при успехе и rollback при ошибке.
        Вложенные уровни только отдают соединение.

        Yields:
            aiosqlite.Connection: Подключение к БД
        """
        if not self.connection:
            raise RuntimeError("База данных не подключена")

        if self.owned_by_current_task:
            yield self.connection
            return

        async with self._lock:
            self._owner = asyncio.current_task()
            try:
                if self.connection.in_transaction:
                    # транзакция открыта в обход guard: записи уходят в неё
                    yield self.connection
                    return

                await self.connection.execute("BEGIN IMMEDIATE")
                try:
                    yield self.connection
                    await self.connection.commit()
                    logger.debug("✅ Транзакция успешно завершена (commit)")
                except Exception as e:
                    await self.connection.rollback()
                    logger.error(f"❌ Транзакция отменена (rollback): {e}")
                    raise
            finally:
                self._owner = None
