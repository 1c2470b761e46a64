"""
Работа с базой данных
"""

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import aiosqlite

from restaurant.core.config import Config
from restaurant.database.transaction import TransactionGuard


if TYPE_CHECKING:
    from restaurant.services.service_factory import ServiceFactory


logger = logging.getLogger(__name__)


SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS offers (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        description TEXT,
        price REAL NOT NULL DEFAULT 0 CHECK (price >= 0)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS orders (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        table_id INTEGER,
        state TEXT NOT NULL DEFAULT 'OPEN' CHECK (state IN ('OPEN', 'CLOSED')),
        created_at TIMESTAMP,
        updated_at TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS order_positions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        order_id INTEGER NOT NULL,
        offer_id INTEGER NOT NULL,
        offer_name TEXT,
        price REAL,
        comment TEXT,
        state TEXT NOT NULL DEFAULT 'ORDERED'
            CHECK (state IN ('ORDERED', 'PREPARED', 'DELIVERED', 'PAYED', 'CANCELLED')),
        drink_state TEXT DEFAULT 'ORDERED'
            CHECK (drink_state IS NULL OR drink_state IN ('ORDERED', 'PREPARED', 'DELIVERED')),
        created_at TIMESTAMP,
        updated_at TIMESTAMP,
        FOREIGN KEY (order_id) REFERENCES orders(id),
        FOREIGN KEY (offer_id) REFERENCES offers(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS position_state_history (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        position_id INTEGER NOT NULL,
        old_state TEXT,
        new_state TEXT NOT NULL,
        old_drink_state TEXT,
        new_drink_state TEXT,
        changed_at TIMESTAMP,
        FOREIGN KEY (position_id) REFERENCES order_positions(id)
    )
    """,
)

INDEXES = (
    "CREATE INDEX IF NOT EXISTS idx_order_positions_order_state "
    "ON order_positions(order_id, state)",
    "CREATE INDEX IF NOT EXISTS idx_position_history_position "
    "ON position_state_history(position_id)",
)


class Database:
    """Класс для работы с базой данных"""

    def __init__(self, db_path: str | None = None):
        """
        Инициализация

        Args:
            db_path: Путь к файлу базы данных (":memory:" для тестов)
        """
        self.db_path = db_path or Config.DATABASE_PATH
        self.connection: aiosqlite.Connection | None = None
        self.guard: TransactionGuard | None = None
        self._service_factory: "ServiceFactory | None" = None

    def get_connection(self) -> aiosqlite.Connection:
        """
        Получение активного соединения

        Raises:
            RuntimeError: Если соединение не установлено
        """
        if self.connection is None:
            raise RuntimeError("База данных не подключена")
        return self.connection

    async def connect(self):
        """Подключение к базе данных"""
        connection = await aiosqlite.connect(self.db_path)
        connection.row_factory = aiosqlite.Row
        await connection.execute("PRAGMA journal_mode=WAL")
        self.connection = connection
        self.guard = TransactionGuard(connection)
        logger.info("Подключено к базе данных: %s", self.db_path)

    async def disconnect(self):
        """Отключение от базы данных"""
        connection = self.connection
        if connection:
            await connection.close()
            self.connection = None
            self.guard = None
            self._service_factory = None
            logger.info("Отключено от базы данных")

    async def init_db(self):
        """Создание таблиц и индексов, если их ещё нет"""
        if not self.connection:
            await self.connect()

        connection = self.get_connection()
        for statement in SCHEMA:
            await connection.execute(statement)
        for statement in INDEXES:
            await connection.execute(statement)
        await connection.commit()
        logger.info("[OK] Схема базы данных готова")

    @property
    def services(self) -> "ServiceFactory":
        """
        Получение Service Factory для доступа к сервисам

        Returns:
            ServiceFactory: Фабрика сервисов
        """
        if self._service_factory is None:
            from restaurant.services.service_factory import ServiceFactory

            self._service_factory = ServiceFactory(self.get_connection(), self.guard)
        return self._service_factory

    @asynccontextmanager
    async def transaction(self):
        """
        Context manager для транзакционной изоляции

        BEGIN IMMEDIATE сразу берёт блокировку на запись.
        Автоматически делает commit при успехе или rollback при ошибке.
        Операции сервисов внутри блока выполняются в этой же транзакции.
        """
        self.get_connection()
        async with self.guard.transaction() as connection:
            yield connection
