"""
Интеграционные тесты для Database и ServiceFactory
"""
import pytest

from restaurant.core.config import Config
from restaurant.database import Database, get_database
from restaurant.services import OrderPositionService


class TestDatabase:
    """Тесты для класса Database"""

    @pytest.mark.asyncio
    async def test_init_creates_tables(self, db):
        """Тест создания таблиц"""
        cursor = await db.get_connection().execute(
            "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
        )
        tables = {row[0] for row in await cursor.fetchall()}

        assert {"offers", "orders", "order_positions", "position_state_history"} <= tables

    @pytest.mark.asyncio
    async def test_init_db_is_idempotent(self, db):
        await db.init_db()

    def test_not_connected(self):
        database = Database(":memory:")
        with pytest.raises(RuntimeError, match="не подключена"):
            database.get_connection()

    def test_default_path_from_config(self, mock_config):
        assert get_database().db_path == Config.DATABASE_PATH

    @pytest.mark.asyncio
    async def test_transaction_rollback(self, db):
        """Ошибка внутри транзакции откатывает изменения"""
        with pytest.raises(ValueError):
            async with db.transaction() as connection:
                await connection.execute("INSERT INTO orders (state) VALUES ('OPEN')")
                raise ValueError("boom")

        cursor = await db.get_connection().execute("SELECT COUNT(*) FROM orders")
        assert (await cursor.fetchone())[0] == 0

    @pytest.mark.asyncio
    async def test_transaction_commit(self, db):
        async with db.transaction() as connection:
            await connection.execute("INSERT INTO orders (state) VALUES ('OPEN')")

        cursor = await db.get_connection().execute("SELECT COUNT(*) FROM orders")
        assert (await cursor.fetchone())[0] == 1


class TestServiceFactory:
    """Тесты для фабрики сервисов"""

    @pytest.mark.asyncio
    async def test_services_are_cached(self, db):
        factory = db.services
        assert factory is db.services
        assert isinstance(factory.order_position_service, OrderPositionService)
        assert factory.order_position_service is factory.order_position_service

    @pytest.mark.asyncio
    async def test_shared_dependencies(self, services):
        service = services.order_position_service
        assert service.position_repo is services.order_position_repository
        assert service.reconciler is services.order_closure_reconciler
        assert service.state_machine is services.state_machine

    @pytest.mark.asyncio
    async def test_reset(self, services):
        service = services.order_position_service
        services.reset()
        assert services.order_position_service is not service

    @pytest.mark.asyncio
    async def test_repositories_share_database_guard(self, db, services):
        """Все репозитории ставят транзакции в одну очередь с Database"""
        assert services.guard is db.guard
        assert services.order_repository.guard is db.guard
        assert services.order_position_repository.guard is db.guard
        assert services.offer_repository.guard is db.guard
