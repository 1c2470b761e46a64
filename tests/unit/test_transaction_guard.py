"""
Тесты для TransactionGuard
"""
import asyncio

import aiosqlite
import pytest
import pytest_asyncio

from restaurant.database.db import INDEXES, SCHEMA
from restaurant.database.models import Order
from restaurant.database.transaction import TransactionGuard
from restaurant.repositories import OrderRepository


@pytest_asyncio.fixture
async def db_connection():
    """Фикстура для создания тестовой БД в памяти"""
    connection = await aiosqlite.connect(":memory:")
    connection.row_factory = aiosqlite.Row

    for statement in (*SCHEMA, *INDEXES):
        await connection.execute(statement)
    await connection.commit()

    yield connection

    await connection.close()


@pytest.fixture
def guard(db_connection):
    return TransactionGuard(db_connection)


async def count_orders(connection) -> int:
    cursor = await connection.execute("SELECT COUNT(*) FROM orders")
    return (await cursor.fetchone())[0]


class TestTransactionGuard:
    """Тесты очереди транзакций"""

    @pytest.mark.asyncio
    async def test_nested_joins_outer(self, guard, db_connection):
        """Вложенный вход не открывает новую транзакцию и не коммитит"""
        async with guard.transaction():
            await db_connection.execute("INSERT INTO orders (state) VALUES ('OPEN')")
            async with guard.transaction() as connection:
                assert connection is db_connection
                await connection.execute("INSERT INTO orders (state) VALUES ('OPEN')")
            assert db_connection.in_transaction
            assert guard.owned_by_current_task

        assert not db_connection.in_transaction
        assert not guard.owned_by_current_task
        assert await count_orders(db_connection) == 2

    @pytest.mark.asyncio
    async def test_error_in_nested_rolls_back_outer(self, guard, db_connection):
        with pytest.raises(ValueError):
            async with guard.transaction():
                await db_connection.execute("INSERT INTO orders (state) VALUES ('OPEN')")
                async with guard.transaction():
                    raise ValueError("boom")

        assert await count_orders(db_connection) == 0

    @pytest.mark.asyncio
    async def test_tasks_run_one_after_another(self, guard, db_connection):
        """Транзакции разных задач не пересекаются"""
        events = []

        async def worker(name: str):
            async with guard.transaction() as connection:
                events.append(f"{name}-begin")
                await connection.execute("INSERT INTO orders (state) VALUES ('OPEN')")
                await asyncio.sleep(0)
                events.append(f"{name}-end")

        await asyncio.gather(worker("a"), worker("b"))

        assert events == ["a-begin", "a-end", "b-begin", "b-end"]
        assert await count_orders(db_connection) == 2

    @pytest.mark.asyncio
    async def test_failed_task_does_not_undo_other_task(self, guard, db_connection):
        """Rollback одной задачи не отменяет записи другой"""

        async def writer():
            async with guard.transaction() as connection:
                await connection.execute("INSERT INTO orders (table_id) VALUES (1)")
                await asyncio.sleep(0)

        async def failing():
            async with guard.transaction() as connection:
                await connection.execute("INSERT INTO orders (table_id) VALUES (2)")
                raise RuntimeError("boom")

        results = await asyncio.gather(writer(), failing(), return_exceptions=True)

        assert results[0] is None
        assert isinstance(results[1], RuntimeError)
        cursor = await db_connection.execute("SELECT table_id FROM orders")
        assert [row[0] for row in await cursor.fetchall()] == [1]

    @pytest.mark.asyncio
    async def test_joins_transaction_opened_elsewhere(self, guard, db_connection):
        """Транзакция, открытая в обход guard, не ломает запись"""
        await db_connection.execute("BEGIN IMMEDIATE")
        async with guard.transaction():
            await db_connection.execute("INSERT INTO orders (state) VALUES ('OPEN')")
        assert db_connection.in_transaction

        await db_connection.rollback()
        assert await count_orders(db_connection) == 0

    @pytest.mark.asyncio
    async def test_repository_write_waits_for_other_task(self, guard, db_connection):
        """Одиночная запись репозитория ждёт чужую транзакцию"""
        repository = OrderRepository(db_connection, guard)
        started = asyncio.Event()

        async def holder():
            async with guard.transaction() as connection:
                started.set()
                await asyncio.sleep(0)
                await asyncio.sleep(0)
                await connection.execute("INSERT INTO orders (table_id) VALUES (1)")
                raise RuntimeError("boom")

        async def single_write():
            await started.wait()
            return await repository.save(Order(table_id=2))

        results = await asyncio.gather(holder(), single_write(), return_exceptions=True)

        assert isinstance(results[0], RuntimeError)
        assert results[1].table_id == 2
        cursor = await db_connection.execute("SELECT table_id FROM orders")
        assert [row[0] for row in await cursor.fetchall()] == [2]
