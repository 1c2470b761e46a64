"""
Репозиторий для работы с заказами
"""

import logging

import aiosqlite

from restaurant.core.constants import OrderState
from restaurant.database.models import Order
from restaurant.repositories.base import BaseRepository
from restaurant.repositories.exceptions import EntityNotFoundError
from restaurant.utils.helpers import get_now, parse_datetime


logger = logging.getLogger(__name__)


class OrderRepository(BaseRepository[Order]):
    """Репозиторий для работы с заказами"""

    async def save(self, order: Order) -> Order:
        """
        Сохранение заказа (INSERT если id нет, иначе UPDATE)

        Args:
            order: Заказ

        Returns:
            Сохранённый заказ с id

        Raises:
            EntityNotFoundError: Если обновляемого заказа нет в БД
        """
        now = get_now()
        state = OrderState(order.state)

        if order.id is None:
            cursor = await self._execute_commit(
                """
                INSERT INTO orders (table_id, state, created_at, updated_at)
                VALUES (?, ?, ?, ?)
                """,
                (order.table_id, state.value, now.isoformat(), now.isoformat()),
            )
            saved = Order(
                id=cursor.lastrowid,
                table_id=order.table_id,
                state=state,
                created_at=now,
                updated_at=now,
            )
            logger.info(f"Создан заказ #{saved.id}")
            return saved

        cursor = await self._execute_commit(
            """
            UPDATE orders
            SET table_id = ?, state = ?, updated_at = ?
            WHERE id = ?
            """,
            (order.table_id, state.value, now.isoformat(), order.id),
        )
        if cursor.rowcount == 0:
            raise EntityNotFoundError("Order", order.id)

        logger.debug(f"Заказ #{order.id} сохранён (state={state.value})")
        return Order(
            id=order.id,
            table_id=order.table_id,
            state=state,
            created_at=order.created_at,
            updated_at=now,
        )

    async def get_by_id(self, order_id: int) -> Order | None:
        """
        Получение заказа по ID

        Args:
            order_id: ID заказа

        Returns:
            Объект Order или None
        """
        row = await self._fetch_one("SELECT * FROM orders WHERE id = ?", (order_id,))
        if row:
            return self._row_to_order(row)
        return None

    def _row_to_order(self, row: aiosqlite.Row) -> Order:
        return Order(
            id=row["id"],
            table_id=row["table_id"],
            state=OrderState(row["state"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
