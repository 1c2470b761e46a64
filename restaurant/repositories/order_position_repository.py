"""
Репозиторий для работы с позициями заказа
"""

import logging
from dataclasses import replace

import aiosqlite

from restaurant.core.constants import OrderPositionState, ProductOrderState
from restaurant.database.models import OrderPosition, PositionStateHistory
from restaurant.repositories.base import BaseRepository
from restaurant.repositories.exceptions import EntityNotFoundError
from restaurant.utils.helpers import get_now, parse_datetime


logger = logging.getLogger(__name__)


def _value(state) -> str | None:
    return None if state is None else getattr(state, "value", state)


class OrderPositionRepository(BaseRepository[OrderPosition]):
    """Репозиторий для работы с позициями заказа"""

    async def find(self, position_id: int) -> OrderPosition | None:
        """
        Получение позиции по ID

        Args:
            position_id: ID позиции

        Returns:
            Объект OrderPosition или None
        """
        row = await self._fetch_one("SELECT * FROM order_positions WHERE id = ?", (position_id,))
        if row:
            return self._row_to_position(row)
        return None

    async def save(self, position: OrderPosition) -> OrderPosition:
        """
        Сохранение позиции (INSERT если id нет, иначе UPDATE всех полей)

        Args:
            position: Позиция заказа

        Returns:
            Сохранённая позиция с id

        Raises:
            EntityNotFoundError: Если обновляемой позиции нет в БД
        """
        now = get_now()
        state = OrderPositionState(position.state)
        drink_state = (
            ProductOrderState(position.drink_state) if position.drink_state is not None else None
        )

        if position.id is None:
            cursor = await self._execute_commit(
                """
                INSERT INTO order_positions (order_id, offer_id, offer_name, price, comment,
                                             state, drink_state, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    position.order_id,
                    position.offer_id,
                    position.offer_name,
                    position.price,
                    position.comment,
                    state.value,
                    _value(drink_state),
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
            saved = replace(
                position,
                id=cursor.lastrowid,
                state=state,
                drink_state=drink_state,
                created_at=now,
                updated_at=now,
            )
            logger.debug(f"Создана позиция #{saved.id} в заказе #{saved.order_id}")
            return saved

        cursor = await self._execute_commit(
            """
            UPDATE order_positions
            SET order_id = ?, offer_id = ?, offer_name = ?, price = ?, comment = ?,
                state = ?, drink_state = ?, updated_at = ?
            WHERE id = ?
            """,
            (
                position.order_id,
                position.offer_id,
                position.offer_name,
                position.price,
                position.comment,
                state.value,
                _value(drink_state),
                now.isoformat(),
                position.id,
            ),
        )
        if cursor.rowcount == 0:
            raise EntityNotFoundError("OrderPosition", position.id)

        return replace(position, state=state, drink_state=drink_state, updated_at=now)

    async def find_open_by_order_id(self, order_id: int) -> list[OrderPosition]:
        """
        Получение открытых (не оплаченных и не отменённых) позиций заказа

        Args:
            order_id: ID заказа

        Returns:
            Список позиций, пустой если открытых нет
        """
        open_states = sorted(state.value for state in OrderPositionState.open_states())
        placeholders = ", ".join("?" for _ in open_states)
        rows = await self._fetch_all(
            f"""
            SELECT * FROM order_positions
            WHERE order_id = ? AND state IN ({placeholders})
            ORDER BY id
            """,
            (order_id, *open_states),
        )
        return [self._row_to_position(row) for row in rows]

    async def find_by_order_id(self, order_id: int) -> list[OrderPosition]:
        """Получение всех позиций заказа"""
        rows = await self._fetch_all(
            "SELECT * FROM order_positions WHERE order_id = ? ORDER BY id", (order_id,)
        )
        return [self._row_to_position(row) for row in rows]

    async def add_history(
        self,
        position_id: int,
        old_state: OrderPositionState | None,
        new_state: OrderPositionState,
        old_drink_state: ProductOrderState | None = None,
        new_drink_state: ProductOrderState | None = None,
    ) -> None:
        """
        Запись изменения статуса позиции в историю

        Args:
            position_id: ID позиции
            old_state: Предыдущий статус
            new_state: Новый статус
            old_drink_state: Предыдущий статус напитка
            new_drink_state: Новый статус напитка
        """
        await self._execute_commit(
            """
            INSERT INTO position_state_history (position_id, old_state, new_state,
                                                old_drink_state, new_drink_state, changed_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                position_id,
                _value(old_state),
                _value(new_state),
                _value(old_drink_state),
                _value(new_drink_state),
                get_now().isoformat(),
            ),
        )

    async def get_history(self, position_id: int) -> list[PositionStateHistory]:
        """Получение истории статусов позиции (по времени изменения)"""
        rows = await self._fetch_all(
            "SELECT * FROM position_state_history WHERE position_id = ? ORDER BY id",
            (position_id,),
        )
        return [
            PositionStateHistory(
                id=row["id"],
                position_id=row["position_id"],
                old_state=OrderPositionState(row["old_state"]) if row["old_state"] else None,
                new_state=OrderPositionState(row["new_state"]),
                old_drink_state=(
                    ProductOrderState(row["old_drink_state"]) if row["old_drink_state"] else None
                ),
                new_drink_state=(
                    ProductOrderState(row["new_drink_state"]) if row["new_drink_state"] else None
                ),
                changed_at=parse_datetime(row["changed_at"]),
            )
            for row in rows
        ]

    def _row_to_position(self, row: aiosqlite.Row) -> OrderPosition:
        return OrderPosition(
            id=row["id"],
            order_id=row["order_id"],
            offer_id=row["offer_id"],
            offer_name=row["offer_name"],
            price=row["price"],
            comment=row["comment"],
            state=OrderPositionState(row["state"]),
            drink_state=ProductOrderState(row["drink_state"]) if row["drink_state"] else None,
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
