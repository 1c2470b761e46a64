"""
Закрытие заказа после оплаты или отмены последней открытой позиции
"""

import logging

from restaurant.core.constants import OrderPositionState, OrderState
from restaurant.repositories import OrderPositionRepository, OrderRepository


logger = logging.getLogger(__name__)


class OrderClosureReconciler:
    """
    Пересчёт статуса заказа по статусам его позиций

    Заказ становится CLOSED только здесь: клиент не может закрыть его напрямую.
    Вызывается после того, как позиция уже сохранена в новом статусе.
    """

    def __init__(self, position_repo: OrderPositionRepository, order_repo: OrderRepository):
        self.position_repo = position_repo
        self.order_repo = order_repo

    async def reconcile(self, order_id: int, new_state: OrderPositionState) -> bool:
        """
        Закрытие заказа, если у него не осталось открытых позиций

        Args:
            order_id: ID заказа
            new_state: Статус, в который только что перешла позиция

        Returns:
            True если заказ был закрыт
        """
        if OrderPositionState(new_state) not in OrderPositionState.terminal_states():
            return False

        open_positions = await self.position_repo.find_open_by_order_id(order_id)
        if open_positions:
            logger.debug(
                f"Заказ #{order_id} остаётся открытым: {len(open_positions)} открытых позиций"
            )
            return False

        order = await self.order_repo.get_by_id(order_id)
        if order is None:
            logger.warning(f"Заказ #{order_id} не найден, закрыть нельзя")
            return False

        order.state = OrderState.CLOSED
        await self.order_repo.save(order)
        logger.info(f"Заказ #{order_id} закрыт: открытых позиций не осталось")
        return True
