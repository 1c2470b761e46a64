"""
Сервис для работы с позициями заказа (бизнес-логика)
"""

import dataclasses
import logging

from restaurant.core.config import MAX_COMMENT_LENGTH
from restaurant.core.constants import OrderPositionState, OrderState, ProductOrderState
from restaurant.database.models import Order, OrderPosition, PositionStateHistory
from restaurant.domain.exceptions import ObjectNotFoundError
from restaurant.domain.order_position_state_machine import OrderPositionStateMachine
from restaurant.repositories import OfferRepository, OrderPositionRepository, OrderRepository
from restaurant.schemas import OfferSchema, OrderPositionSchema, OrderSchema
from restaurant.services.order_closure import OrderClosureReconciler
from restaurant.utils.helpers import describe_position, format_price


logger = logging.getLogger(__name__)


class OrderPositionService:
    """
    Сервис для управления позициями заказа
    Инкапсулирует создание позиций, обновление и смену статусов

    Все репозитории должны работать через одно соединение с БД:
    запись позиции и закрытие заказа выполняются в одной транзакции.
    """

    def __init__(
        self,
        position_repo: OrderPositionRepository,
        order_repo: OrderRepository,
        offer_repo: OfferRepository,
        state_machine: OrderPositionStateMachine | None = None,
        reconciler: OrderClosureReconciler | None = None,
    ):
        """
        Инициализация сервиса

        Args:
            position_repo: Репозиторий позиций
            order_repo: Репозиторий заказов
            offer_repo: Репозиторий предложений меню
            state_machine: State machine для валидации переходов
            reconciler: Закрытие заказа после терминальных статусов
        """
        self.position_repo = position_repo
        self.order_repo = order_repo
        self.offer_repo = offer_repo
        self.state_machine = state_machine or OrderPositionStateMachine()
        self.reconciler = reconciler or OrderClosureReconciler(position_repo, order_repo)

    async def create_order_position(
        self,
        offer: OfferSchema | int,
        order: OrderSchema | Order,
        comment: str | None = None,
    ) -> OrderPositionSchema:
        """
        Создание позиции в заказе

        Заказ всегда переводится в OPEN и сохраняется (создаётся, если у него нет id).
        Название и цена копируются из предложения и дальше с ним не синхронизируются.

        Args:
            offer: Предложение меню или его ID
            order: Заказ, к которому относится позиция
            comment: Комментарий гостя

        Returns:
            Созданная позиция

        Raises:
            ObjectNotFoundError: Если предложение не найдено
            ValueError: Если комментарий слишком длинный
        """
        if offer is None:
            raise ValueError("offer не указан")
        if order is None:
            raise ValueError("order не указан")

        offer_id = offer if isinstance(offer, int) else offer.id
        offer_from_db = await self.offer_repo.find_offer(offer_id)
        if offer_from_db is None:
            raise ObjectNotFoundError("Offer", offer_id)

        if comment is not None and len(comment) > MAX_COMMENT_LENGTH:
            raise ValueError(f"Комментарий длиннее {MAX_COMMENT_LENGTH} символов")

        order_model = (
            order.to_model() if isinstance(order, OrderSchema) else dataclasses.replace(order)
        )
        order_model.state = OrderState.OPEN

        async with self.position_repo.transaction():
            saved_order = await self.order_repo.save(order_model)
            position = await self.position_repo.save(
                OrderPosition(
                    order_id=saved_order.id,
                    offer_id=offer_id,
                    offer_name=offer_from_db.get_display_name(),
                    price=offer_from_db.price,
                    comment=comment,
                )
            )
            await self.position_repo.add_history(
                position.id, None, position.state, None, position.drink_state
            )

        order.id = saved_order.id
        order.state = saved_order.state

        logger.debug(
            f"Позиция #{position.id} создана в заказе #{saved_order.id} "
            f"по предложению #{offer_id}, цена {format_price(position.price)}"
        )
        return OrderPositionSchema.from_model(position)

    async def save_order_position(self, position: OrderPositionSchema) -> OrderPositionSchema:
        """
        Сохранение позиции

        Позиция без id сохраняется как есть, без проверки переходов.
        Для существующей позиции проверяются неизменяемые поля и переход статусов.

        Args:
            position: Новая версия позиции

        Returns:
            Сохранённая позиция

        Raises:
            ObjectNotFoundError: Если позиции с таким id нет
            IllegalFieldChangeError: Если меняется order_id или offer_id
            IllegalStateTransitionError: Если переход статуса недопустим
        """
        if position is None:
            raise ValueError("position не указана")

        async with self.position_repo.transaction():
            stored = None
            if position.id is not None:
                stored = await self.position_repo.find(position.id)
                if stored is None:
                    raise ObjectNotFoundError("OrderPosition", position.id)
                self.state_machine.verify_update(stored, position)

            saved = await self.position_repo.save(position.to_model())

            state_changed = stored is None or stored.state != saved.state
            if state_changed or stored.drink_state != saved.drink_state:
                await self.position_repo.add_history(
                    saved.id,
                    stored.state if stored else None,
                    saved.state,
                    stored.drink_state if stored else None,
                    saved.drink_state,
                )
            if state_changed:
                await self.reconciler.reconcile(saved.order_id, saved.state)

        action = "saved" if stored is None else "updated"
        logger.debug(f"Позиция #{saved.id} {action}")
        return OrderPositionSchema.from_model(saved)

    async def mark_order_position_as(
        self, position: OrderPositionSchema, new_state: OrderPositionState
    ) -> None:
        """
        Смена статуса позиции по общей таблице переходов

        Args:
            position: Позиция (берётся только id, текущий статус читается из БД)
            new_state: Новый статус

        Raises:
            ObjectNotFoundError: Если позиция не найдена
            IllegalStateTransitionError: Если переход недопустим
        """
        if position is None:
            raise ValueError("position не указана")
        new_state = OrderPositionState(new_state)

        async with self.position_repo.transaction():
            target = await self._get_target(position.id)
            current_state = target.state

            self.state_machine.verify_state_change(target, current_state, new_state)

            target.state = new_state
            await self.position_repo.save(target)
            await self.position_repo.add_history(
                target.id, current_state, new_state, target.drink_state, target.drink_state
            )
            await self.reconciler.reconcile(target.order_id, new_state)

        logger.info(
            f"Позиция {describe_position(target)}: "
            f"{current_state.value} → {new_state.value}"
        )

    async def mark_order_position_drink_as(
        self,
        position: OrderPositionSchema,
        new_state: OrderPositionState,
        new_drink_state: ProductOrderState,
    ) -> None:
        """
        Одновременная смена статуса позиции и напитка

        Допустимы только четыре комбинации (см. OrderPositionStateMachine.verify_drink_mark).

        Args:
            position: Позиция (берётся только id)
            new_state: Новый статус позиции
            new_drink_state: Новый статус напитка

        Raises:
            ObjectNotFoundError: Если позиция не найдена
            IllegalStateTransitionError: Если комбинация недопустима
        """
        if position is None:
            raise ValueError("position не указана")
        new_state = OrderPositionState(new_state)
        new_drink_state = ProductOrderState(new_drink_state)

        async with self.position_repo.transaction():
            target = await self._get_target(position.id)
            current_state = target.state
            current_drink_state = target.drink_state

            self.state_machine.verify_drink_mark(target, current_state, new_state, new_drink_state)

            target.state = new_state
            target.drink_state = new_drink_state
            await self.position_repo.save(target)
            await self.position_repo.add_history(
                target.id, current_state, new_state, current_drink_state, new_drink_state
            )
            await self.reconciler.reconcile(target.order_id, new_state)

        logger.info(
            f"Позиция {describe_position(target)}: {current_state.value} → {new_state.value}, "
            f"напиток → {new_drink_state.value}"
        )

    async def find_order_position(self, position_id: int) -> OrderPositionSchema | None:
        """Получение позиции по ID"""
        position = await self.position_repo.find(position_id)
        return OrderPositionSchema.from_model(position) if position else None

    async def find_open_order_positions(self, order_id: int) -> list[OrderPositionSchema]:
        """Открытые позиции заказа"""
        positions = await self.position_repo.find_open_by_order_id(order_id)
        return [OrderPositionSchema.from_model(p) for p in positions]

    async def find_order_positions_by_order(self, order_id: int) -> list[OrderPositionSchema]:
        """Все позиции заказа"""
        positions = await self.position_repo.find_by_order_id(order_id)
        return [OrderPositionSchema.from_model(p) for p in positions]

    async def get_position_history(self, position_id: int) -> list[PositionStateHistory]:
        """История статусов позиции"""
        return await self.position_repo.get_history(position_id)

    async def get_available_transitions(self, position_id: int) -> list[OrderPositionState]:
        """
        Статусы, в которые позицию можно перевести через mark_order_position_as

        Raises:
            ObjectNotFoundError: Если позиция не найдена
        """
        target = await self._get_target(position_id)
        return self.state_machine.get_available_transitions(target.state)

    async def _get_target(self, position_id: int | None) -> OrderPosition:
        position = await self.position_repo.find(position_id) if position_id else None
        if position is None:
            raise ObjectNotFoundError("OrderPosition", position_id)
        return position
