"""
State Machine для валидации переходов статусов позиции заказа и напитка
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from restaurant.core.constants import OrderPositionState, ProductOrderState
from restaurant.domain.exceptions import IllegalFieldChangeError, IllegalStateTransitionError


logger = logging.getLogger(__name__)

# (новый статус позиции, новый статус напитка) -> допустим ли переход
TransitionRule = Callable[[OrderPositionState, ProductOrderState | None], bool]

S = OrderPositionState
D = ProductOrderState


class OrderPositionStateMachine:
    """
    State Machine для управления жизненным циклом позиции заказа

    Граф переходов (общая таблица):

    ORDERED ⇄ CANCELLED
       ↓
    PREPARED → любой статус (переделка на кухне возвращает в ORDERED)
       ↓
    DELIVERED → DELIVERED, PAYED, CANCELLED
       ↓
    PAYED (ловушка)
    """

    # Допустимые переходы: из какого статуса в какие можно перейти
    TRANSITIONS: dict[OrderPositionState, frozenset[OrderPositionState]] = {
        S.CANCELLED: frozenset({S.CANCELLED, S.ORDERED}),
        S.ORDERED: frozenset({S.ORDERED, S.CANCELLED, S.PREPARED}),
        S.PREPARED: frozenset(S),
        S.DELIVERED: frozenset(S) - {S.PREPARED, S.ORDERED},
        S.PAYED: frozenset({S.PAYED}),
    }

    STATE_RULES: dict[OrderPositionState, TransitionRule] = {
        state: (lambda new, drink, allowed=allowed: new in allowed)
        for state, allowed in TRANSITIONS.items()
    }

    # Проверка напитка опирается на ту же таблицу статусов позиции
    DRINK_RULES: dict[OrderPositionState, TransitionRule] = {
        S.CANCELLED: lambda new, drink: new in {S.CANCELLED, S.ORDERED},
        S.ORDERED: lambda new, drink: (
            new in {S.ORDERED, S.CANCELLED, S.PREPARED} or drink in {D.ORDERED, D.PREPARED}
        ),
        S.PREPARED: lambda new, drink: True,
        S.DELIVERED: lambda new, drink: (
            new not in {S.PREPARED, S.ORDERED} and drink not in {D.PREPARED, D.ORDERED}
        ),
        S.PAYED: lambda new, drink: new == S.PAYED,
    }

    # Комбинированная отметка позиции и напитка: явный список разрешённых пар
    DRINK_MARK_TRANSITIONS: dict[
        OrderPositionState, frozenset[tuple[OrderPositionState, ProductOrderState]]
    ] = {
        S.ORDERED: frozenset({(S.PREPARED, D.ORDERED), (S.CANCELLED, D.DELIVERED)}),
        S.PREPARED: frozenset({(S.DELIVERED, D.DELIVERED), (S.CANCELLED, D.DELIVERED)}),
        S.DELIVERED: frozenset({(S.PAYED, D.DELIVERED), (S.CANCELLED, D.DELIVERED)}),
        S.CANCELLED: frozenset({(S.CANCELLED, D.DELIVERED)}),
        S.PAYED: frozenset(),
    }

    DRINK_MARK_RULES: dict[OrderPositionState, TransitionRule] = {
        state: (lambda new, drink, allowed=allowed: (new, drink) in allowed)
        for state, allowed in DRINK_MARK_TRANSITIONS.items()
    }

    @staticmethod
    def _is_allowed(
        rules: Mapping[OrderPositionState, TransitionRule],
        current_state: OrderPositionState | str,
        new_state: OrderPositionState | str,
        new_drink_state: ProductOrderState | str | None,
    ) -> bool:
        """
        Проверка перехода по набору правил

        Неизвестное значение статуса даёт ValueError ещё при разборе,
        поэтому у каждого статуса всегда есть правило.
        """
        current_state = OrderPositionState(current_state)
        new_state = OrderPositionState(new_state)
        if new_drink_state is not None:
            new_drink_state = ProductOrderState(new_drink_state)
        return rules[current_state](new_state, new_drink_state)

    @classmethod
    def can_transition(
        cls, from_state: OrderPositionState | str, to_state: OrderPositionState | str
    ) -> bool:
        """
        Проверка возможности перехода по общей таблице

        Args:
            from_state: Текущий статус позиции
            to_state: Целевой статус

        Returns:
            True если переход допустим
        """
        return cls._is_allowed(cls.STATE_RULES, from_state, to_state, None)

    @classmethod
    def verify_state_change(
        cls,
        entity: Any,
        current_state: OrderPositionState,
        new_state: OrderPositionState,
    ) -> None:
        """
        Проверка перехода статуса позиции по общей таблице

        Raises:
            IllegalStateTransitionError: Если переход недопустим
        """
        if not cls.can_transition(current_state, new_state):
            raise IllegalStateTransitionError(entity, current_state, new_state)

    @classmethod
    def verify_drink_state_change(
        cls,
        entity: Any,
        current_state: OrderPositionState,
        new_state: OrderPositionState,
        new_drink_state: ProductOrderState | None,
    ) -> None:
        """
        Проверка перехода статуса напитка

        Решение принимается по текущему статусу позиции, а не напитка.
        Если у позиции нет напитка (None), проверка пропускается.

        Raises:
            IllegalStateTransitionError: Если переход недопустим
        """
        if new_drink_state is None:
            return
        if not cls._is_allowed(cls.DRINK_RULES, current_state, new_state, new_drink_state):
            raise IllegalStateTransitionError(entity, current_state, new_drink_state)

    @classmethod
    def verify_drink_mark(
        cls,
        entity: Any,
        current_state: OrderPositionState,
        new_state: OrderPositionState,
        new_drink_state: ProductOrderState,
    ) -> None:
        """
        Проверка комбинированной отметки позиции и напитка

        Разрешены только:
            ORDERED → (PREPARED, ORDERED)
            PREPARED → (DELIVERED, DELIVERED)
            DELIVERED → (PAYED, DELIVERED)
            любой, кроме PAYED → (CANCELLED, DELIVERED)

        Raises:
            IllegalStateTransitionError: Если комбинация недопустима
        """
        if not cls._is_allowed(cls.DRINK_MARK_RULES, current_state, new_state, new_drink_state):
            raise IllegalStateTransitionError(entity, current_state, new_drink_state)

    @classmethod
    def verify_update(cls, current_position: Any, update_position: Any) -> None:
        """
        Проверка обновления сохранённой позиции

        Args:
            current_position: Позиция из хранилища
            update_position: Новая версия позиции

        Raises:
            IllegalFieldChangeError: Если меняется order_id или offer_id
            IllegalStateTransitionError: Если переход статуса недопустим
        """
        if current_position.order_id != update_position.order_id:
            raise IllegalFieldChangeError(update_position, "order_id")
        if current_position.offer_id != update_position.offer_id:
            raise IllegalFieldChangeError(update_position, "offer_id")

        current_state = current_position.state
        new_state = update_position.state

        cls.verify_state_change(update_position, current_state, new_state)
        cls.verify_drink_state_change(
            update_position, current_state, new_state, update_position.drink_state
        )

    @classmethod
    def get_available_transitions(
        cls, from_state: OrderPositionState | str
    ) -> list[OrderPositionState]:
        """
        Получение списка доступных переходов из текущего статуса

        Args:
            from_state: Текущий статус

        Returns:
            Статусы в порядке объявления
        """
        allowed = cls.TRANSITIONS[OrderPositionState(from_state)]
        return [state for state in OrderPositionState if state in allowed]

    @classmethod
    def is_terminal_state(cls, state: OrderPositionState | str) -> bool:
        """Проверка, закрывает ли статус позицию (CANCELLED, PAYED)"""
        return OrderPositionState(state) in OrderPositionState.terminal_states()

    @classmethod
    def get_transition_description(
        cls, from_state: OrderPositionState | str, to_state: OrderPositionState | str
    ) -> str:
        """
        Получение описания перехода на русском

        Args:
            from_state: Начальный статус
            to_state: Конечный статус

        Returns:
            Описание перехода
        """
        descriptions = {
            (S.ORDERED, S.PREPARED): "Позиция приготовлена на кухне",
            (S.ORDERED, S.CANCELLED): "Отмена заказанной позиции",
            (S.PREPARED, S.ORDERED): "Возврат позиции на переделку",
            (S.PREPARED, S.DELIVERED): "Позиция подана гостю",
            (S.PREPARED, S.CANCELLED): "Отмена приготовленной позиции",
            (S.DELIVERED, S.PAYED): "Позиция оплачена",
            (S.DELIVERED, S.CANCELLED): "Отмена поданной позиции",
            (S.CANCELLED, S.ORDERED): "Повторный заказ отменённой позиции",
        }

        key = (OrderPositionState(from_state), OrderPositionState(to_state))
        return descriptions.get(
            key,
            f"Переход из {OrderPositionState.get_state_name(key[0])} "
            f"в {OrderPositionState.get_state_name(key[1])}",
        )
