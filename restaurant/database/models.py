"""
Модели данных
"""
from dataclasses import dataclass
from datetime import datetime

from restaurant.core.constants import OrderPositionState, OrderState, ProductOrderState


@dataclass
class Offer:
    """Модель предложения из меню"""
    id: int | None = None
    name: str = ""
    description: str | None = None
    price: float = 0.0

    def get_display_name(self) -> str:
        """Название для позиции заказа: описание, если есть, иначе имя"""
        return self.description or self.name


@dataclass
class Order:
    """Модель заказа"""
    id: int | None = None
    table_id: int | None = None
    state: OrderState = OrderState.OPEN
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_closed(self) -> bool:
        return self.state == OrderState.CLOSED


@dataclass
class OrderPosition:
    """Модель позиции заказа"""
    id: int | None = None
    order_id: int | None = None
    offer_id: int | None = None
    offer_name: str | None = None  # Снимок на момент создания, не синхронизируется с меню
    price: float | None = None
    comment: str | None = None
    state: OrderPositionState = OrderPositionState.ORDERED
    drink_state: ProductOrderState | None = ProductOrderState.ORDERED
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_open(self) -> bool:
        """
        Проверка, что позиция ещё не оплачена и не отменена

        Returns:
            True если позиция открыта
        """
        return self.state in OrderPositionState.open_states()


@dataclass
class PositionStateHistory:
    """Запись истории изменения статусов позиции"""
    id: int | None = None
    position_id: int = 0
    old_state: OrderPositionState | None = None
    new_state: OrderPositionState = OrderPositionState.ORDERED
    old_drink_state: ProductOrderState | None = None
    new_drink_state: ProductOrderState | None = None
    changed_at: datetime | None = None
