"""
Константы приложения - статусы позиций заказа, напитков и заказов
"""

from enum import Enum


class OrderPositionState(str, Enum):
    """Статусы позиции заказа"""

    ORDERED = "ORDERED"  # Заказана
    PREPARED = "PREPARED"  # Приготовлена
    DELIVERED = "DELIVERED"  # Подана
    PAYED = "PAYED"  # Оплачена
    CANCELLED = "CANCELLED"  # Отменена

    @classmethod
    def all_states(cls) -> list["OrderPositionState"]:
        """Список всех статусов"""
        return list(cls)

    @classmethod
    def terminal_states(cls) -> set["OrderPositionState"]:
        """Статусы, после которых проверяется закрытие заказа"""
        return {cls.CANCELLED, cls.PAYED}

    @classmethod
    def open_states(cls) -> set["OrderPositionState"]:
        """Статусы незакрытой позиции"""
        return {cls.ORDERED, cls.PREPARED, cls.DELIVERED}

    @classmethod
    def get_state_name(cls, state: str) -> str:
        """Получение названия статуса на русском"""
        names = {
            cls.ORDERED: "Заказана",
            cls.PREPARED: "Приготовлена",
            cls.DELIVERED: "Подана",
            cls.PAYED: "Оплачена",
            cls.CANCELLED: "Отменена",
        }
        return names.get(state, getattr(state, "value", state))


class ProductOrderState(str, Enum):
    """Статусы напитка внутри позиции"""

    ORDERED = "ORDERED"
    PREPARED = "PREPARED"
    DELIVERED = "DELIVERED"

    @classmethod
    def all_states(cls) -> list["ProductOrderState"]:
        """Список всех статусов напитка"""
        return list(cls)

    @classmethod
    def get_state_name(cls, state: str) -> str:
        """Получение названия статуса напитка на русском"""
        names = {
            cls.ORDERED: "Заказан",
            cls.PREPARED: "Приготовлен",
            cls.DELIVERED: "Подан",
        }
        return names.get(state, getattr(state, "value", state))


class OrderState(str, Enum):
    """Статусы заказа"""

    OPEN = "OPEN"  # Есть незакрытые позиции
    CLOSED = "CLOSED"  # Все позиции оплачены или отменены

    @classmethod
    def all_states(cls) -> list["OrderState"]:
        """Список всех статусов заказа"""
        return list(cls)

    @classmethod
    def get_state_name(cls, state: str) -> str:
        """Получение названия статуса заказа на русском"""
        names = {
            cls.OPEN: "Открыт",
            cls.CLOSED: "Закрыт",
        }
        return names.get(state, getattr(state, "value", state))
