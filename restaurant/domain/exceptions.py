"""
Исключения бизнес-логики позиций заказа
"""

from typing import Any


def _describe(entity: Any) -> str:
    """Короткое описание сущности для сообщения об ошибке"""
    entity_id = getattr(entity, "id", None)
    name = type(entity).__name__
    if name.endswith("Schema"):
        name = name[: -len("Schema")]
    return f"{name} #{entity_id}" if entity_id is not None else f"{name} (new)"


def _value(state: Any) -> Any:
    return getattr(state, "value", state)


class WorkflowError(Exception):
    """Базовое исключение бизнес-логики"""


class ObjectNotFoundError(WorkflowError):
    """
    Исключение при отсутствии связанной сущности (предложение или позиция)
    """

    def __init__(self, entity_type: str, entity_id: Any):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} #{entity_id} not found")


class IllegalFieldChangeError(WorkflowError):
    """
    Исключение при попытке изменить неизменяемое поле (offer_id, order_id)
    """

    def __init__(self, entity: Any, field_name: str):
        self.entity = entity
        self.field_name = field_name
        super().__init__(f"Поле '{field_name}' у {_describe(entity)} нельзя изменить")


class IllegalStateTransitionError(WorkflowError):
    """Исключение при попытке недопустимого перехода статуса"""

    def __init__(self, entity: Any, current_state: Any, requested_state: Any):
        self.entity = entity
        self.current_state = current_state
        self.requested_state = requested_state
        super().__init__(
            f"Недопустимый переход {_describe(entity)} "
            f"из '{_value(current_state)}' в '{_value(requested_state)}'"
        )
