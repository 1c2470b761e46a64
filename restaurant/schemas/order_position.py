"""Pydantic схемы для передачи позиций заказа, заказов и предложений"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from restaurant.core.config import MAX_COMMENT_LENGTH
from restaurant.core.constants import OrderPositionState, OrderState, ProductOrderState
from restaurant.database.models import Offer, Order, OrderPosition


class OfferSchema(BaseModel):
    """Схема предложения меню"""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = Field(None, gt=0, description="ID предложения")
    name: str = Field("", max_length=255, description="Название")
    description: str | None = Field(None, max_length=1000, description="Описание")
    price: float = Field(0.0, ge=0, description="Цена")

    @classmethod
    def from_model(cls, offer: Offer) -> "OfferSchema":
        return cls.model_validate(offer)


class OrderSchema(BaseModel):
    """Схема заказа"""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = Field(None, gt=0, description="ID заказа (None для нового)")
    table_id: int | None = Field(None, gt=0, description="ID стола")
    state: OrderState = Field(OrderState.OPEN, description="Статус заказа")

    @classmethod
    def from_model(cls, order: Order) -> "OrderSchema":
        return cls.model_validate(order)

    def to_model(self) -> Order:
        return Order(id=self.id, table_id=self.table_id, state=self.state)


class OrderPositionSchema(BaseModel):
    """Схема позиции заказа с валидацией"""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = Field(None, gt=0, description="ID позиции (None для новой)")
    order_id: int = Field(..., gt=0, description="ID заказа")
    offer_id: int = Field(..., gt=0, description="ID предложения")
    offer_name: str | None = Field(None, max_length=1000, description="Название на момент заказа")
    price: float | None = Field(None, ge=0, description="Цена на момент заказа")
    comment: str | None = Field(
        None, max_length=MAX_COMMENT_LENGTH, description="Комментарий гостя"
    )
    state: OrderPositionState = Field(OrderPositionState.ORDERED, description="Статус позиции")
    drink_state: ProductOrderState | None = Field(
        ProductOrderState.ORDERED, description="Статус напитка (None если напитка нет)"
    )

    @field_validator("drink_state", mode="before")
    @classmethod
    def validate_drink_state(cls, v):
        """Пустая строка из формы означает, что напитка нет"""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def from_model(cls, position: OrderPosition) -> "OrderPositionSchema":
        return cls.model_validate(position)

    def to_model(self) -> OrderPosition:
        """Преобразование в модель хранилища"""
        return OrderPosition(
            id=self.id,
            order_id=self.order_id,
            offer_id=self.offer_id,
            offer_name=self.offer_name,
            price=self.price,
            comment=self.comment,
            state=self.state,
            drink_state=self.drink_state,
        )
