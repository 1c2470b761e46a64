"""Тесты для Pydantic схем"""
import pytest
from pydantic import ValidationError

from restaurant.core.constants import OrderPositionState, OrderState, ProductOrderState
from restaurant.database.models import Offer, Order, OrderPosition
from restaurant.schemas import OfferSchema, OrderPositionSchema, OrderSchema


class TestOrderPositionSchema:
    """Тесты валидации позиции заказа"""

    def test_defaults(self):
        """Новая позиция без id, в статусе ORDERED"""
        position = OrderPositionSchema(order_id=9, offer_id=5)
        assert position.id is None
        assert position.state == OrderPositionState.ORDERED
        assert position.drink_state == ProductOrderState.ORDERED

    def test_states_from_strings(self):
        position = OrderPositionSchema(order_id=9, offer_id=5, state="PAYED", drink_state="DELIVERED")
        assert position.state is OrderPositionState.PAYED
        assert position.drink_state is ProductOrderState.DELIVERED

    def test_unknown_state(self):
        with pytest.raises(ValidationError):
            OrderPositionSchema(order_id=9, offer_id=5, state="SERVED")

    def test_drink_state_not_allowed_values(self):
        """Напиток не может быть оплачен"""
        with pytest.raises(ValidationError):
            OrderPositionSchema(order_id=9, offer_id=5, drink_state="PAYED")

    def test_empty_drink_state_means_no_drink(self):
        position = OrderPositionSchema(order_id=9, offer_id=5, drink_state="")
        assert position.drink_state is None

    def test_comment_kept_verbatim(self):
        position = OrderPositionSchema(order_id=9, offer_id=5, comment="  без сахара ")
        assert position.comment == "  без сахара "

    def test_comment_too_long(self):
        with pytest.raises(ValidationError):
            OrderPositionSchema(order_id=9, offer_id=5, comment="x" * 1001)

    def test_negative_price(self):
        with pytest.raises(ValidationError):
            OrderPositionSchema(order_id=9, offer_id=5, price=-1)

    def test_order_id_required(self):
        with pytest.raises(ValidationError):
            OrderPositionSchema(offer_id=5)

    def test_model_mapping(self):
        """Схема и модель хранилища переводятся друг в друга без потерь"""
        model = OrderPosition(
            id=3,
            order_id=9,
            offer_id=5,
            offer_name="Cola",
            price=2.5,
            comment="со льдом",
            state=OrderPositionState.DELIVERED,
            drink_state=ProductOrderState.DELIVERED,
        )

        schema = OrderPositionSchema.from_model(model)
        assert schema.offer_name == "Cola"
        assert schema.state == OrderPositionState.DELIVERED
        assert schema.to_model() == model


class TestOrderSchema:
    """Тесты для схемы заказа"""

    def test_defaults(self):
        order = OrderSchema()
        assert order.id is None
        assert order.state == OrderState.OPEN

    def test_mapping(self):
        order = OrderSchema.from_model(Order(id=9, table_id=2, state=OrderState.CLOSED))
        assert order.state == OrderState.CLOSED
        assert order.to_model() == Order(id=9, table_id=2, state=OrderState.CLOSED)


class TestOfferSchema:
    """Тесты для схемы предложения"""

    def test_from_model(self):
        offer = OfferSchema.from_model(Offer(id=5, name="cola", description="Cola", price=2.5))
        assert offer.id == 5
        assert offer.price == 2.5

    def test_negative_price(self):
        with pytest.raises(ValidationError):
            OfferSchema(id=5, price=-2)
