"""
Pytest fixtures и конфигурация для тестов
"""
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio

from restaurant.core.config import Config
from restaurant.database import Database, Offer, Order
from restaurant.services import OrderPositionService, ServiceFactory


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[Database, None]:
    """
    Фикстура для тестовой базы данных (in-memory)
    """
    database = Database(":memory:")
    await database.connect()
    await database.init_db()
    yield database
    await database.disconnect()


@pytest.fixture
def services(db: Database) -> ServiceFactory:
    """
    Фикстура для фабрики сервисов поверх тестовой БД
    """
    return db.services


@pytest.fixture
def position_service(services: ServiceFactory) -> OrderPositionService:
    """
    Фикстура для сервиса позиций заказа
    """
    return services.order_position_service


@pytest_asyncio.fixture
async def cola(services: ServiceFactory) -> Offer:
    """
    Предложение меню с описанием
    """
    return await services.offer_repository.create(
        name="cola", description="Coca-Cola 0.33", price=2.5
    )


@pytest_asyncio.fixture
async def schnitzel(services: ServiceFactory) -> Offer:
    """
    Предложение меню без описания
    """
    return await services.offer_repository.create(name="Schnitzel", price=12.9)


@pytest_asyncio.fixture
async def open_order(services: ServiceFactory) -> Order:
    """
    Сохранённый открытый заказ
    """
    return await services.order_repository.save(Order(table_id=3))


@pytest.fixture
def mock_config(monkeypatch, tmp_path) -> None:
    """
    Фикстура для замены конфигурации на тестовую
    """
    monkeypatch.setattr(Config, "DATABASE_PATH", ":memory:")
    monkeypatch.setattr(Config, "LOG_LEVEL", "DEBUG")
    monkeypatch.setattr(Config, "LOGS_DIR", str(tmp_path / "logs"))
    monkeypatch.setattr(Config, "LOG_TO_FILE", False)
