"""
Factory для создания сервисов и репозиториев
"""

import logging

import aiosqlite

from restaurant.database.transaction import TransactionGuard
from restaurant.domain.order_position_state_machine import OrderPositionStateMachine
from restaurant.repositories import OfferRepository, OrderPositionRepository, OrderRepository
from restaurant.services.order_closure import OrderClosureReconciler
from restaurant.services.order_position_service import OrderPositionService


logger = logging.getLogger(__name__)


class ServiceFactory:
    """
    Factory для создания сервисов с инжекцией зависимостей
    """

    def __init__(self, db_connection: aiosqlite.Connection, guard: TransactionGuard | None = None):
        """
        Инициализация фабрики

        Args:
            db_connection: Подключение к базе данных
            guard: Очередь транзакций соединения (создаётся, если не передана)
        """
        self.db_connection = db_connection
        self.guard = guard or TransactionGuard(db_connection)
        self._offer_repo = None
        self._order_repo = None
        self._position_repo = None
        self._state_machine = None
        self._reconciler = None
        self._order_position_service = None

    @property
    def offer_repository(self) -> OfferRepository:
        """Ленивая инициализация OfferRepository"""
        if self._offer_repo is None:
            self._offer_repo = OfferRepository(self.db_connection, self.guard)
        return self._offer_repo

    @property
    def order_repository(self) -> OrderRepository:
        """Ленивая инициализация OrderRepository"""
        if self._order_repo is None:
            self._order_repo = OrderRepository(self.db_connection, self.guard)
        return self._order_repo

    @property
    def order_position_repository(self) -> OrderPositionRepository:
        """Ленивая инициализация OrderPositionRepository"""
        if self._position_repo is None:
            self._position_repo = OrderPositionRepository(self.db_connection, self.guard)
        return self._position_repo

    @property
    def state_machine(self) -> OrderPositionStateMachine:
        """Ленивая инициализация OrderPositionStateMachine"""
        if self._state_machine is None:
            self._state_machine = OrderPositionStateMachine()
        return self._state_machine

    @property
    def order_closure_reconciler(self) -> OrderClosureReconciler:
        """Ленивая инициализация OrderClosureReconciler"""
        if self._reconciler is None:
            self._reconciler = OrderClosureReconciler(
                position_repo=self.order_position_repository,
                order_repo=self.order_repository,
            )
        return self._reconciler

    @property
    def order_position_service(self) -> OrderPositionService:
        """Получение OrderPosition Service"""
        if self._order_position_service is None:
            self._order_position_service = OrderPositionService(
                position_repo=self.order_position_repository,
                order_repo=self.order_repository,
                offer_repo=self.offer_repository,
                state_machine=self.state_machine,
                reconciler=self.order_closure_reconciler,
            )
        return self._order_position_service

    def reset(self):
        """Сброс кэшированных сервисов (для тестирования)"""
        self._offer_repo = None
        self._order_repo = None
        self._position_repo = None
        self._state_machine = None
        self._reconciler = None
        self._order_position_service = None
        logger.debug("ServiceFactory: сервисы сброшены")
