"""
Конфигурация приложения из переменных окружения
"""

import logging
import os

from dotenv import load_dotenv


load_dotenv()

MAX_COMMENT_LENGTH = 1000


def _env_flag(name: str, default: str = "") -> bool:
    """Чтение булевого флага из окружения"""
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Настройки приложения"""

    DATABASE_PATH: str = os.getenv("DATABASE_PATH", "restaurant.db")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOGS_DIR: str = os.getenv("LOGS_DIR", "logs")
    LOG_TO_FILE: bool = _env_flag("LOG_TO_FILE")

    @classmethod
    def validate(cls):
        """
        Проверка конфигурации

        Raises:
            ValueError: Если настройки некорректны
        """
        if not cls.DATABASE_PATH:
            raise ValueError("DATABASE_PATH не установлен")

        if not isinstance(logging.getLevelName(cls.LOG_LEVEL.upper()), int):
            raise ValueError(f"Неизвестный уровень логирования: {cls.LOG_LEVEL}")
