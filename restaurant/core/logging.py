"""
Настройка логирования:
- вывод в консоль всегда
- файл logs/restaurant.log с ротацией, если включено и есть права на запись
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from restaurant.core.config import Config


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str | None = None,
    logs_dir: str | None = None,
    log_to_file: bool | None = None,
) -> list[logging.Handler]:
    """
    Настройка root logger

    Args:
        level: Уровень логирования (по умолчанию Config.LOG_LEVEL)
        logs_dir: Директория для файла логов (по умолчанию Config.LOGS_DIR)
        log_to_file: Писать ли в файл (по умолчанию Config.LOG_TO_FILE)

    Returns:
        Список установленных обработчиков
    """
    level = level or Config.LOG_LEVEL
    logs_dir = logs_dir or Config.LOGS_DIR
    if log_to_file is None:
        log_to_file = Config.LOG_TO_FILE

    log_formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)

    handlers: list[logging.Handler] = [console_handler]

    if log_to_file:
        log_file_path = Path(logs_dir) / "restaurant.log"
        try:
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                str(log_file_path),
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setFormatter(log_formatter)
            handlers.insert(0, file_handler)
        except (PermissionError, OSError) as e:
            # Без прав на запись остаемся только с консолью
            sys.stderr.write(f"[logging] WARNING: cannot use file logging at {log_file_path}: {e}\n")

    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    logging.getLogger("restaurant").setLevel(log_level)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    return handlers
