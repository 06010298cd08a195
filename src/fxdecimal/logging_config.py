"""
Logging configuration для fxdecimal.

Библиотека пишет только в логгеры ``fxdecimal.*`` и по умолчанию молчит
(NullHandler на корневом логгере пакета). Приложение, встраивающее
библиотеку, может включить вывод одной функцией:

    from fxdecimal.logging_config import setup_logging
    setup_logging(level="DEBUG", fmt="json")

Форматы:
  - human — однострочный читаемый вывод
  - json  — newline-delimited JSON для агрегаторов логов
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Final, TextIO

LOGGER_NAME: Final[str] = "fxdecimal"


class _JSONFormatter(logging.Formatter):
    """Каждая запись — один JSON-объект."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_obj["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_obj, default=str)


class _HumanFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        return f"{ts} [{record.levelname:<7}] {record.name}: {record.getMessage()}"


def setup_logging(
    level: str = "INFO",
    fmt: str = "human",
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Настройка логгера пакета fxdecimal.

    Корневой логгер приложения не трогается.

    Args:
        level: DEBUG, INFO, WARNING, ERROR или CRITICAL
        fmt: "human" или "json"
        stream: Поток вывода (default: sys.stderr)

    Returns:
        Настроенный логгер пакета

    Raises:
        ValueError: Неизвестный формат
    """
    if fmt not in ("human", "json"):
        raise ValueError(f"fmt must be 'human' or 'json', got {fmt!r}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Повторный вызов не дублирует handlers
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(_JSONFormatter() if fmt == "json" else _HumanFormatter())
    logger.addHandler(handler)
    return logger
