"""Logging configuration for the gold shop backend."""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict


def setup_logging(level: str = "INFO", format_type: str = "standard", debug: bool = False) -> None:
    """
    Configure the root logger.

    - ``format_type="json"`` emits one JSON object per line
    - SQLAlchemy engine logs stay at WARNING unless ``debug`` is set
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("app").setLevel(log_level)

    noisy_level = logging.INFO if debug else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(noisy_level)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)
