import logging
import os
from collections import OrderedDict
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import structlog


def setup_logger(
    name: str = "helpdesk",
    *,
    level: str | int = logging.INFO,
    log_dir: Optional[str] = None,
    json: bool = True,
    propagate: bool = False,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
) -> structlog.stdlib.BoundLogger:
    """Configure structlog on top of a stdlib logger and return a bound logger.

    A stream handler is always attached. When `log_dir` is given, a rotating file
    handler writing `{log_dir}/{name}.log` is added as well.

    Args:
        name: Logger name, defaults to "helpdesk".
        level: Logger level, either a logging constant or its name ("DEBUG", "INFO", ...).
        log_dir: Optional directory for a rotating log file.
        json: Render JSON lines if True, otherwise use the structlog console renderer.
        propagate: Whether the stdlib logger propagates to ancestor loggers.
        max_bytes: Maximum size in bytes before rotating the log file.
        backup_count: Number of rotated files to keep.

    Returns:
        structlog.stdlib.BoundLogger: Configured logger instance.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    stdlib_logger = logging.getLogger(name)
    stdlib_logger.handlers.clear()
    stdlib_logger.setLevel(level)
    stdlib_logger.propagate = propagate

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter("%(message)s"))
    stdlib_logger.addHandler(stream_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=str(Path(log_dir) / f"{name}.log"), maxBytes=max_bytes, backupCount=backup_count
        )
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        stdlib_logger.addHandler(file_handler)

    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _enforce_key_order_processor(["timestamp", "event", "request_id", "duration_ms", "level", "logger"]),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger(name)


def _enforce_key_order_processor(key_order: list[str]):
    def _processor(_logger, _method_name, event_dict):
        ordered = OrderedDict()
        for key in key_order:
            if key in event_dict:
                ordered[key] = event_dict.pop(key)
        ordered.update(event_dict)
        return ordered

    return _processor
