import logging
import os
from collections import OrderedDict
from logging import Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import structlog

from gatehouse.core.config import CoreSettings
from gatehouse.core.utils import ifnone


def default_formatter(fmt: Optional[str] = None) -> logging.Formatter:
    """Returns a logging formatter with a default format if none is specified."""
    default_fmt = "[%(asctime)s] %(levelname)s: %(name)s: %(message)s"
    return logging.Formatter(fmt or default_fmt)


def setup_logger(
    name: str = "gatehouse",
    *,
    log_dir: Optional[Path] = None,
    logger_level: int = logging.DEBUG,
    stream_level: int = logging.ERROR,
    add_stream_handler: bool = True,
    file_level: int = logging.DEBUG,
    file_mode: str = "a",
    add_file_handler: bool = True,
    propagate: bool = False,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
    use_structlog: Optional[bool] = None,
    structlog_json: bool = True,
    structlog_bind: Optional[dict] = None,
) -> Logger | structlog.stdlib.BoundLogger:
    """Configure and initialize logging for Gatehouse components.

    Sets up a rotating file handler and a console handler on the given logger. The log file defaults to
    ``~/.cache/gatehouse/logs/{name}.log``; child loggers write under ``modules/``.

    Args:
        name: Logger name, defaults to "gatehouse".
        log_dir: Custom directory for the log file.
        logger_level: Overall logger level.
        stream_level: StreamHandler level (e.g., ERROR).
        add_stream_handler: Whether to add a stream handler.
        file_level: FileHandler level (e.g., DEBUG).
        file_mode: Mode for file handler, default is 'a' (append).
        add_file_handler: Whether to add a file handler.
        propagate: Whether the logger should propagate messages to ancestor loggers.
        max_bytes: Maximum size in bytes before rotating log file.
        backup_count: Number of backup files to retain.
        use_structlog: If True, configure and return a structlog BoundLogger. Defaults to the core settings.
        structlog_json: If True, render JSON; otherwise use the console renderer.
        structlog_bind: Fields bound to the returned structlog logger.

    Returns:
        Logger | structlog.stdlib.BoundLogger: Configured logger instance.
    """
    settings = CoreSettings()
    use_structlog = ifnone(use_structlog, settings.LOGGER.USE_STRUCTLOG)

    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.setLevel(logger_level)
    logger.propagate = propagate

    child_log_path = f"{name}.log" if name == "gatehouse" else os.path.join("modules", f"{name}.log")
    base_dir = log_dir if log_dir is not None else settings.logger_dir(structured=use_structlog)
    log_file_path = os.path.join(base_dir, child_log_path)

    if use_structlog:
        formatter = logging.Formatter("%(message)s")
    else:
        formatter = default_formatter()

    if add_stream_handler:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(stream_level)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if add_file_handler:
        os.makedirs(Path(log_file_path).parent, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=str(log_file_path), maxBytes=max_bytes, backupCount=backup_count, mode=file_mode
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not use_structlog:
        return logger

    renderer = structlog.processors.JSONRenderer() if structlog_json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _enforce_key_order_processor(["timestamp", "event", "level", "logger"]),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    bound_logger = structlog.get_logger(name)
    if structlog_bind:
        bound_logger = bound_logger.bind(**structlog_bind)
    return bound_logger


def _enforce_key_order_processor(key_order: list[str]):
    def _processor(_logger, _method_name, event_dict):
        ordered = OrderedDict()
        for key in key_order:
            if key in event_dict:
                ordered[key] = event_dict.pop(key)
        for k in sorted(event_dict.keys()):
            ordered[k] = event_dict[k]
        return ordered

    return _processor


def get_logger(name: str | None = "gatehouse", **kwargs) -> Logger | structlog.stdlib.BoundLogger:
    """Create or retrieve a named logger under the ``gatehouse`` namespace.

    Child loggers propagate to the package logger by default, so only the package logger writes to the console.

    Example:
        .. code-block:: python

            from gatehouse.core.logging.logger import get_logger

            logger = get_logger("login.form")
            logger.info("Form mounted.")
    """
    if not name:
        name = "gatehouse"
    full_name = name if name.startswith("gatehouse") else f"gatehouse.{name}"
    kwargs.setdefault("propagate", True)
    if kwargs["propagate"]:
        kwargs.setdefault("add_stream_handler", False)
    return setup_logger(full_name, **kwargs)
