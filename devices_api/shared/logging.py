"""
Logging Configuration - Shared Layer

structlog on top of the standard library: every record, whether it comes
from a structlog logger or from a third-party stdlib logger (uvicorn,
pymongo), is rendered by the same ProcessorFormatter.
"""

import logging
import os
import sys
from typing import Any, Dict, List, Optional

import structlog
from structlog.types import Processor

from devices_api.shared.consts import EnumEnvironment, EnumLogFormat


def _get_log_config_from_env() -> Dict[str, Optional[str]]:
    """Read bootstrap logging options before the settings system is loaded."""
    return {
        "level": os.environ.get("LOG_LEVEL", "INFO"),
        "file_path": os.environ.get("LOG_FILE_PATH"),
        "format": os.environ.get("LOG_FORMAT"),
        "environment": os.environ.get("ENVIRONMENT", "development"),
    }


def _shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def configure_logging(
    level: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """
    Configure stdlib logging and structlog.

    Called once at import time of the application module with environment
    defaults, then again once settings are available.

    Args:
        level: Log level name, falls back to ``LOG_LEVEL``
        file_path: Optional log file, falls back to ``LOG_FILE_PATH``
        environment: Application environment; production renders JSON
        log_format: ``json`` or ``console``, overrides the environment default
    """
    env_config = _get_log_config_from_env()

    log_level = level or env_config["level"] or "INFO"
    log_file = file_path or env_config["file_path"]
    env_value = (environment or env_config["environment"] or "development").lower()

    format_value = (log_format or env_config["format"] or "").lower()
    if not format_value:
        format_value = (
            EnumLogFormat.JSON.value
            if env_value == EnumEnvironment.PRODUCTION.value
            else EnumLogFormat.CONSOLE.value
        )

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    renderer: Processor
    if format_value == EnumLogFormat.JSON.value:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
        ],
    )
    for handler in handlers:
        handler.setFormatter(formatter)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    get_logger(__name__).debug(
        "logging.configured",
        level=log_level,
        environment=env_value,
        format=format_value,
        file_path=log_file,
    )


def update_logging_from_settings(settings: Any) -> None:
    """
    Reconfigure logging from the application settings object.

    Args:
        settings: AppSettings-like object with ``logging`` and ``environment``
    """
    log_level = getattr(settings.logging.level, "value", settings.logging.level)
    environment = getattr(settings.environment, "value", settings.environment)
    log_format = getattr(settings.logging.format, "value", settings.logging.format)

    configure_logging(
        level=log_level,
        file_path=settings.logging.file_path,
        environment=environment,
        log_format=log_format,
    )


def bind_request_context(**values: Any) -> None:
    """Attach key/value pairs to every log line emitted by the current request."""
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the project."""
    return structlog.get_logger(name)
