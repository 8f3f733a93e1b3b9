"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides shared utilities, constants, and enums that are used
across multiple layers of the application (environment names, log levels,
logging bootstrap).

It must not depend on Infrastructure or Frameworks.
"""

from .consts import REQUEST_ID_HEADER, EnumEnvironment, EnumLogFormat, EnumLogLevel
from .logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

__all__ = [
    "REQUEST_ID_HEADER",
    "EnumEnvironment",
    "EnumLogFormat",
    "EnumLogLevel",
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
