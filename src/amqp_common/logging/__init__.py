"""
Structured logging module.

Provides JSON logging with credential redaction and context propagation.
"""

from amqp_common.logging.context import (
    clear_log_context,
    get_log_context,
    set_log_context,
)
from amqp_common.logging.formatters import ConsoleFormatter, JSONFormatter
from amqp_common.logging.setup import (
    get_log_file_path,
    get_logger,
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    "get_logger",
    "get_log_file_path",
    # Formatters
    "JSONFormatter",
    "ConsoleFormatter",
    # Context
    "set_log_context",
    "get_log_context",
    "clear_log_context",
]
