"""
amqp_common: shared building blocks for AMQP client layers.

Modules:
    connection_string - Parse, rebuild and validate key/value connection strings
    errors            - AMQP error shape detection, classification, exception hierarchy
    constants         - AMQP response status codes, message property/header names
    utils             - Async delay, container IDs, JSON serialization
    logging           - Structured JSON logging with credential redaction
    config            - YAML configuration for connection settings

Design Principles:
    - Parsing and classification are pure and never touch the network
    - Errors are recognised by shape, not by class identity
"""

from .connection_string import (
    ConnectionStringParseOptions,
    build_connection_string,
    parse_connection_string,
)
from .constants import MESSAGE_HEADER, MESSAGE_PROPERTIES, AmqpResponseStatusCode
from .errors import InvalidArgumentError, is_amqp_error
from .types import AmqpErrorShape, ErrorCategory, ErrorClassifier
from .utils import delay

__version__ = "0.1.0"

__all__ = [
    "AmqpErrorShape",
    "AmqpResponseStatusCode",
    "ConnectionStringParseOptions",
    "ErrorCategory",
    "ErrorClassifier",
    "InvalidArgumentError",
    "MESSAGE_HEADER",
    "MESSAGE_PROPERTIES",
    "build_connection_string",
    "delay",
    "is_amqp_error",
    "parse_connection_string",
]
