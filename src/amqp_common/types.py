"""
Core types and protocols used across modules.

This module provides base types, enums, and protocol definitions that are
shared across the package to keep error handling consistent.
"""

from enum import Enum
from typing import Any, Protocol


class ErrorCategory(Enum):
    """
    Classification of error types for handling decisions.

    Categories:
        TRANSIENT: Temporary failures that may succeed if attempted again
                   (e.g., amqp:connection:forced, 503 responses)
        AUTH: Authentication or authorization failures
              (e.g., amqp:unauthorized-access, 401 responses)
        PERMANENT: Failures that won't succeed on another attempt
                   (e.g., amqp:not-found, invalid arguments)
        UNKNOWN: Unclassified errors
    """

    TRANSIENT = "transient"
    AUTH = "auth"
    PERMANENT = "permanent"
    UNKNOWN = "unknown"


class AmqpErrorShape(Enum):
    """
    Structural patterns an AMQP error object may take.

    CONDITION_DESCRIPTION: carries string ``condition`` and ``description`` fields
    VALUE_ARRAY: carries a ``value`` field holding an encoded field list
    NATIVE_ERROR: an exception raised by an AMQP client library, exposing a
                  symbolic ``condition`` plus a ``description`` attribute
    """

    CONDITION_DESCRIPTION = "condition_description"
    VALUE_ARRAY = "value_array"
    NATIVE_ERROR = "native_error"


class ErrorClassifier(Protocol):
    """
    Protocol for error classification implementations.

    Classifiers map protocol-specific errors onto the standard categories.
    """

    def classify_error(self, error: Any) -> ErrorCategory:
        """
        Classify an error into an error category.

        Args:
            error: Exception or error-like object to classify

        Returns:
            ErrorCategory indicating how to handle this error
        """
        ...

    def is_transient(self, error: Any) -> bool:
        """
        Check if error is transient.

        Args:
            error: Exception or error-like object to check

        Returns:
            True if the operation may succeed when attempted again
        """
        ...


__all__ = [
    "AmqpErrorShape",
    "ErrorCategory",
    "ErrorClassifier",
]
