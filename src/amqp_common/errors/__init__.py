"""
Error classification and exception hierarchy.

Provides:
- AmqpCommonError hierarchy for typed exceptions
- AMQP error shape detection (is_amqp_error, get_amqp_error_shape)
- AMQP condition classification
"""

from amqp_common.errors.amqp_classifier import (
    # Constants
    AMQP_CONDITION_MAPPINGS,
    # Classes
    AmqpErrorClassifier,
    # Functions
    classify_amqp_condition,
    get_amqp_error_shape,
    is_amqp_error,
)
from amqp_common.errors.exceptions import (
    # Base classes
    AmqpCommonError,
    AmqpProtocolError,
    AuthError,
    InvalidArgumentError,
    PermanentError,
    ThrottlingError,
    TransientError,
    # Classification utilities
    classify_exception,
    classify_status_code,
    wrap_exception,
)

__all__ = [
    # Base classes
    "AmqpCommonError",
    "AuthError",
    "TransientError",
    "ThrottlingError",
    "PermanentError",
    "InvalidArgumentError",
    "AmqpProtocolError",
    # Classification utilities
    "classify_exception",
    "classify_status_code",
    "wrap_exception",
    # AMQP classifiers
    "AMQP_CONDITION_MAPPINGS",
    "AmqpErrorClassifier",
    "classify_amqp_condition",
    "get_amqp_error_shape",
    "is_amqp_error",
]
