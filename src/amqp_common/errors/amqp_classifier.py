"""
AMQP error shape detection and classification.

AMQP errors reach calling code in several representations: plain
condition/description records (e.g. decoded from JSON), encoded error frames
whose fields sit in a ``value`` list, and exception classes raised by client
libraries. This module recognises them by shape rather than by class identity
and maps their conditions onto the typed error hierarchy.
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from amqp_common.errors.exceptions import (
    AmqpCommonError,
    AmqpProtocolError,
    AuthError,
    InvalidArgumentError,
    PermanentError,
    ThrottlingError,
    TransientError,
    wrap_exception,
)
from amqp_common.types import AmqpErrorShape, ErrorCategory

logger = logging.getLogger(__name__)

# Values that can never carry error fields
_SCALAR_TYPES = (str, bytes, bytearray, int, float, complex, bool)

# AMQP 1.0 (and Azure broker extension) error conditions
AMQP_CONDITION_MAPPINGS = {
    "transient": [
        "amqp:internal-error",
        "amqp:connection:forced",
        "amqp:connection:framing-error",
        "amqp:connection:redirect",
        "amqp:link:detach-forced",
        "amqp:link:redirect",
        "amqp:link:stolen",
        "com.microsoft:timeout",
    ],
    "auth": [
        "amqp:unauthorized-access",
    ],
    "permanent": [
        "amqp:not-found",
        "amqp:decode-error",
        "amqp:not-allowed",
        "amqp:invalid-field",
        "amqp:not-implemented",
        "amqp:resource-locked",
        "amqp:precondition-failed",
        "amqp:resource-deleted",
        "amqp:illegal-state",
        "amqp:frame-size-too-small",
        "amqp:link:message-size-exceeded",
        "amqp:session:window-violation",
        "amqp:session:errant-link",
        "amqp:session:handle-in-use",
        "amqp:session:unattached-handle",
        "com.microsoft:argument-error",
        "com.microsoft:entity-disabled",
        "com.microsoft:message-lock-lost",
        "com.microsoft:session-lock-lost",
    ],
    "throttling": [
        "amqp:resource-limit-exceeded",
        "amqp:link:transfer-limit-exceeded",
        "com.microsoft:server-busy",
    ],
}


def _get_field(candidate: Any, name: str) -> Any:
    """Read a field from a mapping by key or from any other object by attribute."""
    if isinstance(candidate, Mapping):
        return candidate.get(name)
    return getattr(candidate, name, None)


def _symbol_text(value: Any) -> str | None:
    """Return the text of an AMQP symbol given as str, bytes or Enum member."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, str) and value:
        return value
    return None


def _is_condition_description(candidate: Any) -> bool:
    condition = _get_field(candidate, "condition")
    description = _get_field(candidate, "description")
    return (
        isinstance(condition, str)
        and bool(condition)
        and isinstance(description, str)
        and bool(description)
    )


def _is_value_array(candidate: Any) -> bool:
    value = _get_field(candidate, "value")
    return isinstance(value, (list, tuple))


def _is_native_error(candidate: Any) -> bool:
    # Client library errors expose condition as a symbol and always define
    # description, even when the peer sent none.
    if not isinstance(candidate, BaseException):
        return False
    if not hasattr(candidate, "description"):
        return False
    return _symbol_text(getattr(candidate, "condition", None)) is not None


def _require_object(candidate: Any) -> None:
    # Functions and classes are not error objects, but exception instances
    # stay eligible even if they define __call__.
    is_callable = callable(candidate) and not isinstance(candidate, BaseException)
    if candidate is None or isinstance(candidate, _SCALAR_TYPES) or is_callable:
        raise InvalidArgumentError(
            "err is a required parameter and must be an object, "
            f"got {type(candidate).__name__}",
            argument="err",
        )


def get_amqp_error_shape(candidate: Any) -> AmqpErrorShape | None:
    """
    Determine which AMQP error shape a value matches.

    Args:
        candidate: Any non-null object (mapping, exception, plain object)

    Returns:
        The first matching AmqpErrorShape, or None if the value is not an AMQP error

    Raises:
        InvalidArgumentError: If candidate is None or a scalar value
    """
    _require_object(candidate)

    if _is_condition_description(candidate):
        return AmqpErrorShape.CONDITION_DESCRIPTION
    if _is_value_array(candidate):
        return AmqpErrorShape.VALUE_ARRAY
    if _is_native_error(candidate):
        return AmqpErrorShape.NATIVE_ERROR
    return None


def is_amqp_error(candidate: Any) -> bool:
    """
    Determine whether the given value looks like an AMQP error.

    A value that is well-formed but matches no known shape is not an error
    here: the result is simply False.

    Raises:
        InvalidArgumentError: If candidate is None or a scalar value
    """
    return get_amqp_error_shape(candidate) is not None


def classify_amqp_condition(condition: Any) -> str | None:
    """
    Classify an AMQP error condition.

    Args:
        condition: Condition symbol as str, bytes or Enum member

    Returns:
        Error category: "transient", "auth", "permanent", "throttling", or None
    """
    text = _symbol_text(condition)
    if text is None:
        return None
    for category, conditions in AMQP_CONDITION_MAPPINGS.items():
        if text in conditions:
            return category
    return None


def _extract_error_fields(candidate: Any, shape: AmqpErrorShape) -> tuple[str | None, str | None, dict]:
    """Pull condition, description and info out of a recognised error."""
    if shape is AmqpErrorShape.VALUE_ARRAY:
        fields = list(_get_field(candidate, "value"))
        condition = _symbol_text(fields[0]) if fields else None
        description = fields[1] if len(fields) > 1 and isinstance(fields[1], str) else None
        info = fields[2] if len(fields) > 2 and isinstance(fields[2], Mapping) else {}
        return condition, description, dict(info)

    condition = _symbol_text(_get_field(candidate, "condition"))
    description = _get_field(candidate, "description")
    if not isinstance(description, str):
        description = None
    info = _get_field(candidate, "info")
    return condition, description, dict(info) if isinstance(info, Mapping) else {}


class AmqpErrorClassifier:
    """
    Centralized classification for AMQP errors.

    Maps any recognised AMQP error representation to the AmqpCommonError
    hierarchy based on its condition.
    """

    @staticmethod
    def classify_amqp_error(error: Any, context: dict | None = None) -> AmqpCommonError:
        """
        Classify an AMQP error into appropriate exception type.

        Args:
            error: Exception or error-like object
            context: Additional context (merged with default {"service": "amqp"})

        Returns:
            Classified AmqpCommonError subclass

        Raises:
            InvalidArgumentError: If error is None or a scalar value
        """
        # If already classified, preserve it
        if isinstance(error, AmqpCommonError):
            return error

        ctx = {"service": "amqp"}
        if context:
            ctx.update(context)

        shape = get_amqp_error_shape(error)
        if shape is None:
            if isinstance(error, BaseException):
                return wrap_exception(error, context=ctx)
            return AmqpCommonError(
                f"Unrecognized AMQP error object: {error!r}", context=ctx
            )

        condition, description, info = _extract_error_fields(error, shape)
        ctx["error_shape"] = shape.value
        if condition:
            ctx["condition"] = condition
        if info:
            ctx["info"] = info

        cause = error if isinstance(error, BaseException) else None
        detail = description or condition or "no description"
        category = classify_amqp_condition(condition)

        logger.debug(
            "Classified AMQP error",
            extra={"condition": condition, "error_shape": shape.value, "error_category": category},
        )

        if category == "auth":
            return AuthError(f"AMQP authorization failed: {detail}", cause=cause, context=ctx)

        if category == "throttling":
            retry_after = info.get("retry-after") if info else None
            return ThrottlingError(
                f"AMQP broker throttled: {detail}",
                retry_after=float(retry_after) if isinstance(retry_after, (int, float)) else None,
                cause=cause,
                context=ctx,
            )

        if category == "permanent":
            return PermanentError(f"AMQP permanent error: {detail}", cause=cause, context=ctx)

        if category == "transient":
            return TransientError(f"AMQP transient error: {detail}", cause=cause, context=ctx)

        return AmqpProtocolError(
            f"AMQP error: {detail}",
            condition=condition,
            description=description,
            info=info,
            cause=cause,
            context=ctx,
        )

    def classify_error(self, error: Any) -> ErrorCategory:
        """Classify an AMQP error into an ErrorCategory."""
        return self.classify_amqp_error(error).category

    def is_transient(self, error: Any) -> bool:
        """Check if an AMQP error may succeed when attempted again."""
        return self.classify_error(error) == ErrorCategory.TRANSIENT
