"""
Exception hierarchy for amqp_common.

Provides typed exceptions with a category so calling layers can branch on
error kind without inspecting message text.
"""

# Import ErrorCategory from canonical source to avoid duplicate enum issues
from amqp_common.types import ErrorCategory


class AmqpCommonError(Exception):
    """
    Base exception for all amqp_common errors.

    Attributes:
        message: Human-readable error description
        category: Error classification for handling decisions
        cause: Original exception if wrapping
        context: Additional context dict for debugging
    """

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        context: dict | None = None,
    ):
        self.message = message
        self.cause = cause
        self.context = context or {}
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        return self.category in (
            ErrorCategory.TRANSIENT,
            ErrorCategory.UNKNOWN,
        )

    def __str__(self) -> str:
        parts = [self.message]
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)


# =============================================================================
# Authentication Errors
# =============================================================================


class AuthError(AmqpCommonError):
    """Authentication or authorization was refused by the broker."""

    category = ErrorCategory.AUTH


# =============================================================================
# Transient Errors
# =============================================================================


class TransientError(AmqpCommonError):
    """Base class for transient errors."""

    category = ErrorCategory.TRANSIENT


class ThrottlingError(TransientError):
    """Broker is busy or a resource limit was hit - should back off."""

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        cause: BaseException | None = None,
        context: dict | None = None,
    ):
        super().__init__(message, cause, context)
        self.retry_after = retry_after  # Seconds to wait if provided


# =============================================================================
# Permanent Errors
# =============================================================================


class PermanentError(AmqpCommonError):
    """Base class for permanent errors."""

    category = ErrorCategory.PERMANENT


class InvalidArgumentError(PermanentError, ValueError):
    """A required argument is missing or has the wrong shape."""

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        cause: BaseException | None = None,
        context: dict | None = None,
    ):
        context = context or {}
        if argument:
            context.setdefault("argument", argument)
        super().__init__(message, cause, context)
        self.argument = argument


# =============================================================================
# Protocol Errors
# =============================================================================


class AmqpProtocolError(AmqpCommonError):
    """
    AMQP error whose condition has no known category.

    Attributes:
        condition: Symbolic AMQP error condition (e.g. "amqp:internal-error")
        description: Descriptive text supplied by the peer
        info: Map of additional error details
    """

    def __init__(
        self,
        message: str,
        condition: str | None = None,
        description: str | None = None,
        info: dict | None = None,
        cause: BaseException | None = None,
        context: dict | None = None,
    ):
        super().__init__(message, cause, context)
        self.condition = condition
        self.description = description
        self.info = info or {}


# =============================================================================
# Error Classification Utilities
# =============================================================================


def classify_status_code(status_code: int) -> ErrorCategory:
    """Classify an AMQP response status code into error category."""
    if 100 <= status_code < 400:
        return ErrorCategory.UNKNOWN  # Not an error

    if status_code in (401, 407):
        return ErrorCategory.AUTH

    if status_code in (408, 429):
        return ErrorCategory.TRANSIENT  # Timed out or rate limited

    if 400 <= status_code < 500:
        return ErrorCategory.PERMANENT  # Client errors

    if status_code == 501 or status_code == 505:
        return ErrorCategory.PERMANENT  # Not supported by the peer

    if status_code >= 500:
        return ErrorCategory.TRANSIENT

    return ErrorCategory.UNKNOWN


def classify_exception(exc: BaseException) -> ErrorCategory:
    """Classify an exception into error category."""
    # Already classified
    if isinstance(exc, AmqpCommonError):
        return exc.category

    exc_type = type(exc).__name__.lower()
    exc_str = str(exc).lower()

    connection_markers = (
        "connectionerror",
        "connection refused",
        "connection reset",
        "connection aborted",
        "connection lost",
        "network unreachable",
        "name resolution",
        "socket",
        "broken pipe",
    )
    if any(m in exc_type or m in exc_str for m in connection_markers):
        return ErrorCategory.TRANSIENT

    if "timeout" in exc_type or "timeout" in exc_str:
        return ErrorCategory.TRANSIENT

    auth_markers = (
        "401",
        "unauthorized",
        "authentication",
        "token expired",
        "invalid signature",
    )
    if any(m in exc_str for m in auth_markers):
        return ErrorCategory.AUTH

    if "server busy" in exc_str or "throttl" in exc_str or "503" in exc_str:
        return ErrorCategory.TRANSIENT

    if "404" in exc_str or "not found" in exc_str or "forbidden" in exc_str:
        return ErrorCategory.PERMANENT

    return ErrorCategory.UNKNOWN


def wrap_exception(
    exc: BaseException,
    default_class: type = AmqpCommonError,
    context: dict | None = None,
) -> AmqpCommonError:
    """Wrap a generic exception in appropriate AmqpCommonError subclass."""
    if isinstance(exc, AmqpCommonError):
        if context:
            exc.context.update(context)
        return exc

    category = classify_exception(exc)
    exc_str = str(exc).lower()
    context = context or {}

    if category == ErrorCategory.AUTH:
        return AuthError(str(exc), cause=exc, context=context)

    if category == ErrorCategory.TRANSIENT:
        if "server busy" in exc_str or "throttl" in exc_str:
            return ThrottlingError(str(exc), cause=exc, context=context)
        return TransientError(str(exc), cause=exc, context=context)

    if category == ErrorCategory.PERMANENT:
        return PermanentError(str(exc), cause=exc, context=context)

    return default_class(str(exc), cause=exc, context=context)
