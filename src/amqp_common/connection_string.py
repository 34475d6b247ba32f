"""
Connection string parsing.

Connection strings are flat ``key=value;key=value`` sequences such as the
ones issued by Azure Service Bus and Event Hubs:

    Endpoint=sb://<namespace>.servicebus.windows.net/;SharedAccessKeyName=...;SharedAccessKey=...

Both separators are configurable. Separator characters cannot be escaped, so
keys and values must not contain them (a value may contain the key/value
separator, since only the first occurrence splits a segment).

Parsing is a structural transform only. Checking the parsed keys against an
expected schema is a separate step (validate_connection_string).
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeVar
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from amqp_common.errors.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_ENTITY_SEPARATOR = ";"
DEFAULT_KEY_VALUE_SEPARATOR = "="
ENTITY_PATH_KEY = "EntityPath"

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class ConnectionStringParseOptions:
    """Separators used when parsing a connection string.

    Attributes:
        entity_separator: Separates the key/value parts of the string (default ";")
        key_value_separator: Separates a part's key from its value (default "=")

    Multi-character separators are matched as literal substrings. An empty
    separator falls back to the default.
    """

    entity_separator: str = DEFAULT_ENTITY_SEPARATOR
    key_value_separator: str = DEFAULT_KEY_VALUE_SEPARATOR

    def __post_init__(self):
        for name in ("entity_separator", "key_value_separator"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise InvalidArgumentError(
                    f"{name} must be a string, got {type(value).__name__}",
                    argument=name,
                )

    @property
    def resolved_entity_separator(self) -> str:
        return self.entity_separator or DEFAULT_ENTITY_SEPARATOR

    @property
    def resolved_key_value_separator(self) -> str:
        return self.key_value_separator or DEFAULT_KEY_VALUE_SEPARATOR


DEFAULT_PARSE_OPTIONS = ConnectionStringParseOptions()


def parse_connection_string(
    connection_string: str,
    options: ConnectionStringParseOptions | None = None,
) -> dict[str, str]:
    """
    Parse a connection string into a key/value mapping.

    Each part is split at the first key/value separator; anything after it,
    further separators included, is the value. A part without a separator
    becomes a key with an empty value. When a key repeats, the last value wins.
    The empty string parses to ``{"": ""}``.

    Args:
        connection_string: The connection string to parse
        options: Separators to use (defaults to ";" and "=")

    Returns:
        New dict of parsed keys and values

    Raises:
        InvalidArgumentError: If connection_string is None or not a string
    """
    if connection_string is None:
        raise InvalidArgumentError(
            "connectionString is a required parameter", argument="connection_string"
        )
    if not isinstance(connection_string, str):
        raise InvalidArgumentError(
            f"connectionString must be a string, got {type(connection_string).__name__}",
            argument="connection_string",
        )

    options = options or DEFAULT_PARSE_OPTIONS
    key_value_separator = options.resolved_key_value_separator

    parsed: dict[str, str] = {}
    parts = connection_string.split(options.resolved_entity_separator)
    for part in parts:
        key, _, value = part.partition(key_value_separator)
        parsed[key] = value

    logger.debug(
        "Parsed connection string",
        extra={"segment_count": len(parts), "key_count": len(parsed)},
    )
    return parsed


def build_connection_string(
    parsed: Mapping[str, str],
    options: ConnectionStringParseOptions | None = None,
) -> str:
    """Join a key/value mapping back into a connection string."""
    options = options or DEFAULT_PARSE_OPTIONS
    key_value_separator = options.resolved_key_value_separator
    return options.resolved_entity_separator.join(
        f"{key}{key_value_separator}{value}" for key, value in parsed.items()
    )


def strip_entity_path(
    connection_string: str,
    options: ConnectionStringParseOptions | None = None,
) -> str:
    """Remove EntityPath from a connection string if present.

    This normalizes entity-level connection strings to namespace-level
    so the entity name can be supplied separately. Blank segments are
    dropped and the remaining segments keep their order and spelling.
    """
    if not isinstance(connection_string, str):
        raise InvalidArgumentError(
            "connectionString is a required parameter", argument="connection_string"
        )
    options = options or ConnectionStringParseOptions()
    entity_separator = options.resolved_entity_separator
    key_value_separator = options.resolved_key_value_separator
    parts = [
        part
        for part in connection_string.split(entity_separator)
        if part.strip() and part.partition(key_value_separator)[0] != ENTITY_PATH_KEY
    ]
    return entity_separator.join(parts)


class ServiceBusConnectionString(BaseModel):
    """Schema for Azure Service Bus / Event Hubs connection strings.

    Populated from parsed keys by their connection string names. Unknown
    keys are ignored. Credentials are either a shared access key name and
    key pair, or a shared access signature.

    Example:
        >>> conn = parse_service_bus_connection_string(
        ...     "Endpoint=sb://ns.servicebus.windows.net/;"
        ...     "SharedAccessKeyName=RootManageSharedAccessKey;SharedAccessKey=abc="
        ... )
        >>> conn.host
        'ns.servicebus.windows.net'
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    endpoint: str = Field(..., alias="Endpoint", min_length=1)
    shared_access_key_name: str | None = Field(default=None, alias="SharedAccessKeyName")
    shared_access_key: str | None = Field(default=None, alias="SharedAccessKey", repr=False)
    shared_access_signature: str | None = Field(
        default=None, alias="SharedAccessSignature", repr=False
    )
    entity_path: str | None = Field(default=None, alias="EntityPath")
    use_development_emulator: bool = Field(default=False, alias="UseDevelopmentEmulator")

    @field_validator(
        "shared_access_key_name",
        "shared_access_key",
        "shared_access_signature",
        "entity_path",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("endpoint")
    @classmethod
    def endpoint_has_host(cls, v: str) -> str:
        parsed = urlparse(v)
        if not parsed.scheme or not parsed.hostname:
            raise ValueError("Endpoint must be a URL such as sb://<namespace>.servicebus.windows.net/")
        return v

    @model_validator(mode="after")
    def check_credentials(self) -> "ServiceBusConnectionString":
        if bool(self.shared_access_key_name) != bool(self.shared_access_key):
            raise ValueError("SharedAccessKeyName and SharedAccessKey must be provided together")
        if not self.shared_access_key and not self.shared_access_signature:
            raise ValueError(
                "Either SharedAccessKeyName/SharedAccessKey or SharedAccessSignature is required"
            )
        return self

    @property
    def host(self) -> str:
        """Fully qualified namespace host name taken from the endpoint."""
        return urlparse(self.endpoint).hostname or ""

    def to_connection_string(self) -> str:
        """Serialize back to ``Key=Value;...`` form, omitting unset keys."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        if not self.use_development_emulator:
            data.pop("UseDevelopmentEmulator", None)
        else:
            data["UseDevelopmentEmulator"] = "true"
        return build_connection_string(data)


def validate_connection_string(parsed: Mapping[str, str], model: type[ModelT]) -> ModelT:
    """
    Validate a parsed connection string against a pydantic model.

    Args:
        parsed: Output of parse_connection_string
        model: Pydantic model describing the expected keys

    Returns:
        Validated model instance

    Raises:
        InvalidArgumentError: If the parsed keys do not satisfy the model
    """
    try:
        return model.model_validate(dict(parsed))
    except ValidationError as exc:
        # Only locations and messages; input values may hold credentials
        problems = [
            f"{'.'.join(str(loc) for loc in error['loc']) or 'connection_string'}: {error['msg']}"
            for error in exc.errors()
        ]
        raise InvalidArgumentError(
            f"Connection string does not match {model.__name__}: {'; '.join(problems)}",
            argument="connection_string",
            context={"errors": problems},
        ) from exc


def parse_service_bus_connection_string(
    connection_string: str,
    options: ConnectionStringParseOptions | None = None,
) -> ServiceBusConnectionString:
    """Parse and validate a Service Bus / Event Hubs connection string."""
    return validate_connection_string(
        parse_connection_string(connection_string, options), ServiceBusConnectionString
    )


__all__ = [
    "DEFAULT_ENTITY_SEPARATOR",
    "DEFAULT_KEY_VALUE_SEPARATOR",
    "ConnectionStringParseOptions",
    "ServiceBusConnectionString",
    "build_connection_string",
    "parse_connection_string",
    "parse_service_bus_connection_string",
    "strip_entity_path",
    "validate_connection_string",
]
