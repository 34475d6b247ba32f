"""AMQP connection configuration."""

from amqp_common.config.config import (
    DEFAULT_CONFIG_FILE,
    AmqpConfig,
    get_config,
    load_config,
    load_yaml,
    redact_connection_properties,
    reset_config,
    set_config,
)

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "AmqpConfig",
    "get_config",
    "load_config",
    "load_yaml",
    "redact_connection_properties",
    "reset_config",
    "set_config",
]
