"""AMQP connection configuration from YAML file.

Loads from config/config.yaml:

    amqp:
      connection_string: ${AMQP_CONNECTION_STRING}
      entity_separator: ";"
      key_value_separator: "="
      entity_path: orders          # optional, overrides EntityPath

Environment variables ARE supported using ${VAR_NAME} and ${VAR_NAME:-default}
syntax in YAML files. AMQP_CONNECTION_STRING, when set, wins over the file.
"""

import json
import logging
import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from amqp_common.connection_string import (
    DEFAULT_ENTITY_SEPARATOR,
    DEFAULT_KEY_VALUE_SEPARATOR,
    ENTITY_PATH_KEY,
    ConnectionStringParseOptions,
    ServiceBusConnectionString,
    parse_connection_string,
    validate_connection_string,
)

# Configure module logger
logger = logging.getLogger(__name__)

CONNECTION_STRING_ENV_VAR = "AMQP_CONNECTION_STRING"
REDACTED_KEYS = ("SharedAccessKey", "SharedAccessSignature")


def load_yaml(path: Path) -> Dict[str, Any]:
    """Load YAML file and return dict."""
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR_NAME} and ${VAR_NAME:-default} environment variables in config data."""
    if isinstance(data, dict):
        return {key: _expand_env_vars(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        pattern = r"\$\{([^}:]+)(?::-(([^}]*))?)?\}"

        def replacer(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else match.group(0)
            return os.getenv(var_name, default_value)

        return re.sub(pattern, replacer, data)
    else:
        return data


def _deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge overlay into base dict."""
    result = base.copy()
    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def redact_connection_properties(parsed: Dict[str, str]) -> Dict[str, str]:
    """Return a copy of parsed connection properties with credentials masked."""
    return {
        key: "[REDACTED]" if key in REDACTED_KEYS and value else value
        for key, value in parsed.items()
    }


# Default config file: config.yaml beside this module
DEFAULT_CONFIG_FILE = Path(__file__).parent / "config.yaml"


@dataclass
class AmqpConfig:
    """AMQP connection configuration.

    Holds the raw connection string plus the separators used to parse it.
    The parsed form is derived on demand so the config never stores
    credentials in more than one place.
    """

    connection_string: str = ""
    entity_separator: str = DEFAULT_ENTITY_SEPARATOR
    key_value_separator: str = DEFAULT_KEY_VALUE_SEPARATOR
    entity_path: Optional[str] = None

    def validate(self) -> None:
        """Validate configuration for correctness.

        Checks the connection string is present and separators are usable.
        """
        if not self.connection_string or not self.connection_string.strip():
            raise ValueError(
                f"amqp.connection_string is required (or set {CONNECTION_STRING_ENV_VAR})"
            )
        if re.fullmatch(r"\$\{[^}]+\}", self.connection_string.strip()):
            raise ValueError(
                f"amqp.connection_string references an unset environment variable: "
                f"{self.connection_string.strip()}"
            )
        if not self.entity_separator:
            raise ValueError("amqp.entity_separator must not be empty")
        if not self.key_value_separator:
            raise ValueError("amqp.key_value_separator must not be empty")
        if self.entity_separator == self.key_value_separator:
            raise ValueError(
                "amqp.entity_separator and amqp.key_value_separator must differ, "
                f"both are '{self.entity_separator}'"
            )

    def parse_options(self) -> ConnectionStringParseOptions:
        return ConnectionStringParseOptions(
            entity_separator=self.entity_separator,
            key_value_separator=self.key_value_separator,
        )

    def parsed(self) -> Dict[str, str]:
        """Parse the connection string, applying the entity_path override."""
        properties = parse_connection_string(self.connection_string, self.parse_options())
        if self.entity_path:
            properties[ENTITY_PATH_KEY] = self.entity_path
        return properties

    def service_bus(self) -> ServiceBusConnectionString:
        """Validate the connection string as a Service Bus / Event Hubs connection string."""
        return validate_connection_string(self.parsed(), ServiceBusConnectionString)


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> AmqpConfig:
    """Load AMQP configuration from config.yaml file.

    Environment variables ARE supported using ${VAR_NAME} syntax in YAML files.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_FILE

    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n" f"Expected file: config/config.yaml"
        )

    logger.info(f"Loading configuration from file: {config_path}")
    yaml_data = load_yaml(config_path)
    yaml_data = _expand_env_vars(yaml_data)

    if "amqp" not in yaml_data:
        raise ValueError(
            "Invalid config file: missing 'amqp:' section\n"
            "See config.yaml.example for correct structure"
        )

    amqp_config = yaml_data["amqp"] or {}

    if overrides:
        logger.debug(f"Applying overrides: {list(overrides.keys())}")
        amqp_config = _deep_merge(amqp_config, overrides)

    connection_string = os.getenv(CONNECTION_STRING_ENV_VAR) or amqp_config.get(
        "connection_string", ""
    )

    config = AmqpConfig(
        connection_string=connection_string or "",
        entity_separator=amqp_config.get("entity_separator", DEFAULT_ENTITY_SEPARATOR),
        key_value_separator=amqp_config.get("key_value_separator", DEFAULT_KEY_VALUE_SEPARATOR),
        entity_path=amqp_config.get("entity_path") or None,
    )

    logger.debug("Validating configuration...")
    config.validate()
    logger.debug("Configuration validation passed")

    return config


_amqp_config: Optional[AmqpConfig] = None


def get_config() -> AmqpConfig:
    """Get or load the singleton AMQP config instance."""
    global _amqp_config
    if _amqp_config is None:
        _amqp_config = load_config()
    return _amqp_config


def set_config(config: AmqpConfig) -> None:
    """Set the singleton AMQP config instance (useful for testing)."""
    global _amqp_config
    _amqp_config = config


def reset_config() -> None:
    """Reset the singleton config instance (forces reload on next get_config() call)."""
    global _amqp_config
    _amqp_config = None


def _build_cli_parser():
    import argparse

    parser = argparse.ArgumentParser(
        description="AMQP Connection Configuration Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate configuration
  python -m amqp_common.config --validate

  # Show parsed connection string (credentials redacted)
  python -m amqp_common.config --show-parsed

  # Use custom config file and JSON output for automation
  python -m amqp_common.config --config /path/to/config.yaml --validate --json
        """,
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and the connection string",
    )
    parser.add_argument(
        "--show-parsed",
        action="store_true",
        help="Display the parsed connection string with credentials redacted",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config.yaml file (default: src/amqp_common/config/config.yaml)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format instead of human-readable",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def _cli_main(argv: Optional[list] = None) -> int:
    """CLI entry point for config validation and debugging."""
    from amqp_common.errors.exceptions import AmqpCommonError

    parser = _build_cli_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if not args.validate and not args.show_parsed:
        parser.print_help()
        return 0

    output: Dict[str, Any] = {}
    try:
        config = load_config(config_path=args.config)
        if args.validate:
            service_bus = config.service_bus()
            output["validation"] = {"passed": True, "host": service_bus.host}
        if args.show_parsed:
            output["parsed"] = redact_connection_properties(config.parsed())
    except (FileNotFoundError, ValueError, AmqpCommonError) as e:
        if args.json:
            print(json.dumps({"validation": {"passed": False, "error": str(e)}}, indent=2))
        else:
            print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(output, indent=2))
        return 0

    if "validation" in output:
        print(f"Configuration valid (host: {output['validation']['host']})")
    if "parsed" in output:
        print(yaml.safe_dump(output["parsed"], default_flow_style=False, sort_keys=False), end="")
    return 0
