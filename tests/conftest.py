"""
pytest configuration for amqp_common tests.

Adds src directory to Python path for imports and sets up test environment.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))

from amqp_common.config.config import reset_config  # noqa: E402
from amqp_common.logging.context import clear_log_context  # noqa: E402

SERVICE_BUS_CONNECTION_STRING = (
    "Endpoint=sb://contoso.servicebus.windows.net/;"
    "SharedAccessKeyName=RootManageSharedAccessKey;"
    "SharedAccessKey=c2VjcmV0LWtleQ==;"
    "EntityPath=orders"
)


@pytest.fixture
def service_bus_connection_string():
    return SERVICE_BUS_CONNECTION_STRING


@pytest.fixture(autouse=True)
def _isolate_global_state():
    clear_log_context()
    reset_config()
    yield
    clear_log_context()
    reset_config()
