"""Tests for JSON and console log formatters."""

import json
import logging
import sys

from amqp_common.logging.context import get_log_context, set_log_context
from amqp_common.logging.formatters import ConsoleFormatter, JSONFormatter

SECRET = "c2VjcmV0LWtleQ=="


def _make_record(
    msg="test message",
    level=logging.INFO,
    name="test.logger",
    exc_info=None,
    **extras,
):
    record = logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:

    def test_formats_basic_json_with_required_fields(self):
        output = json.loads(JSONFormatter().format(_make_record()))

        assert output["level"] == "INFO"
        assert output["logger"] == "test.logger"
        assert output["message"] == "test message"
        assert output["ts"].endswith("Z")

    def test_includes_context(self):
        set_log_context(component="sender", entity="orders", container_id="brave-tiger", trace_id="abc")
        output = json.loads(JSONFormatter().format(_make_record()))

        assert output["component"] == "sender"
        assert output["entity"] == "orders"
        assert output["container_id"] == "brave-tiger"
        assert output["trace_id"] == "abc"

    def test_extra_field_overrides_context_trace_id(self):
        set_log_context(trace_id="from-context")
        output = json.loads(JSONFormatter().format(_make_record(trace_id="from-extra")))

        assert output["trace_id"] == "from-extra"

    def test_omits_empty_context_fields(self):
        output = json.loads(JSONFormatter().format(_make_record()))

        assert "component" not in output
        assert "entity" not in output
        assert "container_id" not in output

    def test_includes_file_location_for_debug_and_error(self):
        formatter = JSONFormatter()
        assert json.loads(formatter.format(_make_record(level=logging.DEBUG)))["file"] == "test.py:42"
        assert "file" in json.loads(formatter.format(_make_record(level=logging.ERROR)))

    def test_omits_file_location_for_info(self):
        assert "file" not in json.loads(JSONFormatter().format(_make_record()))

    def test_extra_fields(self):
        record = _make_record(condition="amqp:not-found", error_shape="value_array", segment_count="3")
        output = json.loads(JSONFormatter().format(record))

        assert output["condition"] == "amqp:not-found"
        assert output["error_shape"] == "value_array"
        assert output["segment_count"] == 3

    def test_invalid_numeric_field_becomes_null(self):
        output = json.loads(JSONFormatter().format(_make_record(status_code="abc")))
        assert output["status_code"] is None

    def test_redacts_shared_access_key_in_message(self):
        record = _make_record(
            msg=f"Connecting with Endpoint=sb://ns/;SharedAccessKeyName=root;SharedAccessKey={SECRET};EntityPath=q"
        )
        output = json.loads(JSONFormatter().format(record))

        assert SECRET not in output["message"]
        assert "SharedAccessKey=[REDACTED]" in output["message"]
        assert "SharedAccessKeyName=root" in output["message"]
        assert "EntityPath=q" in output["message"]

    def test_redacts_connection_string_extra(self):
        record = _make_record(connection_string=f"Endpoint=sb://ns/;SharedAccessKey={SECRET}")
        output = json.loads(JSONFormatter().format(record))

        assert output["connection_string"] == "Endpoint=sb://ns/;SharedAccessKey=[REDACTED]"

    def test_redacts_shared_access_signature(self):
        record = _make_record(msg="SharedAccessSignature=SharedAccessSignature sr=a&sig=b&se=1;x=y")
        output = json.loads(JSONFormatter().format(record))

        assert output["message"] == "SharedAccessSignature=[REDACTED];x=y"

    def test_redacts_url_token(self):
        output = json.loads(JSONFormatter().format(_make_record(msg="GET https://h/p?sig=abc&x=1")))
        assert output["message"] == "GET https://h/p?sig=[REDACTED]&x=1"

    def test_includes_structured_exception(self):
        try:
            raise ValueError(f"bad SharedAccessKey={SECRET}")
        except ValueError:
            record = _make_record(level=logging.ERROR, exc_info=sys.exc_info())

        output = json.loads(JSONFormatter().format(record))

        assert output["exception"]["type"] == "ValueError"
        assert SECRET not in output["exception"]["message"]
        assert SECRET not in output["exception"]["stacktrace"]

    def test_serializes_bytes_extra(self):
        output = json.loads(JSONFormatter().format(_make_record(condition=b"amqp:link:stolen")))
        assert output["condition"] == "amqp:link:stolen"


class TestConsoleFormatter:

    def test_plain_format(self):
        formatter = ConsoleFormatter()
        formatter._use_colors = False
        line = formatter.format(_make_record())

        assert line.endswith(" - INFO - test message")

    def test_includes_component_and_entity(self):
        set_log_context(component="receiver", entity="orders")
        formatter = ConsoleFormatter()
        formatter._use_colors = False
        line = formatter.format(_make_record())

        assert "[receiver]" in line
        assert "[orders]" in line

    def test_includes_tags(self):
        formatter = ConsoleFormatter()
        formatter._use_colors = False
        line = formatter.format(_make_record(trace_id="0123456789abcdef", condition="amqp:not-found"))

        assert "[01234567]" in line
        assert "[amqp:not-found]" in line

    def test_colors_level_name(self):
        formatter = ConsoleFormatter()
        formatter._use_colors = True
        line = formatter.format(_make_record(level=logging.ERROR))

        assert "\033[31mERROR\033[0m" in line

    def test_context_reset_between_tests(self):
        assert get_log_context()["component"] == ""
