"""Tests for amqp_common.types module."""

from amqp_common.errors.amqp_classifier import AmqpErrorClassifier
from amqp_common.types import AmqpErrorShape, ErrorCategory, ErrorClassifier


class TestErrorCategory:
    def test_values(self):
        assert ErrorCategory.TRANSIENT.value == "transient"
        assert ErrorCategory.AUTH.value == "auth"
        assert ErrorCategory.PERMANENT.value == "permanent"
        assert ErrorCategory.UNKNOWN.value == "unknown"

    def test_all_members(self):
        expected = {"TRANSIENT", "AUTH", "PERMANENT", "UNKNOWN"}
        assert set(ErrorCategory.__members__.keys()) == expected

    def test_from_value(self):
        assert ErrorCategory("transient") is ErrorCategory.TRANSIENT


class TestAmqpErrorShape:
    def test_members(self):
        assert {shape.value for shape in AmqpErrorShape} == {
            "condition_description",
            "value_array",
            "native_error",
        }


class TestErrorClassifier:
    def test_is_protocol(self):
        """ErrorClassifier is a Protocol - verify it has expected methods."""
        assert hasattr(ErrorClassifier, "classify_error")
        assert hasattr(ErrorClassifier, "is_transient")

    def test_amqp_classifier_implements_protocol(self):
        classifier: ErrorClassifier = AmqpErrorClassifier()
        assert classifier.classify_error({"condition": "amqp:not-found", "description": "x"}) == (
            ErrorCategory.PERMANENT
        )
