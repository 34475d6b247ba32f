"""Utility functions."""

from amqp_common.utils.container_id import generate_container_id
from amqp_common.utils.json_serializers import json_serializer
from amqp_common.utils.timing import delay

__all__ = ["delay", "generate_container_id", "json_serializer"]
