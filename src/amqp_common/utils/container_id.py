"""AMQP container ID generation using coolnames for memorable identifiers."""

from coolname import generate_slug


def generate_container_id(prefix: str = "") -> str:
    """Generate a unique, memorable AMQP container ID.

    Container IDs name the local end of an AMQP connection and show up in
    broker diagnostics, so human-readable IDs are easier to trace in logs
    than UUIDs.

    Args:
        prefix: Optional prefix to prepend to the generated ID (e.g., "orders-sender")

    Returns:
        A container ID in the format "prefix-word1-word2-word3" or "word1-word2-word3"

    Examples:
        >>> generate_container_id()
        'brave-golden-tiger'
        >>> generate_container_id("orders-sender")
        'orders-sender-swift-blue-falcon'
    """
    slug = generate_slug(3)

    if prefix:
        return f"{prefix}-{slug}"

    return slug
