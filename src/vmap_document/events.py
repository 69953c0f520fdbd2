"""VMAP event type constants."""

from enum import Enum


class VmapEvents(str, Enum):
    """Event type constants for structured logging."""

    # Parser events
    PARSE_STARTED = "vmap.parse.started"
    PARSE_COMPLETED = "vmap.parse.completed"
    PARSE_FAILED = "vmap.parse.failed"

    # Scalar events
    SCALAR_INVALID = "vmap.scalar.invalid"
    SCALAR_SKIPPED = "vmap.scalar.skipped"

    # Serializer events
    SERIALIZE_STARTED = "vmap.serialize.started"
    SERIALIZE_COMPLETED = "vmap.serialize.completed"


__all__ = ["VmapEvents"]
