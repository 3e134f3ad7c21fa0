from enum import Enum


class EventType(str, Enum):
    """Envelope `type` values understood by the event processor."""

    TRANSFER = "transfer"
    TOKEN_UPDATED = "token_updated"
