from enum import Enum


class TransportTag(str, Enum):
    """Tag printed in every relay log line to show which transport carried the event."""

    STDOUT = "<STDOUT>"
    GRPC = "<GRPC>"
    API = "<API>"


class EventTag(str, Enum):
    TOKEN_TRANSFER = "[TOKEN_TRANSFER]"
    TOKEN_STAMP = "[TOKEN_STAMP]"
