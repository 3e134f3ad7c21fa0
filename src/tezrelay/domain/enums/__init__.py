from tezrelay.domain.enums.event_type import EventType
from tezrelay.domain.enums.network import Network
from tezrelay.domain.enums.transport import EventTag, TransportTag

__all__ = [
    "EventTag",
    "EventType",
    "Network",
    "TransportTag",
]
