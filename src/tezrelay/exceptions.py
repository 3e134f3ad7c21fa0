"""Relay error hierarchy."""


class RelayError(Exception):
    """Base class for all relay errors."""


class MisconfigurationError(RelayError):
    """A transport was used although its client was never constructed."""


class ExternalServiceError(RelayError):
    """Network-level failure talking to a downstream service. Retriable."""


class DeliveryError(RelayError):
    """A downstream service refused or failed to accept an event."""

    def __init__(self, transport: str, detail: str) -> None:
        super().__init__(f"{transport} delivery failed: {detail}")
        self.transport = transport
        self.detail = detail


class EventProcessorError(DeliveryError):
    """The event processor answered with a non-200 status."""

    def __init__(self, status: int, result: str) -> None:
        super().__init__("grpc", f"status {status}: {result}")
        self.status = status
        self.result = result


class UnknownContractError(RelayError):
    """No contract source is registered under this name."""
