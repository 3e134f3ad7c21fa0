from tezrelay.sources.base import TransferSource


class FeralFileV1Source(TransferSource):
    """Feral File v1 exhibitions. `authorized_transfer` takes the same parameter as `transfer`."""

    CONTRACT_NAME = "FeralFileV1"
    ENTRYPOINT_HANDLERS = {
        "transfer": "_handle_transfer",
        "authorized_transfer": "_handle_transfer",
    }
