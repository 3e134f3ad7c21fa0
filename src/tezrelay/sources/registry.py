"""SourceRegistry: (contract name, entrypoint) -> handler lookup."""

from tezrelay.sources.base import ContractSource, EntrypointHandler


class SourceRegistry:
    """Explicit registration table. Contract names are matched case-insensitively."""

    def __init__(self) -> None:
        self._handlers: dict[tuple[str, str], EntrypointHandler] = {}
        self._contracts: set[str] = set()

    def register(self, contract: str, entrypoint: str, handler: EntrypointHandler) -> None:
        self._contracts.add(contract.lower())
        self._handlers[(contract.lower(), entrypoint)] = handler

    def register_source(self, source: ContractSource) -> None:
        """Bulk-register every entrypoint a contract source declares."""
        self._contracts.add(source.CONTRACT_NAME.lower())
        for entrypoint, handler in source.handlers().items():
            self.register(source.CONTRACT_NAME, entrypoint, handler)

    def has_contract(self, contract: str) -> bool:
        return contract.lower() in self._contracts

    def get(self, contract: str, entrypoint: str) -> EntrypointHandler | None:
        return self._handlers.get((contract.lower(), entrypoint))

    def entrypoints(self, contract: str) -> list[str]:
        return sorted(ep for (name, ep) in self._handlers if name == contract.lower())


def build_default_registry() -> SourceRegistry:
    """Create a SourceRegistry with every known contract source registered."""
    from tezrelay.sources.feralfile import FeralFileV1Source
    from tezrelay.sources.marketplace import FxhashSource, FxhashV2Source, HicetnuncSource, VersumSource
    from tezrelay.sources.postcard import PostcardSource

    registry = SourceRegistry()
    for source in (
        FeralFileV1Source(),
        FxhashSource(),
        FxhashV2Source(),
        HicetnuncSource(),
        VersumSource(),
        PostcardSource(),
    ):
        registry.register_source(source)
    return registry
