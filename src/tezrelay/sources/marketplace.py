"""Marketplace FA2 contracts: only plain `transfer` calls are relayed."""

from tezrelay.sources.base import TransferSource


class FxhashSource(TransferSource):
    CONTRACT_NAME = "fxhash"


class FxhashV2Source(TransferSource):
    CONTRACT_NAME = "fxhashv2"


class HicetnuncSource(TransferSource):
    CONTRACT_NAME = "hicetniuc"


class VersumSource(TransferSource):
    CONTRACT_NAME = "versum"
