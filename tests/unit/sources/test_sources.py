import logging

from tezrelay.sources.feralfile import FeralFileV1Source
from tezrelay.sources.marketplace import FxhashSource, VersumSource
from tezrelay.sources.postcard import PostcardSource
from tezrelay.sources.registry import SourceRegistry, build_default_registry

TRANSFER_PARAMETER = [{"from_": "tz1A", "txs": [{"amount": 1, "to_": "tz1B", "token_id": 5}]}]


class TestTransferSource:
    def test_transfer_forwarded(self, context):
        handler = FxhashSource().handlers()["transfer"]
        envelopes = handler(TRANSFER_PARAMETER, context)
        assert len(envelopes) == 1
        assert envelopes[0].from_address == "tz1A"
        assert envelopes[0].to_address == "tz1B"
        assert envelopes[0].token_id == "5"

    def test_only_transfer_declared(self):
        assert list(VersumSource().handlers()) == ["transfer"]

    def test_feralfile_authorized_transfer(self, context):
        handlers = FeralFileV1Source().handlers()
        assert set(handlers) == {"transfer", "authorized_transfer"}
        assert len(handlers["authorized_transfer"](TRANSFER_PARAMETER, context)) == 1

    def test_malformed_leg_skipped_siblings_kept(self, context, caplog):
        parameter = [
            {"from_": "tz1A", "txs": [{"amount": 1, "to_": "tz1B", "token_id": "not-a-number"}]},
            {"from_": "tz1C", "txs": [{"amount": 1, "to_": "tz1D", "token_id": 8}]},
        ]
        with caplog.at_level(logging.WARNING, logger="tezrelay"):
            envelopes = FxhashSource().handlers()["transfer"](parameter, context)

        assert [e.token_id for e in envelopes] == ["8"]
        assert "Skipping malformed TransferTx" in caplog.text
        assert context.operation_group_hash in caplog.text

    def test_bad_leg_does_not_drop_good_leg_in_same_group(self, context):
        parameter = [{"from_": "tz1A", "txs": [
            {"amount": 1, "to_": "tz1B", "token_id": "oops"},
            {"amount": 1, "to_": "tz1C", "token_id": 8},
        ]}]
        envelopes = FxhashSource().handlers()["transfer"](parameter, context)

        assert [(e.from_address, e.to_address, e.token_id) for e in envelopes] == [("tz1A", "tz1C", "8")]

    def test_group_without_sender_skipped(self, context, caplog):
        parameter = [
            {"txs": [{"amount": 1, "to_": "tz1B", "token_id": 5}]},
            {"from": "tz1C", "txs": [{"amount": 1, "to": "tz1D", "token_id": 9}]},
        ]
        with caplog.at_level(logging.WARNING, logger="tezrelay"):
            envelopes = VersumSource().handlers()["transfer"](parameter, context)

        assert [e.token_id for e in envelopes] == ["9"]
        assert "Skipping malformed TransferGroup" in caplog.text

    def test_non_list_parameter_ignored(self, context, caplog):
        with caplog.at_level(logging.WARNING, logger="tezrelay"):
            envelopes = FxhashSource().handlers()["transfer"]({"from_": "tz1A", "txs": []}, context)

        assert envelopes == []
        assert "expected a list, got dict" in caplog.text


class TestPostcardSource:
    def test_mint_postcard(self, context):
        handler = PostcardSource().handlers()["mint_postcard"]
        envelopes = handler([{"owner": "tz1ABC", "token_id": 42}], context)
        assert len(envelopes) == 1
        assert envelopes[0].type == "transfer"
        assert envelopes[0].from_address == ""
        assert envelopes[0].to_address == "tz1ABC"
        assert envelopes[0].token_id == "42"

    def test_stamp_postcard(self, context):
        handler = PostcardSource().handlers()["stamp_postcard"]
        envelopes = handler([{"postman": "tz1XYZ", "token_id": 7}], context)
        assert len(envelopes) == 1
        assert envelopes[0].type == "token_updated"
        assert envelopes[0].from_address == "tz1XYZ"
        assert envelopes[0].to_address == "tz1XYZ"
        assert envelopes[0].token_id == "7"

    def test_multiple_stamps(self, context):
        handler = PostcardSource().handlers()["stamp_postcard"]
        envelopes = handler([{"postman": "tz1X", "token_id": 1}, {"postman": "tz1Y", "token_id": 2}], context)
        assert [(e.from_address, e.token_id) for e in envelopes] == [("tz1X", "1"), ("tz1Y", "2")]


class TestSourceRegistry:
    def test_default_registry_contracts(self):
        registry = build_default_registry()
        for name in ("FeralFileV1", "fxhash", "fxhashv2", "hicetniuc", "versum", "postcard"):
            assert registry.has_contract(name)
        assert not registry.has_contract("objkt")

    def test_lookup_case_insensitive(self):
        registry = build_default_registry()
        assert registry.get("feralfilev1", "transfer") is not None
        assert registry.get("POSTCARD", "stamp_postcard") is not None

    def test_undeclared_entrypoint(self):
        registry = build_default_registry()
        assert registry.get("postcard", "balance_of") is None

    def test_postcard_entrypoints(self):
        assert build_default_registry().entrypoints("postcard") == ["mint_postcard", "stamp_postcard", "transfer"]

    def test_register_plain_function(self, context):
        registry = SourceRegistry()
        registry.register("custom", "burn", lambda parameter, ctx: [])
        assert registry.has_contract("custom")
        assert registry.get("custom", "burn")([], context) == []
