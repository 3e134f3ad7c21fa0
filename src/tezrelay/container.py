from dependency_injector import containers, providers

from tezrelay.checkpoint.reporter import build_checkpoint_reporter
from tezrelay.config import Settings
from tezrelay.indexer import RelayIndexer
from tezrelay.infra.grpc.event_processor_client import build_event_processor_client
from tezrelay.infra.http.webhook_client import build_webhook_client
from tezrelay.relay.dispatcher import Dispatcher, select_transports
from tezrelay.relay.transports import GrpcTransport, StdoutTransport, WebhookTransport
from tezrelay.sources.registry import build_default_registry


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["tezrelay.api.deps"])

    settings = providers.Singleton(Settings)

    delivery_config = providers.Singleton(Settings.delivery_config, settings)

    event_processor_client = providers.Singleton(build_event_processor_client, settings=settings)
    webhook_client = providers.Singleton(build_webhook_client, settings=settings)

    grpc_transport = providers.Singleton(GrpcTransport, client=event_processor_client)
    webhook_transport = providers.Singleton(
        WebhookTransport,
        client=webhook_client,
        is_testnet=settings.provided.is_testnet,
    )
    stdout_transport = providers.Singleton(StdoutTransport)

    transports = providers.Singleton(
        select_transports,
        config=delivery_config,
        grpc_transport=grpc_transport,
        webhook_transport=webhook_transport,
        stdout_transport=stdout_transport,
    )

    dispatcher = providers.Singleton(
        Dispatcher,
        transports=transports,
        max_in_flight=settings.provided.delivery_max_in_flight,
        drain_timeout=settings.provided.shutdown_timeout,
    )

    registry = providers.Singleton(build_default_registry)

    checkpoint_reporter = providers.Singleton(build_checkpoint_reporter, settings=settings)

    indexer = providers.Singleton(
        RelayIndexer,
        registry=registry,
        dispatcher=dispatcher,
        checkpoint=checkpoint_reporter,
    )
