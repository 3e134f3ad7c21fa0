from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tezrelay.domain.enums import Network


class DeliveryConfig(BaseModel):
    """Which downstream endpoints are configured. Built once at startup."""

    model_config = ConfigDict(frozen=True)

    grpc_endpoint: str | None = None
    webhook_endpoint: str | None = None
    is_testnet: bool = False


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    event_processor_uri: str = Field(
        default="",
        validation_alias=AliasChoices("EVENT_PROCESSOR_URI", "EVENT_PROCESSOR_URL", "event_processor_uri"),
    )
    event_subscriber_url: str = ""
    network: str = Network.MAINNET.value
    grpc_push_method: str = "PushNftEvent"  # "PushEvent" for the legacy marketplace service
    aws_region: str = ""
    last_stop_block_key_name: str = ""
    checkpoint_interval: int = 5
    delivery_max_attempts: int = 1  # 1 = no retry
    delivery_max_in_flight: int = 0  # 0 = unbounded
    http_timeout: float | None = None
    grpc_timeout: float | None = None  # per-call deadline, None = no deadline
    shutdown_timeout: float | None = 10.0  # wait for in-flight deliveries on shutdown
    log_level: str = "INFO"

    @property
    def is_testnet(self) -> bool:
        return self.network == Network.TESTNET.value

    def delivery_config(self) -> DeliveryConfig:
        return DeliveryConfig(
            grpc_endpoint=self.event_processor_uri or None,
            webhook_endpoint=self.event_subscriber_url or None,
            is_testnet=self.is_testnet,
        )
