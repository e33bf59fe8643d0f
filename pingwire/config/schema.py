"""Configuration schema using Pydantic."""

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings

from pingwire.delivery.models import DeliveryCredentials, DeliverySettings


class TelegramConfig(BaseModel):
    """Telegram Bot API configuration."""
    bot_token: str = ""  # Bot token from @BotFather
    chat_id: str = ""  # Destination chat, user or channel ID
    api_base: str = "https://api.telegram.org"
    timeout: float = 10.0  # Seconds per sendMessage request


class DeliveryConfig(BaseModel):
    """Chunking and pacing configuration."""
    max_message_length: int = Field(default=4096, gt=0)  # Telegram's hard ceiling
    safety_margin: int = Field(default=200, ge=0)  # Reserved for part headers and formatting
    chunk_delay: float = Field(default=1.0, ge=0)  # Seconds between consecutive parts

    @model_validator(mode="after")
    def _check_margin(self) -> "DeliveryConfig":
        if self.safety_margin >= self.max_message_length:
            raise ValueError("safetyMargin must be smaller than maxMessageLength")
        return self


class GatewayConfig(BaseModel):
    """Gateway/server configuration."""
    host: str = "0.0.0.0"
    port: int = 8787
    auth_key: str = ""  # Shared key required by POST /send
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class Config(BaseSettings):
    """Root configuration for pingwire."""
    telegram: TelegramConfig = Field(default_factory=TelegramConfig)
    delivery: DeliveryConfig = Field(default_factory=DeliveryConfig)
    gateway: GatewayConfig = Field(default_factory=GatewayConfig)

    @property
    def credentials(self) -> DeliveryCredentials:
        """Credentials handed to the transport for each delivery."""
        return DeliveryCredentials(
            bot_token=self.telegram.bot_token,
            chat_id=self.telegram.chat_id,
        )

    @property
    def delivery_settings(self) -> DeliverySettings:
        """Explicit settings struct for the delivery pipeline."""
        return DeliverySettings(
            max_message_length=self.delivery.max_message_length,
            safety_margin=self.delivery.safety_margin,
            chunk_delay=self.delivery.chunk_delay,
        )

    class Config:
        env_prefix = "PINGWIRE_"
        env_nested_delimiter = "__"
