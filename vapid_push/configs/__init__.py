from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .push import PushConfig
from .vapid import VapidConfig


class VapidPushConfig(BaseSettings):
    """Root configuration.

    Environment variables:
        VAPIDPUSH_LogLevel               log level used by the CLI
        VAPIDPUSH_Vapid_PrivateKeyPath   VAPID private key pem
        VAPIDPUSH_Vapid_Subject          default 'sub' claim
        VAPIDPUSH_Vapid_Backend          native | openssl
        VAPIDPUSH_Push_Timeout           request timeout in seconds
        VAPIDPUSH_Push_TTL               TTL header value
    """

    model_config = SettingsConfigDict(
        env_prefix="VAPIDPUSH_",
        env_nested_delimiter="_",
        env_file=".env",
        extra="ignore",
    )

    LogLevel: str = Field(default="INFO", description="Log level")

    Vapid: VapidConfig = Field(default_factory=VapidConfig)
    Push: PushConfig = Field(default_factory=PushConfig)


configs = VapidPushConfig()

__all__ = [
    "VapidPushConfig",
    "VapidConfig",
    "PushConfig",
    "configs",
]
