"""Client configuration."""

import logging
from functools import lru_cache
from typing import Optional, Union

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings from environment variables."""

    # RPC endpoint of the SIP proxy API server
    endpoint: str = "localhost:50052"

    # Credentials sent as call metadata
    access_key_id: Optional[str] = None
    access_key: Optional[str] = None

    # Channel security
    secure: bool = False
    ca_cert: Optional[str] = None  # PEM file, only used when secure

    # Fully qualified name of the remote Providers service
    service_name: str = "yaps.providers.v1beta1.Providers"

    # Passed through to the channel, e.g. {"grpc.keepalive_time_ms": 10000}
    channel_options: dict[str, Union[int, str]] = {}

    # Extra metadata pairs added to every call
    metadata: dict[str, str] = {}

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "SIPPROVIDERS_",
        "env_file": ".env",
        "extra": "forbid",
    }

    @property
    def auth_enabled(self) -> bool:
        """Check if access key metadata should be sent."""
        return bool(self.access_key_id and self.access_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for applications embedding the client."""
    level = level or get_settings().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
