"""Channel setup and call dispatch shared by RPC clients."""

import logging
from typing import Any, Callable, Optional

import grpc

from ..config import Settings
from ..errors import from_rpc_error
from ..models import Message

logger = logging.getLogger(__name__)

Metadata = tuple[tuple[str, str], ...]


def create_channel(settings: Settings) -> grpc.aio.Channel:
    """Open an asyncio channel to the configured endpoint."""
    options = list(settings.channel_options.items())

    if not settings.secure:
        return grpc.aio.insecure_channel(settings.endpoint, options=options)

    root_certificates = None
    if settings.ca_cert:
        with open(settings.ca_cert, "rb") as f:
            root_certificates = f.read()

    credentials = grpc.ssl_channel_credentials(root_certificates=root_certificates)
    return grpc.aio.secure_channel(settings.endpoint, credentials, options=options)


def build_metadata(settings: Settings) -> Metadata:
    """Metadata pairs attached to every call."""
    pairs: list[tuple[str, str]] = []
    if settings.auth_enabled:
        pairs.append(("access_key_id", settings.access_key_id))
        pairs.append(("access_key", settings.access_key))
    pairs.extend((key.lower(), value) for key, value in settings.metadata.items())
    return tuple(pairs)


class ServiceHandle:
    """
    A stub bound to a channel, plus the metadata sent with each call.

    The channel is opened from settings unless one is passed in; only a
    channel opened here is closed by close().
    """

    def __init__(
        self,
        stub_factory: Callable[[grpc.aio.Channel, str], Any],
        settings: Settings,
        channel: Optional[grpc.aio.Channel] = None,
    ):
        self.settings = settings
        self._owns_channel = channel is None
        self.channel = channel if channel is not None else create_channel(settings)
        self.stub = stub_factory(self.channel, settings.service_name)
        self.metadata = build_metadata(settings)
        logger.debug(f"Service handle ready: {settings.service_name} at {settings.endpoint}")

    async def invoke(self, method: str, request: Message) -> Message:
        """Call ``method`` on the remote service and return its response."""
        call = getattr(self.stub, method)
        try:
            return await call(request, metadata=self.metadata)
        except grpc.aio.AioRpcError as e:
            logger.debug(f"{method} failed: {e.code().name} {e.details()}")
            raise from_rpc_error(e) from e

    async def close(self) -> None:
        if self._owns_channel:
            await self.channel.close()
