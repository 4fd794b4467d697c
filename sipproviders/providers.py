"""Async client for providers on the SIP proxy subsystem."""

import logging
from typing import Any, AsyncIterator, Mapping, Optional, TypeVar, Union

import grpc
from pydantic import ValidationError

from .config import Settings, get_settings
from .errors import InvalidArgumentError, require
from .models import (
    CreateProviderRequest,
    DeleteProviderRequest,
    GetProviderRequest,
    ListProvidersRequest,
    ListProvidersResponse,
    Message,
    Provider,
    ProviderCreate,
    ProviderUpdate,
    UpdateProviderRequest,
)
from .rpc import ProvidersStub, ServiceHandle

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Message)


def _coerce(model: type[M], value: Union[M, Mapping[str, Any], None]) -> M:
    """Accept either the model itself or a plain mapping of its fields."""
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value or {})
    except ValidationError as e:
        fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in e.errors())
        raise InvalidArgumentError(
            f"invalid {model.__name__}: {fields}",
            code=grpc.StatusCode.INVALID_ARGUMENT,
        ) from e


def _masked(message: Message) -> str:
    """Render a message for logs with secrets hidden."""
    data = message.model_dump(mode="json", by_alias=True, exclude_none=True)
    provider = data.get("provider", data)
    if provider.get("secret"):
        provider["secret"] = "****"
    return str(data)


class ProviderClient:
    """
    Create, get, update, list and delete providers on the SIP proxy.

    Example:

        async with ProviderClient(endpoint="api.example.net:50052") as providers:
            provider = await providers.create({
                "name": "Provider Name",
                "username": "trunk001",
                "secret": "secretkey",
                "host": "sip.provider.net",
            })

    Calls may run concurrently over the shared channel. Nothing orders them;
    callers serialize dependent operations on the same reference themselves.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        channel: Optional[grpc.aio.Channel] = None,
        **overrides: Any,
    ):
        settings = settings or get_settings()
        if overrides:
            # Re-validate so string values are coerced and unknown keys raise
            settings = type(settings)(_env_file=None, **{**settings.model_dump(), **overrides})
        self._handle = ServiceHandle(ProvidersStub, settings, channel=channel)

    async def __aenter__(self) -> "ProviderClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the channel if this client opened it."""
        await self._handle.close()

    async def create(self, spec: Union[ProviderCreate, Mapping[str, Any]]) -> Provider:
        """
        Create a provider.

        ``name`` and ``host`` are required. Transport defaults to "tcp" and
        expires to 3600 seconds when not given.
        """
        data = _coerce(ProviderCreate, spec)
        request = CreateProviderRequest(provider=data.to_provider())
        logger.debug(f"create [request: {_masked(request)}]")

        provider = await self._handle.invoke("CreateProvider", request)
        logger.info(f"Created provider: {provider.reference} ({provider.name})")
        return provider

    async def get(self, reference: Optional[str]) -> Provider:
        """Get a provider by reference."""
        request = GetProviderRequest(ref=require(reference, "reference"))
        return await self._handle.invoke("GetProvider", request)

    async def update(self, spec: Union[ProviderUpdate, Mapping[str, Any]]) -> Provider:
        """
        Update a provider with only the fields present in ``spec``.

        The current record is fetched first and the present fields are laid
        over it before sending. This is not atomic: a change made elsewhere
        between the fetch and the update is overwritten.
        """
        data = _coerce(ProviderUpdate, spec)
        logger.debug(f"update [reference: {data.reference}, fields: {sorted(data.changes())}]")

        current = await self.get(data.reference)
        request = UpdateProviderRequest(provider=data.merge(current))

        provider = await self._handle.invoke("UpdateProvider", request)
        logger.info(f"Updated provider: {provider.reference}")
        return provider

    async def list(
        self, query: Union[ListProvidersRequest, Mapping[str, Any], None] = None
    ) -> ListProvidersResponse:
        """List one page of providers. Paging parameters are passed through as given."""
        request = _coerce(ListProvidersRequest, query)
        logger.debug(f"list [request: {_masked(request)}]")
        return await self._handle.invoke("ListProviders", request)

    async def iter_providers(
        self, page_size: Optional[int] = None, view: Optional[Union[str, int]] = None
    ) -> AsyncIterator[Provider]:
        """
        Yield every provider, following page tokens until the last page.

        Stops early if the server hands back a token it already returned.
        """
        page_token = None
        seen_tokens: set[str] = set()
        while True:
            page = await self.list(
                ListProvidersRequest(page_size=page_size, page_token=page_token, view=view)
            )
            for provider in page.providers:
                yield provider
            page_token = page.next_page_token
            if not page_token:
                break
            if page_token in seen_tokens:
                logger.warning(f"Page token repeated, stopping iteration: {page_token}")
                break
            seen_tokens.add(page_token)

    async def delete(self, reference: Optional[str]) -> None:
        """
        Delete a provider.

        The remote system refuses with FailedPreconditionError while agents
        still reference the provider.
        """
        request = DeleteProviderRequest(ref=require(reference, "reference"))
        await self._handle.invoke("DeleteProvider", request)
        logger.info(f"Deleted provider: {reference}")
