"""Shared fixtures: an in-process Providers service over a real channel."""

from uuid import uuid4

import grpc
import pytest
import pytest_asyncio

from sipproviders.config import Settings
from sipproviders.models import Empty, ListProvidersResponse, Provider
from sipproviders.providers import ProviderClient
from sipproviders.rpc import METHODS, serialize

SERVICE_NAME = "yaps.providers.v1beta1.Providers"


class FakeProvidersService:
    """In-memory Providers service mimicking the SIP proxy API server."""

    def __init__(self):
        self.providers: dict[str, Provider] = {}
        self.agents: dict[str, list[str]] = {}
        self.calls: list[tuple[str, dict]] = []

    def _record(self, method, context):
        self.calls.append((method, dict(context.invocation_metadata() or ())))

    async def _lookup(self, ref, context) -> Provider:
        if not ref:
            await context.abort(grpc.StatusCode.INVALID_ARGUMENT, "ref is required")
        if ref not in self.providers:
            await context.abort(grpc.StatusCode.NOT_FOUND, f"Provider not found: {ref}")
        return self.providers[ref]

    async def CreateProvider(self, request, context):
        self._record("CreateProvider", context)
        provider = request.provider
        if not provider.name or not provider.host:
            await context.abort(grpc.StatusCode.INVALID_ARGUMENT, "name and host are required")
        created = provider.model_copy(update={"reference": uuid4().hex})
        self.providers[created.reference] = created
        return created

    async def GetProvider(self, request, context):
        self._record("GetProvider", context)
        return await self._lookup(request.ref, context)

    async def UpdateProvider(self, request, context):
        self._record("UpdateProvider", context)
        await self._lookup(request.provider.reference, context)
        self.providers[request.provider.reference] = request.provider
        return request.provider

    async def ListProviders(self, request, context):
        self._record("ListProviders", context)
        page_size = request.page_size or 20
        start = int(request.page_token or 0)
        providers = list(self.providers.values())
        end = start + page_size
        return ListProvidersResponse(
            providers=providers[start:end],
            next_page_token=str(end) if end < len(providers) else "",
        )

    async def DeleteProvider(self, request, context):
        self._record("DeleteProvider", context)
        await self._lookup(request.ref, context)
        if self.agents.get(request.ref):
            await context.abort(
                grpc.StatusCode.FAILED_PRECONDITION,
                "Provider has agents; delete them first",
            )
        del self.providers[request.ref]
        return Empty()


def generic_handler(service: FakeProvidersService):
    handlers = {
        method: grpc.unary_unary_rpc_method_handler(
            getattr(service, method),
            request_deserializer=request_type.model_validate_json,
            response_serializer=serialize,
        )
        for method, (request_type, _) in METHODS.items()
    }
    return grpc.method_handlers_generic_handler(SERVICE_NAME, handlers)


@pytest.fixture
def fake_service():
    """Fresh in-memory service per test."""
    return FakeProvidersService()


@pytest_asyncio.fixture
async def endpoint(fake_service):
    """Start the fake service on a free local port."""
    server = grpc.aio.server()
    server.add_generic_rpc_handlers((generic_handler(fake_service),))
    port = server.add_insecure_port("127.0.0.1:0")
    await server.start()

    yield f"127.0.0.1:{port}"

    await server.stop(None)


@pytest.fixture
def settings(endpoint):
    return Settings(
        _env_file=None,
        endpoint=endpoint,
        access_key_id="507f1f77bcf86cd799439011",
        access_key="secret-access-key",
    )


@pytest_asyncio.fixture
async def client(settings):
    """Provider client connected to the fake service."""
    client = ProviderClient(settings=settings)
    yield client
    await client.close()
