"""Client stub for the remote Providers service."""

import grpc

from ..models import (
    CreateProviderRequest,
    DeleteProviderRequest,
    Empty,
    GetProviderRequest,
    ListProvidersRequest,
    ListProvidersResponse,
    Message,
    Provider,
    UpdateProviderRequest,
)

# RPC name -> (request type, response type)
METHODS: dict[str, tuple[type[Message], type[Message]]] = {
    "CreateProvider": (CreateProviderRequest, Provider),
    "GetProvider": (GetProviderRequest, Provider),
    "UpdateProvider": (UpdateProviderRequest, Provider),
    "ListProviders": (ListProvidersRequest, ListProvidersResponse),
    "DeleteProvider": (DeleteProviderRequest, Empty),
}


def serialize(message: Message) -> bytes:
    """Encode a message using wire field names, leaving unset fields out."""
    return message.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


def method_path(service_name: str, method: str) -> str:
    return f"/{service_name}/{method}"


class ProvidersStub:
    """Binds one unary-unary callable per Providers RPC on a channel."""

    def __init__(self, channel: grpc.aio.Channel, service_name: str):
        for method, (_, response_type) in METHODS.items():
            callable_ = channel.unary_unary(
                method_path(service_name, method),
                request_serializer=serialize,
                response_deserializer=response_type.model_validate_json,
            )
            setattr(self, method, callable_)
