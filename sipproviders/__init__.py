"""Async client for SIP trunk providers."""

from .errors import (
    FailedPreconditionError,
    InvalidArgumentError,
    NotFoundError,
    ProviderError,
    UnavailableError,
)
from .models import ListProvidersRequest, ListProvidersResponse, Provider, ProviderCreate, ProviderUpdate
from .providers import ProviderClient

__all__ = [
    "ProviderClient",
    "Provider",
    "ProviderCreate",
    "ProviderUpdate",
    "ListProvidersRequest",
    "ListProvidersResponse",
    "ProviderError",
    "InvalidArgumentError",
    "NotFoundError",
    "FailedPreconditionError",
    "UnavailableError",
]
