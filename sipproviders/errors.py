"""Errors raised by the providers client."""

from typing import Optional

import grpc


class ProviderError(Exception):
    """Provider operation error."""

    def __init__(self, message: str, code: Optional[grpc.StatusCode] = None):
        super().__init__(message)
        self.code = code
        self.details = message


class InvalidArgumentError(ProviderError):
    """Missing or malformed required field."""
    pass


class NotFoundError(ProviderError):
    """Provider not found."""
    pass


class FailedPreconditionError(ProviderError):
    """Operation rejected in the current state, e.g. provider still has agents."""
    pass


class UnavailableError(ProviderError):
    """Channel or connection failure."""
    pass


_ERRORS_BY_CODE: dict[grpc.StatusCode, type[ProviderError]] = {
    grpc.StatusCode.INVALID_ARGUMENT: InvalidArgumentError,
    grpc.StatusCode.NOT_FOUND: NotFoundError,
    grpc.StatusCode.FAILED_PRECONDITION: FailedPreconditionError,
    grpc.StatusCode.UNAVAILABLE: UnavailableError,
    grpc.StatusCode.DEADLINE_EXCEEDED: UnavailableError,
}


def from_rpc_error(error: grpc.RpcError) -> ProviderError:
    """Translate a failed RPC into the matching ProviderError."""
    code = error.code()
    details = error.details() or code.name
    return _ERRORS_BY_CODE.get(code, ProviderError)(details, code=code)


def require(value: Optional[str], field: str) -> str:
    """Presence check for required string fields."""
    if not value:
        raise InvalidArgumentError(f"{field} is required", code=grpc.StatusCode.INVALID_ARGUMENT)
    return value
