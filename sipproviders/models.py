"""Pydantic models for providers and their RPC envelopes."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TRANSPORT = "tcp"
DEFAULT_EXPIRES = 3600


class Message(BaseModel):
    """Base for all values sent over or received from the wire."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Provider(Message):
    """A SIP trunk provider registration."""

    reference: Optional[str] = Field(None, alias="ref", description="Assigned by the remote system")
    name: Optional[str] = Field(None, description="Display name")
    username: Optional[str] = Field(None, description="Trunk username, unset for static IP auth")
    secret: Optional[str] = Field(None, description="Trunk password, unset for static IP auth")
    host: Optional[str] = Field(None, description="Hostname or IP of the provider")
    transport: Optional[str] = Field(None, description="SIP transport")
    expires: Optional[int] = Field(None, description="Registration expiration in seconds")


class ProviderCreate(Message):
    """Input for creating a provider."""

    name: str = Field(..., min_length=1, description="Display name")
    username: Optional[str] = None
    secret: Optional[str] = None
    host: str = Field(..., min_length=1, description="Hostname or IP of the provider")
    transport: Optional[str] = None
    expires: Optional[int] = None

    def to_provider(self) -> Provider:
        """Build the provider to send, resolving unset fields to their defaults."""
        return Provider(
            name=self.name,
            username=self.username,
            secret=self.secret,
            host=self.host,
            transport=DEFAULT_TRANSPORT if self.transport is None else self.transport,
            expires=DEFAULT_EXPIRES if self.expires is None else self.expires,
        )


class ProviderUpdate(Message):
    """Input for updating a provider (all fields but the reference optional)."""

    reference: str = Field(..., alias="ref", min_length=1)
    name: Optional[str] = None
    username: Optional[str] = None
    secret: Optional[str] = None
    host: Optional[str] = None
    transport: Optional[str] = None
    expires: Optional[int] = None

    def changes(self) -> dict:
        """Fields to overwrite on the stored provider."""
        return self.model_dump(exclude={"reference"}, exclude_none=True)

    def merge(self, current: Provider) -> Provider:
        """Apply the present fields on top of ``current``."""
        return current.model_copy(update=self.changes())


class CreateProviderRequest(Message):
    """Envelope for CreateProvider."""

    provider: Provider


class GetProviderRequest(Message):
    """Envelope for GetProvider."""

    ref: str


class UpdateProviderRequest(Message):
    """Envelope for UpdateProvider, carrying the merged provider."""

    provider: Provider


class ListProvidersRequest(Message):
    """Page selection for listing providers, passed through unmodified."""

    page_size: Optional[int] = Field(None, alias="pageSize")
    page_token: Optional[Union[str, int]] = Field(None, alias="pageToken")
    view: Optional[Union[str, int]] = None  # View name or enum number


class ListProvidersResponse(Message):
    """One page of providers."""

    providers: list[Provider] = Field(default_factory=list)
    next_page_token: Optional[str] = Field(None, alias="nextPageToken")


class DeleteProviderRequest(Message):
    """Envelope for DeleteProvider."""

    ref: str


class Empty(Message):
    """Empty response, e.g. from DeleteProvider."""
    pass
