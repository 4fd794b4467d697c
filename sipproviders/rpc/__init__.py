"""RPC channel and stub plumbing."""

from .channel import ServiceHandle, build_metadata, create_channel
from .stub import METHODS, ProvidersStub, serialize

__all__ = ["ServiceHandle", "build_metadata", "create_channel", "METHODS", "ProvidersStub", "serialize"]
