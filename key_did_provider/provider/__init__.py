"""DID provider request handling."""

from .base import DIDProvider
from .dispatcher import RequestDispatcher
from .ed25519 import Ed25519Provider

__all__ = ["DIDProvider", "Ed25519Provider", "RequestDispatcher"]
