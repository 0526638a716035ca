"""Ed25519 did:key provider."""

from .did.did_key import encode_did
from .provider import DIDProvider, Ed25519Provider
from .version import __version__

__all__ = ["DIDProvider", "Ed25519Provider", "__version__", "encode_did"]
