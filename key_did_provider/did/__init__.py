"""did:key encoding."""

from .did_key import DIDKey, encode_did

__all__ = ["DIDKey", "encode_did"]
