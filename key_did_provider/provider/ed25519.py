"""DID provider backed by a single Ed25519 key."""

import logging
import threading
from typing import Any, Mapping

from ..did.did_key import encode_did
from ..wallet.crypto import (
    create_ed25519_keypair,
    create_x25519_keypair_from_ed25519,
    validate_seed,
)
from ..wallet.error import WalletError
from ..wallet.key_pair import KeyPair
from .base import DIDProvider
from .dispatcher import RequestDispatcher

LOGGER = logging.getLogger(__name__)


class Ed25519Provider(DIDProvider):
    """did:key provider for the keypair derived from a 32 byte seed."""

    def __init__(self, seed: bytes, dispatcher: RequestDispatcher = None):
        """Initialize the provider.

        Args:
            seed: Exactly 32 bytes of secret seed material
            dispatcher: Optional dispatcher, defaults to the standard methods

        Raises:
            InvalidSeedLengthError: If the seed is not 32 bytes long

        """
        if not isinstance(seed, (bytes, bytearray, memoryview)):
            raise WalletError("Seed value must be bytes")
        self._seed = validate_seed(bytes(seed))
        self._signing_keypair = KeyPair(*create_ed25519_keypair(self._seed))
        self._encryption_keypair: KeyPair = None
        self._encryption_lock = threading.Lock()
        self._dispatcher = dispatcher or RequestDispatcher()
        LOGGER.debug("Initialized provider for %s", self.did)

    @property
    def did(self) -> str:
        """Accessor for the did:key of the signing public key."""
        return encode_did(self._signing_keypair.public_key)

    @property
    def public_key(self) -> bytes:
        """Accessor for the Ed25519 public key."""
        return self._signing_keypair.public_key

    @property
    def signing_keypair(self) -> KeyPair:
        """Accessor for the Ed25519 signing keypair."""
        return self._signing_keypair

    @property
    def encryption_keypair(self) -> KeyPair:
        """Accessor for the X25519 keypair, converted on first use."""
        if self._encryption_keypair is None:
            with self._encryption_lock:
                if self._encryption_keypair is None:
                    LOGGER.debug("Deriving X25519 keypair for %s", self.did)
                    self._encryption_keypair = create_x25519_keypair_from_ed25519(
                        *self._signing_keypair
                    )
        return self._encryption_keypair

    @property
    def dispatcher(self) -> RequestDispatcher:
        """Accessor for the request dispatcher."""
        return self._dispatcher

    async def send(self, request: Mapping[str, Any]) -> Mapping[str, Any]:
        """Answer a request envelope."""
        return await self._dispatcher.handle(self, request)

    def __repr__(self) -> str:
        """Describe the provider by its DID only."""
        return f"<{self.__class__.__name__} did={self.did}>"
