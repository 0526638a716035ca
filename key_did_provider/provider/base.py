"""DID provider interface."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Mapping

from ..wallet.key_pair import KeyPair


class DIDProvider(ABC):
    """Capability interface of objects answering DID provider requests."""

    is_did_provider: ClassVar[bool] = True

    @property
    @abstractmethod
    def did(self) -> str:
        """The DID controlled by this provider."""

    @property
    @abstractmethod
    def signing_keypair(self) -> KeyPair:
        """Ed25519 keypair used to sign."""

    @property
    @abstractmethod
    def encryption_keypair(self) -> KeyPair:
        """X25519 keypair used to decrypt."""

    @abstractmethod
    async def send(self, request: Mapping[str, Any]) -> Mapping[str, Any]:
        """Answer a single request envelope with a response envelope."""
