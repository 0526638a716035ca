"""Key type enum."""

from enum import Enum
from typing import NamedTuple, Optional


class KeySpec(NamedTuple):
    """Key type identifier, multicodec name and prefix."""

    key_type: str
    multicodec_name: str
    multicodec_prefix: bytes
    key_length: int


class KeyType(Enum):
    """KeyType Enum specifying key types with multicodec name."""

    ED25519 = KeySpec("ed25519", "ed25519-pub", b"\xed\x01", 32)
    X25519 = KeySpec("x25519", "x25519-pub", b"\xec\x01", 32)

    @property
    def key_type(self) -> str:
        """Getter for key type identifier."""
        return self.value.key_type

    @property
    def multicodec_name(self) -> str:
        """Getter for multicodec name."""
        return self.value.multicodec_name

    @property
    def multicodec_prefix(self) -> bytes:
        """Getter for multicodec prefix."""
        return self.value.multicodec_prefix

    @property
    def key_length(self) -> int:
        """Getter for the raw public key length."""
        return self.value.key_length

    @classmethod
    def from_multicodec_name(cls, multicodec_name: str) -> Optional["KeyType"]:
        """Get KeyType instance based on multicodec name. Returns None if not found."""
        for key_type in KeyType:
            if key_type.multicodec_name == multicodec_name:
                return key_type

        return None


ED25519 = KeyType.ED25519
X25519 = KeyType.X25519
