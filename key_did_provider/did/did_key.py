"""DID Key class and encoder."""

from ..utils.multiformats import multibase, multicodec
from ..wallet.error import WalletError
from ..wallet.key_type import ED25519, KeyType
from ..wallet.util import b58_to_bytes, bytes_to_b58

DID_KEY_PREFIX = "did:key:"


class DIDKey:
    """DID Key parser and encoder."""

    _key_type: KeyType
    _public_key: bytes

    def __init__(self, public_key: bytes, key_type: KeyType) -> None:
        """Initialize new DIDKey instance."""
        if not isinstance(public_key, bytes) or len(public_key) != key_type.key_length:
            raise WalletError(
                f"{key_type.key_type} public key must be "
                f"{key_type.key_length} bytes in length"
            )
        self._public_key = public_key
        self._key_type = key_type

    @classmethod
    def from_public_key(cls, public_key: bytes, key_type: KeyType) -> "DIDKey":
        """Initialize new DIDKey instance from public key and key type."""
        return cls(public_key, key_type)

    @classmethod
    def from_public_key_b58(cls, public_key: str, key_type: KeyType) -> "DIDKey":
        """Initialize new DIDKey instance from a base58 encoded public key."""
        return cls.from_public_key(b58_to_bytes(public_key), key_type)

    @classmethod
    def from_fingerprint(cls, fingerprint: str) -> "DIDKey":
        """Initialize new DIDKey instance from multibase encoded fingerprint.

        The fingerprint contains both the public key and key type.
        """
        try:
            key_bytes_with_prefix = multibase.decode(fingerprint)
            codec, public_key_bytes = multicodec.unwrap(key_bytes_with_prefix)
        except ValueError as err:
            raise WalletError(f"Invalid did:key fingerprint '{fingerprint}'") from err

        key_type = KeyType.from_multicodec_name(codec.name)
        return cls(public_key_bytes, key_type)

    @classmethod
    def from_did(cls, did: str) -> "DIDKey":
        """Initialize a new DIDKey instance from a fully qualified did:key string."""
        base_did = did.split("#")[0]
        if not base_did.startswith(DID_KEY_PREFIX):
            raise WalletError(f"Not a did:key DID: '{did}'")
        return cls.from_fingerprint(base_did[len(DID_KEY_PREFIX) :])

    @property
    def prefixed_public_key(self) -> bytes:
        """Getter for multicodec prefixed public key."""
        return multicodec.wrap(self.key_type.multicodec_name, self.public_key)

    @property
    def fingerprint(self) -> str:
        """Getter for did key fingerprint."""
        return multibase.encode(self.prefixed_public_key, "base58btc")

    @property
    def did(self) -> str:
        """Getter for full did:key string."""
        return f"{DID_KEY_PREFIX}{self.fingerprint}"

    @property
    def public_key(self) -> bytes:
        """Getter for public key."""
        return self._public_key

    @property
    def public_key_b58(self) -> str:
        """Getter for base58 encoded public key."""
        return bytes_to_b58(self.public_key)

    @property
    def key_type(self) -> KeyType:
        """Getter for key type."""
        return self._key_type

    @property
    def key_id(self) -> str:
        """Getter for key id."""
        return f"{self.did}#{self.fingerprint}"


def encode_did(public_key: bytes) -> str:
    """Encode a raw Ed25519 public key as a did:key DID."""
    return DIDKey.from_public_key(public_key, ED25519).did
