"""Raw key pair container."""

from typing import NamedTuple


class KeyPair(NamedTuple):
    """A public key and the secret key it was derived with."""

    public_key: bytes
    secret_key: bytes

    def __repr__(self) -> str:
        """Keep secret material out of reprs and logs."""
        return f"<KeyPair public_key={self.public_key.hex()}>"
