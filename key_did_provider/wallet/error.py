"""Wallet-related exceptions."""

from ..core.error import BaseError


class WalletError(BaseError):
    """General wallet exception."""


class InvalidSeedLengthError(WalletError):
    """Seed value is not exactly 32 bytes."""


class DecryptionError(WalletError):
    """A JWE could not be decrypted with the available key material."""


class JWSVerificationError(WalletError):
    """A JWS did not verify against any of the supplied public keys."""
