"""Multibase encoding and decoding utilities."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar, Literal, Union

import base58


class MultibaseEncoder(ABC):
    """A single multibase encoding, identified by its prefix character."""

    name: ClassVar[str]
    character: ClassVar[str]

    @abstractmethod
    def encode(self, value: bytes) -> str:
        """Encode bytes without the multibase prefix."""

    @abstractmethod
    def decode(self, value: str) -> bytes:
        """Decode a string stripped of its multibase prefix."""


class Base58BtcEncoder(MultibaseEncoder):
    """Base58 with the bitcoin alphabet."""

    name = "base58btc"
    character = "z"

    def encode(self, value: bytes) -> str:
        """Encode a byte string as base58btc."""
        return base58.b58encode(value).decode("ascii")

    def decode(self, value: str) -> bytes:
        """Decode a base58btc string."""
        return base58.b58decode(value)


class Encoding(Enum):
    """Supported multibase encodings."""

    base58btc = Base58BtcEncoder()

    @classmethod
    def from_name(cls, name: str) -> MultibaseEncoder:
        """Look up an encoder by name."""
        for encoding in cls:
            if encoding.value.name == name:
                return encoding.value
        raise ValueError(f"Unsupported encoding: {name}")

    @classmethod
    def from_character(cls, character: str) -> MultibaseEncoder:
        """Look up an encoder by its prefix character."""
        for encoding in cls:
            if encoding.value.character == character:
                return encoding.value
        raise ValueError(f"Unsupported encoding: {character}")


EncodingStr = Literal["base58btc"]


def encode(value: bytes, encoding: Union[Encoding, EncodingStr]) -> str:
    """Encode bytes as a self-describing multibase string.

    Args:
        value: The byte string to encode
        encoding: The encoding to use, by enum member or name

    Returns:
        The prefix character followed by the encoded value
    """
    if isinstance(encoding, str):
        encoder = Encoding.from_name(encoding)
    elif isinstance(encoding, Encoding):
        encoder = encoding.value
    else:
        raise TypeError("encoding must be an Encoding or EncodingStr")

    return encoder.character + encoder.encode(value)


def decode(value: str) -> bytes:
    """Decode a multibase string, selecting the encoding from its first character."""
    if not value:
        raise ValueError("Empty multibase value")
    encoder = Encoding.from_character(value[0])
    return encoder.decode(value[1:])
