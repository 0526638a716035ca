"""Multicodec wrap and unwrap functions."""

from enum import Enum
from typing import Literal, NamedTuple, Optional, Tuple, Union


class Multicodec(NamedTuple):
    """A multicodec name and its varint-encoded code."""

    name: str
    code: bytes


class SupportedCodecs(Enum):
    """Key codecs this package knows how to tag."""

    ed25519_pub = Multicodec("ed25519-pub", b"\xed\x01")
    x25519_pub = Multicodec("x25519-pub", b"\xec\x01")

    @classmethod
    def by_name(cls, name: str) -> Multicodec:
        """Get multicodec by name."""
        for codec in cls:
            if codec.value.name == name:
                return codec.value
        raise ValueError(f"Unsupported multicodec: {name}")

    @classmethod
    def for_data(cls, data: bytes) -> Multicodec:
        """Get the multicodec whose code prefixes the data."""
        for codec in cls:
            if data.startswith(codec.value.code):
                return codec.value
        raise ValueError("Unsupported multicodec")


MulticodecStr = Literal["ed25519-pub", "x25519-pub"]


def multicodec(name: str) -> Multicodec:
    """Get multicodec by name."""
    return SupportedCodecs.by_name(name)


def wrap(codec: Union[Multicodec, MulticodecStr], data: bytes) -> bytes:
    """Prefix data with a multicodec code."""
    if isinstance(codec, str):
        codec = SupportedCodecs.by_name(codec)
    elif not isinstance(codec, Multicodec):
        raise TypeError("codec must be Multicodec or MulticodecStr")

    return codec.code + data


def unwrap(
    data: bytes, codec: Optional[Multicodec] = None
) -> Tuple[Multicodec, bytes]:
    """Split multicodec-prefixed data into its codec and payload."""
    if not codec:
        codec = SupportedCodecs.for_data(data)
    elif not data.startswith(codec.code):
        raise ValueError(f"Data is not prefixed with {codec.name}")
    return codec, data[len(codec.code) :]
