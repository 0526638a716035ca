"""Cryptography functions used by the Ed25519 DID provider."""

import hashlib
import logging
import re
from collections import OrderedDict
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

import nacl.bindings
import nacl.exceptions
import nacl.utils
from marshmallow import ValidationError

from ..utils.jwe import JweEnvelope, JweRecipient, b64url, from_b64url
from .error import DecryptionError, InvalidSeedLengthError, WalletError
from .key_pair import KeyPair
from .util import b64_to_bytes, random_seed

LOGGER = logging.getLogger(__name__)

SEED_LENGTH = nacl.bindings.crypto_sign_SEEDBYTES

JWE_ENC_XC20P = "XC20P"
JWE_ALG_ECDH_ES_XC20PKW = "ECDH-ES+XC20PKW"
JWE_EPK_KTY = "OKP"
JWE_EPK_CRV = "X25519"

XC20P_NONCE_BYTES = nacl.bindings.crypto_aead_xchacha20poly1305_ietf_NPUBBYTES
XC20P_TAG_BYTES = nacl.bindings.crypto_aead_xchacha20poly1305_ietf_ABYTES
XC20P_KEY_BYTES = nacl.bindings.crypto_aead_xchacha20poly1305_ietf_KEYBYTES

HEX_SEED_REGEX = re.compile(r"^[0-9a-fA-F]{64}$")


def validate_seed(seed: Union[str, bytes]) -> bytes:
    """
    Convert a seed parameter to standard format and check length.

    Strings are accepted for configuration values: base64 if padded, hex if
    exactly 64 hex digits, otherwise the raw ASCII text.

    Args:
        seed: The seed to validate

    Returns:
        The validated seed bytes

    Raises:
        InvalidSeedLengthError: If the seed is not exactly 32 bytes long

    """
    if isinstance(seed, str):
        try:
            if "=" in seed:
                seed = b64_to_bytes(seed)
            elif HEX_SEED_REGEX.match(seed):
                seed = bytes.fromhex(seed)
            else:
                seed = seed.encode("ascii")
        except ValueError:
            raise WalletError("Seed value is not valid base64, hex or ASCII") from None
    if isinstance(seed, (bytearray, memoryview)):
        seed = bytes(seed)
    if not isinstance(seed, bytes):
        raise WalletError("Seed value is not a string or bytes")
    if len(seed) != SEED_LENGTH:
        raise InvalidSeedLengthError(
            f"Seed value must be {SEED_LENGTH} bytes in length"
        )
    return seed


def create_ed25519_keypair(seed: bytes = None) -> Tuple[bytes, bytes]:
    """
    Create a public and private ed25519 keypair from a seed value.

    Args:
        seed: Seed for keypair, a random one is used when omitted

    Returns:
        A tuple of (public key, secret key)

    """
    if not seed:
        seed = random_seed()
    pk, sk = nacl.bindings.crypto_sign_seed_keypair(seed)
    return pk, sk


def ed25519_pk_to_curve25519(public_key: bytes) -> bytes:
    """Covert a public Ed25519 key to a public Curve25519 key as bytes."""
    return nacl.bindings.crypto_sign_ed25519_pk_to_curve25519(public_key)


def ed25519_sk_to_curve25519(secret_key: bytes) -> bytes:
    """Covert a 64-byte Ed25519 secret key to a Curve25519 secret key."""
    return nacl.bindings.crypto_sign_ed25519_sk_to_curve25519(secret_key)


def create_x25519_keypair_from_ed25519(
    public_key: bytes, secret_key: bytes
) -> KeyPair:
    """Convert an Ed25519 signing keypair into its X25519 key agreement keypair."""
    return KeyPair(
        ed25519_pk_to_curve25519(public_key), ed25519_sk_to_curve25519(secret_key)
    )


def sign_message_ed25519(message: bytes, secret: bytes) -> bytes:
    """Sign message using a ed25519 private signing key.

    Args:
        message (bytes): The message to sign
        secret (bytes): The private signing key

    Returns:
        bytes: The detached signature

    """
    if len(secret) != nacl.bindings.crypto_sign_SECRETKEYBYTES:
        raise WalletError("Invalid ed25519 secret key length")
    result = nacl.bindings.crypto_sign(message, secret)
    return result[: nacl.bindings.crypto_sign_BYTES]


def verify_signed_message_ed25519(
    message: bytes, signature: bytes, verkey: bytes
) -> bool:
    """
    Verify an ed25519 signed message according to a public verification key.

    Args:
        message: The message to verify
        signature: The signature to verify
        verkey: The verkey to use in verification

    Returns:
        True if verified, else False

    """
    try:
        nacl.bindings.crypto_sign_open(signature + message, verkey)
    except nacl.exceptions.CryptoError:
        return False
    return True


def _length_prefixed(value: bytes) -> bytes:
    return len(value).to_bytes(4, "big") + value


def concat_kdf(
    shared_secret: bytes,
    key_len: int,
    alg: str,
    apu: bytes = b"",
    apv: bytes = b"",
) -> bytes:
    """Derive a key encryption key from an ECDH shared secret.

    Single-round Concat KDF over SHA-256 (RFC 7518 section 4.6.2), so key
    lengths are whole bytes of at most 256 bits.
    """
    if key_len <= 0 or key_len > 256 or key_len % 8:
        raise WalletError(f"Unsupported key length: {key_len}")
    otherinfo = b"".join(
        (
            _length_prefixed(alg.encode("utf-8")),
            _length_prefixed(apu),
            _length_prefixed(apv),
            key_len.to_bytes(4, "big"),
        )
    )
    round_number = (1).to_bytes(4, "big")
    digest = hashlib.sha256(round_number + shared_secret + otherinfo).digest()
    return digest[: key_len // 8]


def xc20p_encrypt(
    message: bytes, key: bytes, aad: Optional[bytes] = None
) -> Tuple[bytes, bytes, bytes]:
    """
    Encrypt with XChaCha20-Poly1305.

    Returns:
        A tuple of (ciphertext, nonce, tag)

    """
    nonce = nacl.utils.random(XC20P_NONCE_BYTES)
    output = nacl.bindings.crypto_aead_xchacha20poly1305_ietf_encrypt(
        message, aad, nonce, key
    )
    return output[:-XC20P_TAG_BYTES], nonce, output[-XC20P_TAG_BYTES:]


def xc20p_decrypt(
    ciphertext: bytes, tag: bytes, nonce: bytes, key: bytes, aad: Optional[bytes] = None
) -> bytes:
    """Decrypt and authenticate XChaCha20-Poly1305 output."""
    return nacl.bindings.crypto_aead_xchacha20poly1305_ietf_decrypt(
        ciphertext + tag, aad, nonce, key
    )


def _wrap_cek(cek: bytes, recipient_pk: bytes, kid: str = None) -> JweRecipient:
    epk_pk, epk_sk = nacl.bindings.crypto_box_keypair()
    shared = nacl.bindings.crypto_scalarmult(epk_sk, recipient_pk)
    kek = concat_kdf(shared, 256, JWE_ALG_ECDH_ES_XC20PKW)
    enc_cek, nonce, tag = xc20p_encrypt(cek, kek)
    header = OrderedDict(
        [
            ("alg", JWE_ALG_ECDH_ES_XC20PKW),
            ("iv", b64url(nonce)),
            ("tag", b64url(tag)),
            ("epk", {"kty": JWE_EPK_KTY, "crv": JWE_EPK_CRV, "x": b64url(epk_pk)}),
        ]
    )
    if kid:
        header["kid"] = kid
    return JweRecipient(encrypted_key=enc_cek, header=header)


def x25519_encrypt_jwe(
    cleartext: bytes,
    to_keys: Sequence[bytes],
    protected: Mapping[str, Any] = None,
    aad: bytes = None,
    kids: Sequence[Optional[str]] = None,
) -> dict:
    """
    Encrypt cleartext to one or more X25519 public keys as a general JSON JWE.

    Args:
        cleartext: The bytes to encrypt
        to_keys: X25519 public keys of the recipients
        protected: Extra protected header values
        aad: Optional additional authenticated data
        kids: Optional key identifiers, one per recipient

    Returns:
        The JWE as a JSON-compatible mapping

    """
    if not to_keys:
        raise WalletError("No message recipients")
    kids = list(kids or [None] * len(to_keys))
    if len(kids) != len(to_keys):
        raise WalletError("Mismatched recipient key identifiers")

    cek = nacl.utils.random(XC20P_KEY_BYTES)
    wrapper = JweEnvelope()
    for target_pk, kid in zip(to_keys, kids):
        wrapper.add_recipient(_wrap_cek(cek, target_pk, kid))

    headers = OrderedDict(
        (k, v) for k, v in (protected or {}).items() if k not in ("alg", "enc")
    )
    headers["enc"] = JWE_ENC_XC20P
    wrapper.set_protected(headers)
    wrapper.aad = aad
    ciphertext, nonce, tag = xc20p_encrypt(cleartext, cek, wrapper.combined_aad)
    wrapper.set_payload(ciphertext, nonce, tag, aad)
    return dict(wrapper.serialize())


def _unwrap_cek(recipient: JweRecipient, secret_key: bytes) -> Optional[bytes]:
    header = recipient.header
    if header.get("alg") != JWE_ALG_ECDH_ES_XC20PKW:
        return None
    epk = header.get("epk")
    if not isinstance(epk, Mapping) or epk.get("crv") != JWE_EPK_CRV:
        return None
    shared = nacl.bindings.crypto_scalarmult(secret_key, from_b64url(epk["x"]))
    kek = concat_kdf(
        shared,
        256,
        JWE_ALG_ECDH_ES_XC20PKW,
        from_b64url(header["apu"]) if header.get("apu") else b"",
        from_b64url(header["apv"]) if header.get("apv") else b"",
    )
    try:
        return xc20p_decrypt(
            recipient.encrypted_key,
            from_b64url(header["tag"]),
            from_b64url(header["iv"]),
            kek,
        )
    except nacl.exceptions.CryptoError:
        return None


def x25519_decrypt_jwe(
    jwe: Union[Mapping[str, Any], str, bytes], secret_key: bytes
) -> bytes:
    """
    Decrypt a JWE addressed to the holder of an X25519 secret key.

    Every recipient block using ECDH-ES+XC20PKW is tried in order.

    Raises:
        DecryptionError: For any failure, without detail about the cause

    """
    try:
        wrapper = (
            JweEnvelope.from_json(jwe)
            if isinstance(jwe, (str, bytes))
            else JweEnvelope.deserialize(jwe)
        )
        if wrapper.protected.get("enc") != JWE_ENC_XC20P:
            raise DecryptionError("Unsupported content encryption")
        for recipient in wrapper.recipients:
            cek = _unwrap_cek(recipient, secret_key)
            if cek is None:
                continue
            return xc20p_decrypt(
                wrapper.ciphertext, wrapper.tag, wrapper.iv, cek, wrapper.combined_aad
            )
    except DecryptionError:
        raise
    except (
        ValidationError,
        nacl.exceptions.CryptoError,
        KeyError,
        TypeError,
        ValueError,
    ) as err:
        LOGGER.debug("JWE decryption failed: %s", type(err).__name__)
        raise DecryptionError("Failed to decrypt") from err
    raise DecryptionError("Failed to decrypt")
