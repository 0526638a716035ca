"""Operations supporting compact JWS creation and verification."""

import json
import logging
from typing import Any, Mapping, Sequence, Tuple, Union

from ..utils.multiformats import multibase, multicodec
from .crypto import sign_message_ed25519, verify_signed_message_ed25519
from .error import JWSVerificationError
from .util import b58_to_bytes, b64_to_bytes, bytes_to_b64

LOGGER = logging.getLogger(__name__)

JWS_ALG_EDDSA = "EdDSA"


def canonical_json(value: Any) -> bytes:
    """Serialize a JSON value with sorted keys and no insignificant whitespace."""
    return json.dumps(
        value, sort_keys=True, separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


def dict_to_b64(value: Any) -> str:
    """Encode a JSON value as an unpadded base64url string."""
    return bytes_to_b64(canonical_json(value), urlsafe=True, pad=False)


def b64_to_dict(value: str) -> Mapping[str, Any]:
    """Decode a JSON value from a base64url encoded string."""
    return json.loads(b64_to_bytes(value, urlsafe=True))


def kid_for_did(did: str) -> str:
    """Build the key id of a DID, whose fragment repeats the method-specific id.

    Only the first segment of the method-specific id is used.
    """
    base_did = did.split("#")[0]
    segments = base_did.split(":")
    ident = segments[2] if len(segments) > 2 else segments[-1]
    return f"{base_did}#{ident}"


def create_jws(
    payload: Union[Mapping[str, Any], Sequence[Any], str, int, float, bool, None],
    secret_key: bytes,
    protected: Mapping[str, Any] = None,
) -> str:
    """Create a compact JWS signed with an Ed25519 secret key.

    A string payload is taken to be already base64url encoded, any other JSON
    value is serialized with sorted keys.
    """
    headers = {**(protected or {}), "alg": JWS_ALG_EDDSA}
    encoded_headers = dict_to_b64(headers)
    encoded_payload = payload if isinstance(payload, str) else dict_to_b64(payload)
    sig_bytes = sign_message_ed25519(
        f"{encoded_headers}.{encoded_payload}".encode("utf-8"), secret_key
    )
    sig = bytes_to_b64(sig_bytes, urlsafe=True, pad=False)
    return f"{encoded_headers}.{encoded_payload}.{sig}"


def decode_jws(jws: str) -> Tuple[Mapping[str, Any], str, bytes]:
    """Split a compact JWS into its header, encoded payload and signature."""
    try:
        encoded_headers, encoded_payload, encoded_signature = jws.split(".")
        headers = b64_to_dict(encoded_headers)
        signature = b64_to_bytes(encoded_signature, urlsafe=True)
    except (ValueError, AttributeError) as err:
        raise JWSVerificationError("Incorrect format JWS") from err
    return headers, encoded_payload, signature


def public_key_material(descriptor: Mapping[str, Any]) -> bytes:
    """Extract raw Ed25519 key bytes from a verification method descriptor."""
    if descriptor.get("publicKeyBase64"):
        return b64_to_bytes(descriptor["publicKeyBase64"])
    if descriptor.get("publicKeyBase58"):
        return b58_to_bytes(descriptor["publicKeyBase58"])
    if descriptor.get("publicKeyHex"):
        return bytes.fromhex(descriptor["publicKeyHex"])
    if descriptor.get("publicKeyMultibase"):
        decoded = multibase.decode(descriptor["publicKeyMultibase"])
        if decoded.startswith(multicodec.multicodec("ed25519-pub").code):
            _, decoded = multicodec.unwrap(decoded)
        return decoded
    raise JWSVerificationError("No supported public key material in descriptor")


def verify_jws(
    jws: str, public_keys: Union[Mapping[str, Any], Sequence[Mapping[str, Any]]]
) -> Mapping[str, Any]:
    """Verify a compact EdDSA JWS against candidate public key descriptors.

    Returns:
        The descriptor whose key produced the signature

    Raises:
        JWSVerificationError: If no descriptor verifies the signature

    """
    if isinstance(public_keys, Mapping):
        public_keys = [public_keys]
    headers, encoded_payload, signature = decode_jws(jws)
    if headers.get("alg") != JWS_ALG_EDDSA:
        raise JWSVerificationError(f"Unsupported JWS algorithm: {headers.get('alg')}")

    signing_input = jws.rsplit(".", 1)[0].encode("utf-8")
    for descriptor in public_keys:
        try:
            verkey = public_key_material(descriptor)
        except (JWSVerificationError, ValueError):
            LOGGER.debug("Skipping descriptor without usable key material")
            continue
        if verify_signed_message_ed25519(signing_input, signature, verkey):
            return descriptor
    raise JWSVerificationError("Signature invalid for JWS")


def to_general_jws(jws: str) -> Mapping[str, Any]:
    """Convert a compact JWS to the general JSON serialization."""
    protected, payload, signature = jws.split(".")
    return {
        "payload": payload,
        "signatures": [{"protected": protected, "signature": signature}],
    }
