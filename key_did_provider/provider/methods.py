"""Handlers for the methods a DID provider answers."""

import logging
import time
from typing import Any, Awaitable, Callable, Mapping

from marshmallow import Schema, ValidationError

from ..wallet.crypto import x25519_decrypt_jwe
from ..wallet.error import DecryptionError
from ..wallet.jws import create_jws, kid_for_did, to_general_jws
from ..wallet.util import bytes_to_b64
from .base import DIDProvider
from .error import DECRYPTION_FAILED, INVALID_PARAMS, RpcError
from .models import (
    AuthenticateParamsSchema,
    CreateJWSParamsSchema,
    DecryptJWEParamsSchema,
)

LOGGER = logging.getLogger(__name__)

AUTHENTICATE_TTL = 600

MethodHandler = Callable[[DIDProvider, Any], Awaitable[Any]]


def load_params(schema: Schema, params: Any) -> Mapping[str, Any]:
    """Validate request params against a method's schema."""
    try:
        return schema.load(params if params is not None else {})
    except ValidationError as err:
        LOGGER.debug("Invalid params: %s", err.messages)
        raise RpcError(INVALID_PARAMS) from err


def sign(
    provider: DIDProvider,
    payload: Any,
    did: str,
    protected: Mapping[str, Any] = None,
) -> str:
    """Sign a payload, identifying the signing key by the DID's key id."""
    headers = {**(protected or {}), "kid": kid_for_did(did)}
    return create_jws(payload, provider.signing_keypair.secret_key, headers)


async def did_create_jws(provider: DIDProvider, params: Any) -> Mapping[str, Any]:
    """Create a compact JWS over the payload."""
    args = load_params(CreateJWSParamsSchema(), params)
    jws = sign(provider, args["payload"], args["did"], args["protected"])
    return {"jws": jws}


async def did_decrypt_jwe(provider: DIDProvider, params: Any) -> Mapping[str, Any]:
    """Decrypt a JWE addressed to the provider's key agreement key."""
    args = load_params(DecryptJWEParamsSchema(), params)
    try:
        cleartext = x25519_decrypt_jwe(
            args["jwe"], provider.encryption_keypair.secret_key
        )
    except DecryptionError as err:
        raise RpcError(DECRYPTION_FAILED) from err
    return {"cleartext": bytes_to_b64(cleartext)}


async def did_authenticate(provider: DIDProvider, params: Any) -> Mapping[str, Any]:
    """Sign a short-lived proof of control of the DID for an audience."""
    args = load_params(AuthenticateParamsSchema(), params)
    did = provider.did
    payload = {
        "did": did,
        "aud": args["aud"],
        "nonce": args["nonce"],
        "paths": args["paths"],
        "exp": int(time.time()) + AUTHENTICATE_TTL,
    }
    return to_general_jws(sign(provider, payload, did))


DEFAULT_METHODS: Mapping[str, MethodHandler] = {
    "did_authenticate": did_authenticate,
    "did_createJWS": did_create_jws,
    "did_decryptJWE": did_decrypt_jwe,
}
