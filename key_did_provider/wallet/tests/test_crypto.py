import base64
import hashlib
import json
import os

from unittest import TestCase

import nacl.bindings
import pytest

from ...utils.jwe import b64url, from_b64url
from ..error import DecryptionError, InvalidSeedLengthError, WalletError
from ..util import b58_to_bytes, bytes_to_b58, bytes_to_b64
from .. import crypto as test_module

SEED = "testseed000000000000000000000001"
SEED_B64 = bytes_to_b64(SEED.encode("ascii"))
SEED_HEX = SEED.encode("ascii").hex()
VERKEY = "3Dn1SJNPaCXcvvJvSbsFWP2xaCjMom3can8CQNhWrTRx"
X25519_PUBLIC_KEY = "5dTvYHaNaB7mk7iA9LqCJEHG2dGZQsvoi8WGzDRtYEf"
MESSAGE = b"Hello World"


class TestSeeds(TestCase):
    def test_validate_seed(self):
        assert test_module.validate_seed(SEED) == SEED.encode("ascii")
        assert test_module.validate_seed(SEED_B64) == SEED.encode("ascii")
        assert test_module.validate_seed(SEED_HEX) == SEED.encode("ascii")
        assert test_module.validate_seed(SEED.encode("ascii")) == SEED.encode("ascii")
        assert test_module.validate_seed(bytearray(32)) == bytes(32)

    def test_validate_seed_x(self):
        with pytest.raises(WalletError) as excinfo:
            test_module.validate_seed({"bad": "seed"})
        assert "value is not a string or bytes" in str(excinfo.value)

        for bad in ("not=base64!", "testseed00000000000000000000000é"):
            with pytest.raises(WalletError):
                test_module.validate_seed(bad)

        for bad in (f"{SEED}{SEED}", b"", bytes(31), bytes(33)):
            with pytest.raises(InvalidSeedLengthError) as excinfo:
                test_module.validate_seed(bad)
            assert "must be 32 bytes in length" in str(excinfo.value)

    def test_create_keypair(self):
        pk, sk = test_module.create_ed25519_keypair(SEED.encode("ascii"))
        assert bytes_to_b58(pk) == VERKEY
        assert len(sk) == 64
        assert test_module.create_ed25519_keypair(SEED.encode("ascii")) == (pk, sk)

        random_pk, random_sk = test_module.create_ed25519_keypair()
        assert random_pk != pk
        assert len(random_sk) == 64

    def test_convert_keypair(self):
        pk, sk = test_module.create_ed25519_keypair(SEED.encode("ascii"))
        converted = test_module.create_x25519_keypair_from_ed25519(pk, sk)
        assert bytes_to_b58(converted.public_key) == X25519_PUBLIC_KEY
        assert converted.public_key == test_module.ed25519_pk_to_curve25519(pk)
        assert converted.secret_key == test_module.ed25519_sk_to_curve25519(sk)
        assert len(converted.secret_key) == 32
        assert SEED not in repr(converted)


class TestSigning(TestCase):
    def test_sign_verify(self):
        pk, sk = test_module.create_ed25519_keypair(SEED.encode("ascii"))
        signature = test_module.sign_message_ed25519(MESSAGE, sk)
        assert len(signature) == 64
        assert test_module.verify_signed_message_ed25519(MESSAGE, signature, pk)
        assert not test_module.verify_signed_message_ed25519(
            b"other message", signature, pk
        )
        assert not test_module.verify_signed_message_ed25519(
            MESSAGE, signature, b58_to_bytes(X25519_PUBLIC_KEY)
        )

    def test_sign_x_bad_secret(self):
        with pytest.raises(WalletError):
            test_module.sign_message_ed25519(MESSAGE, bytes(32))


class TestConcatKdf(TestCase):
    def test_concat_kdf(self):
        secret = bytes(range(32))
        expected = hashlib.sha256(
            b"\x00\x00\x00\x01"
            + secret
            + b"\x00\x00\x00\x0fECDH-ES+XC20PKW"
            + b"\x00\x00\x00\x00"
            + b"\x00\x00\x00\x00"
            + b"\x00\x00\x01\x00"
        ).digest()
        assert (
            test_module.concat_kdf(secret, 256, test_module.JWE_ALG_ECDH_ES_XC20PKW)
            == expected
        )
        assert test_module.concat_kdf(
            secret, 256, "ECDH-ES+XC20PKW", b"Alice", b"Bob"
        ) != test_module.concat_kdf(secret, 256, "ECDH-ES+XC20PKW")

    def test_concat_kdf_rfc7518_vector(self):
        # RFC 7518 appendix C, ECDH-ES direct agreement for A128GCM
        shared_secret = bytes(
            [
                158, 86, 217, 29, 129, 113, 53, 211, 114, 131, 66, 131, 191, 132,
                38, 156, 251, 49, 110, 163, 218, 128, 106, 72, 246, 218, 167, 121,
                140, 254, 144, 196,
            ]
        )
        derived = test_module.concat_kdf(
            shared_secret, 128, "A128GCM", b"Alice", b"Bob"
        )
        assert b64url(derived) == "VqqN6vgjbSBcIijNcacQGg"

    def test_concat_kdf_x_key_len(self):
        for key_len in (0, 100, 512):
            with pytest.raises(WalletError):
                test_module.concat_kdf(bytes(32), key_len, "ECDH-ES+XC20PKW")


class TestJweEncryption(TestCase):
    def setUp(self):
        pk, sk = test_module.create_ed25519_keypair(SEED.encode("ascii"))
        self.keypair = test_module.create_x25519_keypair_from_ed25519(pk, sk)

    def test_round_trip(self):
        cleartext = os.urandom(123)
        jwe = test_module.x25519_encrypt_jwe(cleartext, [self.keypair.public_key])

        protected = json.loads(from_b64url(jwe["protected"]))
        assert protected == {"enc": "XC20P"}
        header = jwe["recipients"][0]["header"]
        assert header["alg"] == "ECDH-ES+XC20PKW"
        assert header["epk"]["crv"] == "X25519"
        assert len(from_b64url(jwe["iv"])) == 24

        assert (
            test_module.x25519_decrypt_jwe(jwe, self.keypair.secret_key) == cleartext
        )
        assert (
            test_module.x25519_decrypt_jwe(json.dumps(jwe), self.keypair.secret_key)
            == cleartext
        )

    def test_round_trip_aad_and_kids(self):
        other = os.urandom(32)
        jwe = test_module.x25519_encrypt_jwe(
            MESSAGE,
            [other, self.keypair.public_key],
            protected={"alg": "ignored", "typ": "JWM"},
            aad=b"extra",
            kids=["other", "mine"],
        )
        assert json.loads(from_b64url(jwe["protected"])) == {
            "typ": "JWM",
            "enc": "XC20P",
        }
        assert [r["header"]["kid"] for r in jwe["recipients"]] == ["other", "mine"]
        assert jwe["aad"] == b64url(b"extra")
        assert test_module.x25519_decrypt_jwe(jwe, self.keypair.secret_key) == MESSAGE

    def test_encrypt_x(self):
        with pytest.raises(WalletError):
            test_module.x25519_encrypt_jwe(MESSAGE, [])
        with pytest.raises(WalletError):
            test_module.x25519_encrypt_jwe(
                MESSAGE, [self.keypair.public_key], kids=["a", "b"]
            )

    def test_decrypt_x_wrong_recipient(self):
        jwe = test_module.x25519_encrypt_jwe(MESSAGE, [os.urandom(32)])
        with pytest.raises(DecryptionError) as excinfo:
            test_module.x25519_decrypt_jwe(jwe, self.keypair.secret_key)
        assert str(excinfo.value) == "Failed to decrypt"

    def test_decrypt_x_tampered(self):
        jwe = test_module.x25519_encrypt_jwe(MESSAGE, [self.keypair.public_key])
        ciphertext = bytearray(from_b64url(jwe["ciphertext"]))
        ciphertext[0] ^= 0x01
        tampered = {**jwe, "ciphertext": b64url(bytes(ciphertext))}
        with pytest.raises(DecryptionError):
            test_module.x25519_decrypt_jwe(tampered, self.keypair.secret_key)

        tampered = {**jwe, "protected": b64url(json.dumps({"enc": "XC20P"}))}
        with pytest.raises(DecryptionError):
            test_module.x25519_decrypt_jwe(tampered, self.keypair.secret_key)

    def test_decrypt_x_malformed(self):
        jwe = test_module.x25519_encrypt_jwe(MESSAGE, [self.keypair.public_key])
        for bad in (
            "not json",
            {},
            {**jwe, "protected": b64url(json.dumps({"enc": "A256GCM"}))},
            {**jwe, "iv": "a"},
            {
                **jwe,
                "recipients": [
                    {
                        "encrypted_key": jwe["recipients"][0]["encrypted_key"],
                        "header": {
                            **jwe["recipients"][0]["header"],
                            "epk": {"kty": "OKP", "crv": "X25519"},
                        },
                    }
                ],
            },
            {
                **jwe,
                "recipients": [
                    {
                        "encrypted_key": jwe["recipients"][0]["encrypted_key"],
                        "header": {**jwe["recipients"][0]["header"], "alg": "RSA1_5"},
                    }
                ],
            },
        ):
            with pytest.raises(DecryptionError):
                test_module.x25519_decrypt_jwe(bad, self.keypair.secret_key)


def _b64url(value: bytes) -> str:
    return base64.urlsafe_b64encode(value).decode("ascii").rstrip("=")


def did_jwt_xc20p_jwe(
    cleartext: bytes, recipient_pk: bytes, ephemeral_sk: bytes, aad: bytes = None
) -> dict:
    """Build a JWE byte for byte the way did-jwt's x25519Encrypter and createJWE do.

    Written against primitives only, with a fixed ephemeral key and fixed nonces.
    """
    protected = _b64url(b'{"enc":"XC20P"}')
    cek = bytes(range(32))
    content_nonce = bytes(range(100, 124))
    key_nonce = bytes(range(200, 224))

    epk = nacl.bindings.crypto_scalarmult_base(ephemeral_sk)
    shared = nacl.bindings.crypto_scalarmult(ephemeral_sk, recipient_pk)
    kek = hashlib.sha256(
        b"\x00\x00\x00\x01"
        + shared
        + b"\x00\x00\x00\x0f"
        + b"ECDH-ES+XC20PKW"
        + b"\x00\x00\x00\x00"
        + b"\x00\x00\x00\x00"
        + b"\x00\x00\x01\x00"
    ).digest()
    sealed_cek = nacl.bindings.crypto_aead_xchacha20poly1305_ietf_encrypt(
        cek, None, key_nonce, kek
    )

    full_aad = protected if aad is None else f"{protected}.{_b64url(aad)}"
    sealed = nacl.bindings.crypto_aead_xchacha20poly1305_ietf_encrypt(
        cleartext, full_aad.encode("ascii"), content_nonce, cek
    )
    jwe = {
        "protected": protected,
        "iv": _b64url(content_nonce),
        "ciphertext": _b64url(sealed[:-16]),
        "tag": _b64url(sealed[-16:]),
        "recipients": [
            {
                "encrypted_key": _b64url(sealed_cek[:-16]),
                "header": {
                    "alg": "ECDH-ES+XC20PKW",
                    "iv": _b64url(key_nonce),
                    "tag": _b64url(sealed_cek[-16:]),
                    "epk": {"kty": "OKP", "crv": "X25519", "x": _b64url(epk)},
                },
            }
        ],
    }
    if aad is not None:
        jwe["aad"] = _b64url(aad)
    return jwe


class TestJweDecryptExternal(TestCase):
    def setUp(self):
        pk, sk = test_module.create_ed25519_keypair(SEED.encode("ascii"))
        self.keypair = test_module.create_x25519_keypair_from_ed25519(pk, sk)
        self.ephemeral_sk = bytes([7] * 32)

    def test_decrypt_fixed_jwe(self):
        jwe = did_jwt_xc20p_jwe(
            b"fixed cleartext for a fixed seed",
            b58_to_bytes(X25519_PUBLIC_KEY),
            self.ephemeral_sk,
        )
        assert (
            test_module.x25519_decrypt_jwe(jwe, self.keypair.secret_key)
            == b"fixed cleartext for a fixed seed"
        )

    def test_decrypt_fixed_jwe_with_aad(self):
        jwe = did_jwt_xc20p_jwe(
            MESSAGE, self.keypair.public_key, self.ephemeral_sk, aad=b"context"
        )
        assert test_module.x25519_decrypt_jwe(jwe, self.keypair.secret_key) == MESSAGE

        jwe["aad"] = _b64url(b"other context")
        with pytest.raises(DecryptionError):
            test_module.x25519_decrypt_jwe(jwe, self.keypair.secret_key)
