from unittest import TestCase

import pytest

from ...provider.ed25519 import Ed25519Provider
from ..base import ConfigError
from ..provider import provider_config
from ..settings import Settings

SEED = "testseed000000000000000000000001"
DID = "did:key:z6Mkgg342Ycpuk263R9d8Aq6MUaxPn1DDeHyGo38EefXmgDL"


class TestProviderConfig(TestCase):
    def test_provider_config(self):
        provider = provider_config(Settings({"provider.seed": SEED}))
        assert isinstance(provider, Ed25519Provider)
        assert provider.did == DID

    def test_provider_config_hex_seed(self):
        hex_seed = SEED.encode("ascii").hex()
        provider = provider_config(Settings({"provider.seed": hex_seed}))
        assert provider.did == DID

    def test_provider_config_x(self):
        with pytest.raises(ConfigError):
            provider_config(Settings())
        with pytest.raises(ConfigError) as excinfo:
            provider_config(Settings({"provider.seed": "too short"}))
        assert "Invalid seed" in excinfo.value.roll_up
        assert "too short" not in excinfo.value.roll_up
