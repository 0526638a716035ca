"""Provider configuration."""

import logging

from ..provider.ed25519 import Ed25519Provider
from ..wallet.crypto import validate_seed
from ..wallet.error import WalletError
from .base import BaseSettings, ConfigError

LOGGER = logging.getLogger(__name__)


def provider_config(settings: BaseSettings) -> Ed25519Provider:
    """Build the provider for the configured seed."""
    seed = settings.get_value("provider.seed")
    if not seed:
        raise ConfigError("No seed configured")
    try:
        provider = Ed25519Provider(validate_seed(seed))
    except WalletError as err:
        raise ConfigError("Invalid seed configured") from err
    LOGGER.info("Configured provider for %s", provider.did)
    return provider
