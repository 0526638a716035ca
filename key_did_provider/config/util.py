"""Entrypoint helpers."""

import os

from .base import BaseSettings
from .logging import LoggingConfigurator


def common_config(settings: BaseSettings):
    """Perform common app configuration."""
    # Set up logging
    log_config = settings.get_str("log.config")
    log_level = settings.get_str("log.level") or os.getenv("LOG_LEVEL")
    log_file = settings.get_str("log.file")
    LoggingConfigurator.configure(log_config, log_level, log_file)
