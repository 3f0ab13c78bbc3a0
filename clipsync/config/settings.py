"""Configuration settings for clipsync."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Key derivation cost parameters live in clipsync.vault.crypto and are
# intentionally not configurable here.


@dataclass
class ClipsyncConfig:
    """Runtime settings for the encryption core and CLI."""

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    rich_logging: bool = True

    # Secret store
    lock_timeout_seconds: float = 5.0

    # OS keyring identifiers
    keyring_service: str = "clipboard-sync"
    keyring_account: str = "default"

    @classmethod
    def from_env(cls) -> "ClipsyncConfig":
        """
        Load configuration from environment variables.

        Environment variables:
            CLIPSYNC_LOG_LEVEL: Log level (default: INFO)
            CLIPSYNC_LOG_FILE: Optional log file path
            CLIPSYNC_PLAIN_LOGS: Log without Rich formatting when set to 1, true or yes
            CLIPSYNC_LOCK_TIMEOUT: Secret store lock timeout in seconds (default: 5)
            CLIPSYNC_KEYRING_SERVICE: Keyring service name (default: clipboard-sync)
            CLIPSYNC_KEYRING_ACCOUNT: Keyring account name (default: default)
        """
        config = cls()

        if level := os.getenv("CLIPSYNC_LOG_LEVEL"):
            config.log_level = level

        if log_file := os.getenv("CLIPSYNC_LOG_FILE"):
            config.log_file = Path(log_file)

        if plain := os.getenv("CLIPSYNC_PLAIN_LOGS"):
            config.rich_logging = plain.lower() not in ("1", "true", "yes")

        if timeout := os.getenv("CLIPSYNC_LOCK_TIMEOUT"):
            config.lock_timeout_seconds = float(timeout)

        if service := os.getenv("CLIPSYNC_KEYRING_SERVICE"):
            config.keyring_service = service

        if account := os.getenv("CLIPSYNC_KEYRING_ACCOUNT"):
            config.keyring_account = account

        return config


# Global configuration instance
_config: Optional[ClipsyncConfig] = None


def get_config() -> ClipsyncConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ClipsyncConfig.from_env()
    return _config


def configure(config: Optional[ClipsyncConfig]) -> None:
    """Set the global configuration instance (None reloads from env on next use)."""
    global _config
    _config = config
