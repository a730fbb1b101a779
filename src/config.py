"""
Configuration module for the NetBox reconciler.

Loads configuration from environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class NetBoxConfig:
    """Inventory API connection configuration."""

    url: str = "http://localhost:8000"
    token: str = field(default="", repr=False)  # Never log token
    verify_ssl: bool = True
    timeout: int = 30  # seconds, per request
    page_limit: int = 50

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        url = os.getenv("NETBOX_URL", "http://localhost:8000").rstrip("/")
        if not url.startswith(("http://", "https://")):
            raise ValueError(
                f"NETBOX_URL must be an http(s) URL, got '{url}'."
            )

        return cls(
            url=url,
            token=os.getenv("NETBOX_TOKEN", ""),
            verify_ssl=os.getenv("NETBOX_VERIFY_SSL", "true").lower() == "true",
            timeout=int(os.getenv("NETBOX_TIMEOUT", "30")),
            page_limit=int(os.getenv("NETBOX_PAGE_LIMIT", "50")),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        return cls(level=os.getenv("LOG_LEVEL", "INFO").upper())


@dataclass
class Config:
    """Main configuration object."""

    netbox: NetBoxConfig
    logging: LoggingConfig

    @classmethod
    def from_env(cls):
        """Load all configuration from environment variables."""
        return cls(
            netbox=NetBoxConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def default(cls):
        """Return default configuration."""
        return cls(
            netbox=NetBoxConfig(),
            logging=LoggingConfig(),
        )


# Global config instance
config: Optional[Config] = None


def load_config() -> Config:
    """Load configuration (singleton pattern)."""
    global config
    if config is None:
        config = Config.from_env()
    return config


def get_config() -> Config:
    """Get the current configuration."""
    if config is None:
        return load_config()
    return config


def reset_config() -> None:
    """Reset configuration (mainly for testing)."""
    global config
    config = None


def configure_logging(cfg: Optional[LoggingConfig] = None) -> None:
    """Apply the logging configuration to the root logger."""
    cfg = cfg or get_config().logging
    logging.basicConfig(level=cfg.level, format=cfg.format)
