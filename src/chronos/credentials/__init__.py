"""Credential resolution: config file, env var and keyring."""

from chronos.credentials.config import ChronosConfig, Favorite, ResolvedConfig, load_config
from chronos.credentials.resolver import CredentialResolver

__all__ = [
    "ChronosConfig",
    "CredentialResolver",
    "Favorite",
    "ResolvedConfig",
    "load_config",
]
