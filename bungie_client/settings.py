"""
Initializes the Dynaconf settings object for the bungie_client package.
This module is the single source of truth for all configuration.

Secrets (``api_key``, ``oauth_client_secret``) belong in
``config/.secrets.toml`` or in ``BUNGIE_``-prefixed environment variables,
e.g. ``BUNGIE_API_KEY``.
"""

from pathlib import Path
from dynaconf import Dynaconf

PROJECT_ROOT = Path(__file__).parent.parent

settings = Dynaconf(
    root_path=PROJECT_ROOT,
    settings_files=["config/settings.toml"],
    secrets=["config/.secrets.toml"],
    envvar_prefix="BUNGIE",
)
