from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel

from .contracts import TokenConfig
from .errors import ConfigError

DEFAULT_API_BASE_URL = "https://api.uat.payglocal.in"


class GlocalSettings(BaseModel):
    """Merchant settings used to build a :class:`TokenConfig`."""

    merchant_id: str = ""
    public_key_id: str = ""
    private_key_id: str = ""
    public_key_path: str = os.path.join("keys", "payglocal_public_key.pem")
    private_key_path: str = os.path.join("keys", "payglocal_private_key.pem")
    api_base_url: str = DEFAULT_API_BASE_URL

    def to_token_config(self) -> TokenConfig:
        """Read both PEM files and return the token configuration."""
        return TokenConfig(
            merchant_id=self.merchant_id,
            public_key_id=self.public_key_id,
            private_key_id=self.private_key_id,
            recipient_public_key_pem=_read_pem(self.public_key_path, "public_key_path"),
            sender_private_key_pem=_read_pem(self.private_key_path, "private_key_path"),
        )


def _read_pem(path: str, setting: str) -> str:
    try:
        return Path(path).expanduser().read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(setting, f"could not be read: {exc}") from exc


def load_config(path: Optional[str] = None) -> GlocalSettings:
    """Load merchant settings from YAML and the environment.

    Args:
        path: Optional path to config file. Falls back to GLOCAL_JOSE_CONFIG
            env variable or 'config.yaml' in the current directory.

    Environment overrides: PAYGLOCAL_MERCHANT_ID, PAYGLOCAL_PUBLIC_KEY_ID and
    PAYGLOCAL_PRIVATE_KEY_ID replace the ids whenever they are set;
    PAYGLOCAL_PUBLIC_KEY and PAYGLOCAL_PRIVATE_KEY replace the key paths
    unless blank; PAYGLOCAL_API_BASE_URL replaces the API base URL.
    """

    config_path = path or os.getenv("GLOCAL_JOSE_CONFIG", "config.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = GlocalSettings(**data)
    else:
        config = GlocalSettings()

    for attr, env_name in (
        ("merchant_id", "PAYGLOCAL_MERCHANT_ID"),
        ("public_key_id", "PAYGLOCAL_PUBLIC_KEY_ID"),
        ("private_key_id", "PAYGLOCAL_PRIVATE_KEY_ID"),
    ):
        value = os.getenv(env_name)
        if value is not None:
            setattr(config, attr, value)

    for attr, env_name in (
        ("public_key_path", "PAYGLOCAL_PUBLIC_KEY"),
        ("private_key_path", "PAYGLOCAL_PRIVATE_KEY"),
    ):
        value = os.getenv(env_name)
        if value and value.strip():
            setattr(config, attr, value)

    env_api_url = os.getenv("PAYGLOCAL_API_BASE_URL")
    if env_api_url:
        config.api_base_url = env_api_url
    return config
