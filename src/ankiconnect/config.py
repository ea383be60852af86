from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = "config.yaml"
DEFAULT_URL = "http://localhost:8765/"
MIN_VERSION = 6


class AnkiConnectConfig(BaseModel):
    """Connection settings for a local AnkiConnect endpoint.

    - url: base URL AnkiConnect listens on
    - timeout: per-request timeout in seconds
    - min_version: API version sent with every request and required from the server
    - api_key: optional key matching AnkiConnect's ``apiKey`` setting
    """

    url: str = Field(default=DEFAULT_URL, description="AnkiConnect endpoint URL")
    timeout: float = Field(default=60.0, gt=0, description="Request timeout in seconds")
    min_version: int = Field(default=MIN_VERSION, ge=1, description="Minimum supported AnkiConnect API version")
    api_key: str | None = Field(default=None, description="Optional AnkiConnect API key")


def load_config(config_path: str | Path | None = None) -> AnkiConnectConfig:
    """Load client configuration from YAML and the environment.

    The file is expected to hold an ``ankiconnect`` section. When no path is given
    and ./config.yaml does not exist, defaults are used. ANKI_CONNECT_URL and
    ANKI_CONNECT_API_KEY override values from the file.

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        ValidationError: If the config is invalid
    """
    data: dict = {}
    config_file = Path(config_path) if config_path is not None else Path(DEFAULT_CONFIG_PATH)

    if config_file.exists():
        with open(config_file, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}
        if not isinstance(yaml_data, dict):
            raise ValueError(f"Top level of {config_file} must be a mapping")
        section = yaml_data.get("ankiconnect") or {}
        if not isinstance(section, dict):
            raise ValueError(f"'ankiconnect' section in {config_file} must be a mapping")
        data.update(section)
    elif config_path is not None:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    env_url = os.getenv("ANKI_CONNECT_URL")
    if env_url:
        data["url"] = env_url
    env_key = os.getenv("ANKI_CONNECT_API_KEY")
    if env_key:
        data["api_key"] = env_key

    return AnkiConnectConfig.model_validate(data)
