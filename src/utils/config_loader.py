"""
Configuration loader for the payment relay
"""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, ValidationError
import logging

logger = logging.getLogger(__name__)


class PaystackConfig(BaseModel):
    """Payment gateway credentials and charge defaults"""

    secret_key: str = ""
    base_url: str = "https://api.paystack.co"
    timeout_seconds: Optional[float] = Field(default=30.0, gt=0)
    currency: str = "KES"
    provider: str = "mpesa"
    default_email: str = "customer@fastcv.app"


class PhoneConfig(BaseModel):
    """Phone normalization settings"""

    country_code: str = Field(default="254", pattern=r"^\d{1,4}$")


class ServerConfig(BaseModel):
    """HTTP listener settings"""

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    base_url: str = "http://localhost:3000"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class StoreConfig(BaseModel):
    """In-memory record store settings"""

    record_ttl_seconds: Optional[int] = Field(default=None, ge=1)


class RelayConfig(BaseModel):
    """Complete relay configuration"""

    paystack: PaystackConfig = Field(default_factory=PaystackConfig)
    phone: PhoneConfig = Field(default_factory=PhoneConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    integrations_mode: Literal["real", "live", "mock", "test"] = "real"

    @property
    def use_mock_gateway(self) -> bool:
        return self.integrations_mode in {"mock", "test"}


# (section, key, env var); empty env values are ignored
_ENV_OVERRIDES = [
    ("paystack", "secret_key", "PAYSTACK_SECRET_KEY"),
    ("paystack", "base_url", "PAYSTACK_BASE_URL"),
    ("paystack", "timeout_seconds", "PAYSTACK_TIMEOUT_SECONDS"),
    ("server", "host", "HOST"),
    ("server", "port", "PORT"),
    ("server", "base_url", "BASE_URL"),
]


def apply_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay environment variables onto raw config data (before validation)."""
    data = {k: (dict(v) if isinstance(v, dict) else v) for k, v in config_data.items()}
    for section, key, env_var in _ENV_OVERRIDES:
        value = os.getenv(env_var, "").strip()
        if not value:
            continue
        if not isinstance(data.get(section), dict):
            data[section] = {}
        data[section][key] = value

    mode = os.getenv("INTEGRATIONS_MODE", "").strip().lower()
    if mode:
        data["integrations_mode"] = mode
    return data


def load_relay_config(config_path: Optional[Path] = None) -> RelayConfig:
    """
    Load and validate relay configuration from YAML file plus environment

    Args:
        config_path: Path to config file. Defaults to $RELAY_CONFIG_PATH, then
            config/relay_config.yml

    Returns:
        Validated RelayConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        env_path = os.getenv("RELAY_CONFIG_PATH", "").strip()
        if env_path:
            config_path = Path(env_path)
        else:
            config_path = Path(__file__).parent.parent.parent / "config" / "relay_config.yml"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    try:
        config = RelayConfig(**apply_env_overrides(config_data))
        logger.info("Successfully loaded relay config from %s", config_path)
        return config
    except ValidationError as e:
        logger.error("Relay config validation failed: %s", e)
        raise
