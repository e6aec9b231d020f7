"""Configuration models and loading."""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

CONFIG_DIR = Path.home() / ".config" / "b3-request"
CONFIG_FILE = CONFIG_DIR / "config.json"


class EndpointSettings(BaseModel):
    b2b_base_url: str = "https://api-b2b.bigcommerce.com"
    bc_base_url: str = "https://store.example.com"

    @field_validator("b2b_base_url", "bc_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class StorageKeys(BaseModel):
    b2b_token: str = "B3B2BToken"
    bc_token: str = "BcToken"
    bc_jwt_token: str = "bc_jwt_token"
    xsrf_cookie: str = "XSRF-TOKEN"


class TransportSettings(BaseModel):
    timeout: float = 10.0
    max_connections: int = 100
    max_keepalive_connections: int = 20


class CredentialSettings(BaseModel):
    require_credentials: bool = False


class Config(BaseModel):
    endpoints: EndpointSettings = Field(default_factory=EndpointSettings)
    storage: StorageKeys = Field(default_factory=StorageKeys)
    transport: TransportSettings = Field(default_factory=TransportSettings)
    credentials: CredentialSettings = Field(default_factory=CredentialSettings)


def load_config(config_file: Path = CONFIG_FILE) -> Config:
    """Load configuration from JSON file, creating default if needed."""
    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default

    try:
        data = json.loads(config_file.read_text())
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and recreate default
        backup = config_file.with_suffix(".json.bak")
        config_file.rename(backup)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default
