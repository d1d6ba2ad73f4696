"""Configuration loading and validation."""

import os
from pathlib import Path
from typing import Any

import dotenv
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from fieldagent.errors import ConfigError

DEFAULT_ENDPOINT = "https://api.sentera.com"
DEFAULT_CONCURRENCY_LIMIT = 6
ACCESS_TOKEN_FILENAME = "fieldagent_access_token.txt"

# Environment variable -> ClientConfig field
ENV_OVERRIDES = {
    "FIELDAGENT_SERVER": "endpoint",
    "FIELDAGENT_ACCESS_TOKEN": "auth_token",
    "FIELDAGENT_UPLOAD_CONCURRENCY": "concurrency_limit",
    "FIELDAGENT_TIMEOUT": "timeout",
}


class ClientConfig(BaseModel):
    """Settings shared by the GraphQL client and the file uploader."""

    endpoint: str = DEFAULT_ENDPOINT
    auth_token: str = Field(min_length=1)
    concurrency_limit: int = Field(default=DEFAULT_CONCURRENCY_LIMIT, ge=1)
    timeout: float = Field(default=60.0, gt=0)

    @field_validator("endpoint")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("auth_token", mode="before")
    @classmethod
    def strip_token(cls, v: Any) -> Any:
        """Token files usually end with a newline."""
        return v.strip() if isinstance(v, str) else v

    @property
    def graphql_url(self) -> str:
        return f"{self.endpoint}/graphql"


def load_access_token(token_path: Path = Path(ACCESS_TOKEN_FILENAME)) -> str | None:
    """Read the access token from a file on disk, if it exists."""
    if not token_path.exists():
        return None
    return token_path.read_text(encoding="utf-8").strip() or None


def load_client_config(config_path: Path | None = None) -> ClientConfig:
    """
    Load client configuration.

    Sources, lowest precedence first:
    1. YAML file at config_path (if given)
    2. Environment variables (a local .env file is loaded first)
    3. fieldagent_access_token.txt, only when no token was found above

    Raises:
        ConfigError: If the file is missing, no token is available,
            or a value fails validation
    """
    dotenv.load_dotenv()

    data: dict[str, Any] = {}
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")

    for env_var, field_name in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            data[field_name] = value

    if not data.get("auth_token"):
        token = load_access_token()
        if token is None:
            raise ConfigError(
                "Unable to read your FieldAgent access token.\n"
                "Specify the access token using a FIELDAGENT_ACCESS_TOKEN environment variable,\n"
                f"or, copy {ACCESS_TOKEN_FILENAME}.example to {ACCESS_TOKEN_FILENAME},\n"
                "replace the placeholder with your auth token, and then run again."
            )
        data["auth_token"] = token

    try:
        return ClientConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid client configuration: {e}") from e
