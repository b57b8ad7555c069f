"""Client configuration.

Hides where settings come from: a JSON credentials file read once at
startup, with a few environment variable overrides.

Environment variables:
    TERMCHAT_PROVIDER: Provider type (openai, deepseek)
    TERMCHAT_MODEL: Model name
    TERMCHAT_REQUEST_TIMEOUT: Seconds to wait for a reply (0 disables)
"""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path("config.json")
DEFAULT_REQUEST_TIMEOUT = 120.0


class ClientConfig(BaseModel):
    """Settings read from the configuration file.

    Keys use the upper-case names of the file format (``API_KEY``,
    ``MODEL``, ...); attribute names are snake case.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    api_key: str = Field(alias="API_KEY", description="Credential for the completion service")
    provider: str = Field(default="openai", alias="PROVIDER")
    model: str | None = Field(default=None, alias="MODEL")
    base_url: str | None = Field(default=None, alias="BASE_URL")
    system_prompt: str | None = Field(default=None, alias="SYSTEM_PROMPT")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, alias="TEMPERATURE")
    request_timeout: float | None = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        alias="REQUEST_TIMEOUT",
        description="Seconds to wait for a reply; None or 0 waits forever",
    )
    max_tokens: int | None = Field(
        default=None,
        gt=0,
        alias="MAX_TOKENS",
        description="Reply length limit; None uses the service default",
    )

    @field_validator("api_key")
    @classmethod
    def _api_key_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("API_KEY must not be empty")
        return value

    @field_validator("provider")
    @classmethod
    def _normalize_provider(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("request_timeout")
    @classmethod
    def _zero_timeout_disables(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            return None
        return value

    def provider_options(self) -> dict[str, Any]:
        """Keyword arguments for ``create_llm_provider``."""
        options: dict[str, Any] = {"api_key": self.api_key}
        if self.model:
            options["model"] = self.model
        if self.base_url:
            options["base_url"] = self.base_url
        return options


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if provider := os.getenv("TERMCHAT_PROVIDER"):
        overrides["PROVIDER"] = provider
    if model := os.getenv("TERMCHAT_MODEL"):
        overrides["MODEL"] = model
    if timeout := os.getenv("TERMCHAT_REQUEST_TIMEOUT"):
        overrides["REQUEST_TIMEOUT"] = timeout
    return overrides


def load_config(path: Path | str = DEFAULT_CONFIG_PATH) -> ClientConfig:
    """Read the configuration file once.

    Args:
        path: Path to the JSON configuration file

    Returns:
        Validated client configuration

    Raises:
        ConfigError: If the file cannot be read, is not a JSON object,
            or fails validation
    """
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a JSON object")

    try:
        return ClientConfig.model_validate({**data, **_env_overrides()})
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "config"
        raise ConfigError(f"Invalid config {config_path}: {location}: {first['msg']}") from e
