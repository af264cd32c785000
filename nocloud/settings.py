from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from nocloud.exceptions import ConfigurationError

# Load .env file from project root
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

DEFAULT_BASE_URL = "https://nocloud"
DEFAULT_CONFIG_PATH = Path("config/default.yaml")


class ApiSettings(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    base_url_env: str = "NOCLOUD_BASE_URL"
    timeout_seconds: float | None = 30.0

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("base_url must not be empty")
        return value

    @field_validator("timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("timeout_seconds must be positive or null")
        return value

    @property
    def resolved_base_url(self) -> str:
        override = os.getenv(self.base_url_env, "").strip()
        return override.rstrip("/") if override else self.base_url


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


class NoCloudSettings(BaseModel):
    api: ApiSettings = Field(default_factory=ApiSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> "NoCloudSettings":
        """Load settings from a YAML configuration file.

        Args:
            path: Optional path to configuration file. If not provided, uses
                NOCLOUD_CONFIG environment variable or falls back to
                config/default.yaml.

        Returns:
            Settings instance; built-in defaults when the default file is absent.

        Raises:
            ConfigurationError: If an explicitly requested file does not exist
                or the configuration is invalid.
        """
        env_path = os.getenv("NOCLOUD_CONFIG")
        explicit = path is not None or bool(env_path)
        config_path = path or Path(env_path or DEFAULT_CONFIG_PATH)
        if not config_path.exists():
            if explicit:
                raise ConfigurationError(
                    f"Configuration file not found: {config_path}", {"path": str(config_path)}
                )
            return cls()
        try:
            with config_path.open("r", encoding="utf-8") as fp:
                payload: Any = yaml.safe_load(fp) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}", {"path": str(config_path)}) from exc
        if not isinstance(payload, dict):
            raise ConfigurationError("Invalid configuration: top level must be a mapping", {"path": str(config_path)})
        try:
            return cls(**payload)
        except Exception as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}", {"path": str(config_path)}) from exc


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> NoCloudSettings:
    return NoCloudSettings.load(Path(path) if path else None)


__all__ = [
    "ApiSettings",
    "LoggingSettings",
    "NoCloudSettings",
    "DEFAULT_BASE_URL",
    "get_settings",
]
