"""Configuration for the CI gate.

Process settings are loaded from:
- environment variables
- and a local `.env` file (if present)

The command/CI "format" configuration lives in a separate JSON file because it
is structured (an ordered pattern mapping plus a backend list):

    {
      "format": {
        "commands": {"whitelist-add": "^/approve$", "retest": "^/retest$"},
        "CI": ["log"]
      }
    }
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from pr_ci_gate.errors import ConfigurationError

logger = logging.getLogger(__name__)

USERLIST_FILE_NAME = "userlist.txt"
ADMINLIST_FILE_NAME = "adminlist.txt"


class GateSettings(BaseSettings):
    """Settings for the CI gate.

    Environment variables:
    - WHITELIST_ENABLED          (optional, default true)
    - GATE_CONFIG_DIR            (optional)
    - GATE_FORMAT_CONFIG         (optional)
    - LOG_LEVEL                  (optional)
    - GATE_HTTP_HOOK_URL         (required only by the `http-hook` CI backend)
    - GATE_WEBHOOK_SECRET        (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `GateSettings(_env_file=path_to_env)`.
    """

    whitelist_enabled: bool = Field(
        default=True,
        validation_alias="WHITELIST_ENABLED",
        description="Whether pull request builds are restricted to whitelisted authors",
    )

    config_dir: Path = Field(
        default=Path("config"),
        validation_alias="GATE_CONFIG_DIR",
        description="Directory holding the user and admin lists",
    )
    format_config_file: Path = Field(
        default=Path("config/format.json"),
        validation_alias="GATE_FORMAT_CONFIG",
        description="JSON file mapping command keys to patterns and listing CI backends",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    http_hook_url: str = Field(
        default="",
        validation_alias="GATE_HTTP_HOOK_URL",
        description="Endpoint notified by the `http-hook` CI backend",
    )
    http_hook_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        validation_alias="GATE_HTTP_HOOK_TIMEOUT_SECONDS",
        description="Request timeout for the `http-hook` CI backend",
    )

    webhook_secret: str = Field(
        default="",
        validation_alias="GATE_WEBHOOK_SECRET",
        description="Shared secret for X-Hub-Signature-256 verification (empty disables it)",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


class Format(BaseModel):
    commands: dict[str, str] = Field(default_factory=dict)
    ci: list[str] = Field(default_factory=list, alias="CI")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FormatConfig(BaseModel):
    """Which commands and CI backends are active, in evaluation order."""

    format: Format = Field(default_factory=Format)

    model_config = ConfigDict(extra="ignore")


def load_format_config(path: Path) -> FormatConfig:
    """Load the format configuration from a JSON file.

    A missing file yields an empty configuration (no commands, no CI backends).

    Raises:
        ConfigurationError: If the file cannot be read or does not validate.
    """
    if not path.exists():
        logger.warning("Format configuration not found", extra={"path": str(path)})
        return FormatConfig()

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read format configuration {path}: {e}") from e

    try:
        config = FormatConfig.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid format configuration {path}: {e}") from e

    logger.info(
        "Format configuration loaded",
        extra={
            "path": str(path),
            "commands": list(config.format.commands),
            "ci": config.format.ci,
        },
    )
    return config
