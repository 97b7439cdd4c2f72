"""Configuration loader for tlsmon."""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, HttpUrl, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .errors import ConfigError

DEFAULT_CHECKER_PATH = "/usr/local/bin/sslcheck"
DEFAULT_HOSTS_FILE = "/etc/hf-tlsmon/tlshosts_to_check"


class Config(BaseSettings):
    """Complete tlsmon configuration, built once per process.

    Each field is read from the environment variable named by its alias.
    Keyword arguments (the YAML file values) rank below the environment.
    """

    model_config = SettingsConfigDict(env_ignore_empty=True, extra="ignore")

    webhook_url: HttpUrl = Field(
        validation_alias="SLACK_INCOMING_WEBHOOK_URL",
        description="Slack incoming webhook URL",
    )
    alert_threshold: int = Field(
        validation_alias="ALERT_THRESHOLD",
        description="Alert when a cert expires within this many days",
    )
    mention: str = Field(
        default="<!group>",
        validation_alias="SLACK_MENTION",
        description="Mention token leading the message",
    )
    statsd_address: str | None = Field(
        default=None,
        validation_alias="STATSD_ADDRESS",
        description="host[:port] of the StatsD sink",
    )
    statsd_prefix: str = Field(default="tlsmon", validation_alias="STATSD_PREFIX")
    checker_path: str = Field(default=DEFAULT_CHECKER_PATH, validation_alias="SSLCHECK_PATH")
    hosts_file: str = Field(default=DEFAULT_HOSTS_FILE, validation_alias="SSLCHECK_HOSTS_FILE")
    checker_timeout: float = Field(default=30.0, ge=30, le=180, validation_alias="SSLCHECK_TIMEOUT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, init_settings


# Config field -> environment variable it is read from
ENV_VARS = {name: field.validation_alias for name, field in Config.model_fields.items()}


def substitute_env_vars(value: Any, environ: Mapping[str, str] | None = None) -> Any:
    """Recursively substitute ${VAR} patterns with environment variables."""
    if environ is None:
        environ = os.environ
    if isinstance(value, str):
        pattern = r'\$\{(\w+)\}'
        for match in re.findall(pattern, value):
            value = value.replace(f"${{{match}}}", environ.get(match, ""))
        return value
    elif isinstance(value, dict):
        return {k: substitute_env_vars(v, environ) for k, v in value.items()}
    elif isinstance(value, list):
        return [substitute_env_vars(item, environ) for item in value]
    return value


def _describe_errors(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        name = str(error["loc"][0]) if error["loc"] else "config"
        parts.append(f"{ENV_VARS.get(name, name)}: {error['msg']}")
    return "; ".join(parts)


def _load_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")
    with open(path, "r") as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping")
    loaded = substitute_env_vars(loaded)
    return {ENV_VARS.get(key, key): value for key, value in loaded.items()}


def load_config(path: str | Path | None = None, **overrides: Any) -> Config:
    """Load configuration from an optional YAML file and the environment.

    Environment variables win over the file, explicit ``overrides`` (e.g.
    command line options) win over both. Empty variables count as unset.

    Args:
        path: Path to a YAML configuration file, or None.
        **overrides: Field values taking precedence over every other source.

    Returns:
        Validated configuration object.

    Raises:
        ConfigError: If the file is missing or a value is missing or invalid.
    """
    file_values = _load_file(Path(path)) if path is not None else {}

    try:
        config = Config(**file_values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {_describe_errors(e)}") from e

    update = {k: v for k, v in overrides.items() if v is not None}
    if update:
        config = config.model_copy(update=update)
    return config


def check_startup(config: Config) -> None:
    """Verify the environment is operable before doing any work.

    Raises:
        ConfigError: If the hosts file used by the checker does not exist.
    """
    if not Path(config.hosts_file).is_file():
        raise ConfigError(f"Required sslcheck hosts file '{config.hosts_file}' not found")


def generate_example_config() -> str:
    """Generate example configuration YAML content."""
    return """# tlsmon configuration
# Environment variables override these values; ${VAR} is substituted.

# Slack incoming webhook (env: SLACK_INCOMING_WEBHOOK_URL)
webhook_url: "${SLACK_INCOMING_WEBHOOK_URL}"

# Alert when a certificate expires within this many days (env: ALERT_THRESHOLD)
alert_threshold: 20

# Mention token leading the Slack message (env: SLACK_MENTION)
mention: "<!group>"

# StatsD heartbeat, disabled when unset (env: STATSD_ADDRESS)
# statsd_address: "localhost:8125"
# statsd_prefix: "tlsmon"

# External checker (env: SSLCHECK_PATH, SSLCHECK_HOSTS_FILE, SSLCHECK_TIMEOUT)
checker_path: "/usr/local/bin/sslcheck"
hosts_file: "/etc/hf-tlsmon/tlshosts_to_check"
checker_timeout: 30

log_level: INFO
"""
