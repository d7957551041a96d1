"""
Builder settings.

Settings decide where logging documents are looked up and how they are
interpreted. Defaults can be overridden from ``LOGWIRE_*`` environment
variables:

    LOGWIRE_CONFIG_DIR=/etc/myapp
    LOGWIRE_PRIMARY_NAME=logging.yaml
    LOGWIRE_FALLBACK_NAME=logging.dist.yaml
    LOGWIRE_HANDLER_NAMESPACE=myapp.log_handlers
    LOGWIRE_SUBSTITUTE_ENV=false
"""

import os
from pathlib import Path
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "LOGWIRE_"

_FALSE_VALUES = {"0", "false", "no", "off"}


class BuilderSettings(BaseModel):
    """Settings for locating and interpreting logging configuration documents."""

    model_config = ConfigDict(frozen=True)

    config_dir: Path = Field(default=Path("config"), description="Directory searched for the document")
    primary_name: str = Field(default="logwire.yaml", description="Primary document file name")
    fallback_name: str = Field(
        default="logwire.dist.yaml",
        description="Distribution default, used when the primary file is absent",
    )
    handler_namespace: str = Field(
        default="logwire.handlers",
        description="Module that handler 'type' shorthands are resolved against",
    )
    substitute_env: bool = Field(default=True, description="Expand ${VAR} references in string values")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BuilderSettings":
        """
        Build settings from ``LOGWIRE_*`` environment variables.

        Args:
            environ: Environment mapping (defaults to ``os.environ``)

        Returns:
            Settings with environment overrides applied
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}
        for field_name in cls.model_fields:
            raw = env.get(f"{ENV_PREFIX}{field_name.upper()}")
            if raw is None:
                continue
            if field_name == "substitute_env":
                overrides[field_name] = raw.strip().lower() not in _FALSE_VALUES
            else:
                overrides[field_name] = raw
        return cls(**overrides)


_settings: BuilderSettings | None = None


def get_settings() -> BuilderSettings:
    """Get settings singleton (loaded from the environment on first use)."""
    global _settings
    if _settings is None:
        _settings = BuilderSettings.from_env()
    return _settings


def reload_settings() -> BuilderSettings:
    """Force reload settings from the environment."""
    global _settings
    _settings = BuilderSettings.from_env()
    return _settings
