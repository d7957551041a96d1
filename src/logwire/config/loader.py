"""
Configuration document loader.

Reads a logging document from YAML and validates its shape. A directory is
searched for the primary file first and the distribution default second:

    config/logwire.yaml         (site configuration, usually not versioned)
    config/logwire.dist.yaml    (distribution default)

Parse errors are never swallowed: a host process must not start with a
logging pipeline built from a guessed configuration.

Supports environment variable substitution in string values
(``${VAR}`` and ``${VAR:-default}``).
"""

import os
import re
from pathlib import Path
from typing import Any, Mapping

import structlog
import yaml

from logwire.config.schema import validate_document
from logwire.config.store import thaw
from logwire.errors import ConfigLoadError
from logwire.system.config import BuilderSettings, get_settings

logger = structlog.get_logger()

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


def find_config(source: str | Path, settings: BuilderSettings | None = None) -> Path:
    """
    Find the document for ``source``.

    Args:
        source: Path to a YAML file, or a directory holding the primary or fallback file
        settings: Settings naming the primary and fallback files

    Returns:
        Path to the document

    Raises:
        ConfigLoadError: If no document exists at any searched path
    """
    settings = settings or get_settings()
    path = Path(source).expanduser()

    if path.is_file():
        return path

    if not path.is_dir():
        raise ConfigLoadError(f"Logging configuration not found: {path}")

    candidates = [path / settings.primary_name, path / settings.fallback_name]
    for candidate in candidates:
        if candidate.is_file():
            return candidate

    raise ConfigLoadError(
        f"Logging configuration not found. Searched:\n"
        f"  1. Primary: {candidates[0]}\n"
        f"  2. Fallback: {candidates[1]}"
    )


def load_config(
    source: str | Path | Mapping[str, Any] | None = None,
    settings: BuilderSettings | None = None,
) -> dict[str, Any]:
    """
    Load and validate a logging document.

    Args:
        source: Directory, YAML file, or already-parsed mapping.
            If None, uses ``settings.config_dir``.
        settings: Builder settings (defaults to the settings singleton)

    Returns:
        Plain nested dict (a private copy when ``source`` is a mapping)

    Raises:
        ConfigLoadError: If the document is missing, unparsable, or malformed

    Examples:
        >>> document = load_config("config")
        >>> document = load_config({"channels": {"default": {}}})
    """
    settings = settings or get_settings()

    if isinstance(source, Mapping):
        document: Any = thaw(source)
        origin = "<mapping>"
    else:
        path = find_config(settings.config_dir if source is None else source, settings)
        origin = str(path)
        try:
            with open(path, encoding="utf-8") as f:
                document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"Invalid YAML in {path}: {e}") from e
        except OSError as e:
            raise ConfigLoadError(f"Cannot read logging configuration {path}: {e}") from e

    if not isinstance(document, dict):
        raise ConfigLoadError(f"Invalid logging configuration in {origin}: top level must be a mapping")

    if settings.substitute_env:
        document = substitute_env_vars(document, origin)

    validate_document(document, origin)

    logger.debug(
        "config.loaded",
        source=origin,
        channels=len(document.get("channels") or {}),
        handlers=len(document.get("handlers") or {}),
        processors=len(document.get("processors") or {}),
    )
    return document


def substitute_env_vars(value: Any, origin: str = "<mapping>", environ: Mapping[str, str] | None = None) -> Any:
    """
    Substitute environment variables in string values.

    Supports ${VAR_NAME} and ${VAR_NAME:-default} syntax, anywhere inside a
    string. Mappings and sequences are processed recursively.

    Args:
        value: Document value (possibly nested)
        origin: Document origin for error messages
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Value with environment variables substituted

    Raises:
        ConfigLoadError: If a variable is unset and has no default
    """
    env = os.environ if environ is None else environ

    if isinstance(value, dict):
        return {key: substitute_env_vars(item, origin, env) for key, item in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item, origin, env) for item in value]
    if not isinstance(value, str) or "${" not in value:
        return value

    def replace(match: re.Match[str]) -> str:
        var_expr = match.group(1)
        if ":-" in var_expr:
            var_name, default_value = var_expr.split(":-", 1)
            return env.get(var_name, default_value)
        if var_expr not in env:
            raise ConfigLoadError(f"Environment variable '{var_expr}' referenced in {origin} is not set")
        return env[var_expr]

    return _ENV_PATTERN.sub(replace, value)
