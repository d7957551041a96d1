"""Diagnostic logging for logwire itself.

logwire modules emit structured events through ``structlog.get_logger()``
(``channel.built``, ``handler.constructed``, ...). This module wires those
events to stdlib output. Applications embedding the builder usually leave it
alone; the CLI configures it from ``--log-level``.
"""

import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Literal

import structlog
from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseModel):
    """Configuration for logwire diagnostics.

    DEBUG shows every channel build, cache hit and constructed component.
    INFO shows channel builds only. WARNING (default) keeps the builder silent
    unless something unusual happens.

    Timestamp Format Options:
    - "iso": 2025-10-22T20:50:07.288824Z (full ISO format)
    - "compact": 251022-205007.28 (YYMMDD-HHMMSS.ms)
    - "time": 20:50:07.28 (time only)
    """

    level: LogLevel = Field(default="WARNING", description="Minimum diagnostic level")
    format: Literal["console", "json"] = Field(default="console", description="Output format: console, or json")
    timestamp_format: Literal["iso", "compact", "time"] = Field(
        default="compact",
        description="Timestamp format for console output",
    )
    file_path: Path | None = Field(default=None, description="Also write JSON diagnostics to this file")
    max_file_size_mb: int = Field(default=10, description="Maximum diagnostic file size in MB before rotation")
    backup_count: int = Field(default=3, description="Number of rotated diagnostic files to keep")


class LoggerFactory:
    """
    Configures structlog for logwire diagnostics.

    Example:
        LoggerFactory.configure(LoggingConfig(level="DEBUG"))
        logger = LoggerFactory.get_logger()
        logger.debug("channel.built", channel="default")
    """

    _config: LoggingConfig | None = None
    _configured: bool = False

    @classmethod
    def configure(cls, config: LoggingConfig | None = None) -> None:
        """
        Configure diagnostic output.

        Args:
            config: LoggingConfig instance. If None, uses default configuration.
        """
        if config is None:
            config = LoggingConfig()

        cls._config = config

        processors = cls._build_common_processors(config.timestamp_format)

        console_handler = logging.StreamHandler(stream=sys.stderr)
        console_handler.setLevel(getattr(logging, config.level))
        console_processor: Any
        if config.format == "console":
            console_processor = cls._console_renderer()
        else:
            console_processor = structlog.processors.JSONRenderer()
        console_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=console_processor,
                foreign_pre_chain=processors,
            )
        )

        handlers: list[logging.Handler] = [console_handler]
        if config.file_path is not None:
            handlers.append(cls._configure_file_logging(config.file_path, config, processors))

        logging.basicConfig(level=getattr(logging, config.level), handlers=handlers, force=True)

        structlog.configure(
            processors=[
                *processors,
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        cls._configured = True

    @classmethod
    def _build_common_processors(cls, timestamp_format: str) -> list[Any]:
        """Processors shared by both structlog and stdlib handlers before rendering."""
        return [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            cls._get_timestamper(timestamp_format),
        ]

    @staticmethod
    def _get_timestamper(fmt: str) -> Any:
        """Get timestamper for ``fmt``; writes the ``log_timestamp`` key."""

        def add_timestamp_processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
            now = datetime.now(timezone.utc)
            ms = now.microsecond // 10000

            if fmt == "compact":
                event_dict["log_timestamp"] = now.strftime(f"%y%m%d-%H%M%S.{ms:02d}")
            elif fmt == "time":
                event_dict["log_timestamp"] = now.strftime(f"%H:%M:%S.{ms:02d}")
            else:
                event_dict["log_timestamp"] = now.isoformat()

            return event_dict

        return add_timestamp_processor

    @staticmethod
    def _console_renderer() -> Callable[[Any, str, dict[str, Any]], str]:
        """Render ``timestamp [level] event | key=value ...`` lines."""
        colors = {
            "DEBUG": "\033[36m",
            "INFO": "\033[32m",
            "WARNING": "\033[33m",
            "ERROR": "\033[31m",
            "CRITICAL": "\033[35m",
        }
        reset = "\033[0m"
        gray = "\033[90m"

        def renderer(logger: Any, name: str, event_dict: dict[str, Any]) -> str:
            timestamp = event_dict.pop("log_timestamp", "")
            level = event_dict.pop("level", "info").upper()
            event = event_dict.pop("event", "")
            event_dict.pop("logger", None)
            exception = event_dict.pop("exception", None)

            level_str = f"[{colors.get(level, '')}{level.lower()}{reset}]"
            context = " ".join(f"{key}={value}" for key, value in sorted(event_dict.items()) if not key.startswith("_"))

            parts = [timestamp, level_str, event]
            if context:
                parts.append(f"{gray}|{reset} {context}")
            line = " ".join(parts)
            if exception:
                line = f"{line}\n{exception}"
            return line

        return renderer

    @classmethod
    def _configure_file_logging(cls, file_path: Path, config: LoggingConfig, pre_chain: list[Any]) -> logging.Handler:
        """Configure JSON file output for diagnostics."""
        file_path.parent.mkdir(parents=True, exist_ok=True)

        handler = RotatingFileHandler(
            filename=str(file_path),
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(getattr(logging, config.level))
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
                foreign_pre_chain=pre_chain,
            )
        )
        return handler

    @classmethod
    def get_logger(cls, name: str = "logwire"):
        """
        Get a configured diagnostic logger.

        Args:
            name: Logger name

        Returns:
            Configured structlog BoundLogger instance.
        """
        if not cls._configured:
            cls.configure()
        return structlog.get_logger(name)

    @classmethod
    def get_config(cls) -> LoggingConfig:
        """Get current diagnostic configuration."""
        if cls._config is None:
            return LoggingConfig()
        return cls._config

    @classmethod
    def is_configured(cls) -> bool:
        """Check if diagnostics have been configured."""
        return cls._configured

    @classmethod
    def reset(cls) -> None:
        """Reset diagnostic configuration (mainly for testing)."""
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()
        root_logger.setLevel(logging.WARNING)
        cls._config = None
        cls._configured = False
        structlog.reset_defaults()
