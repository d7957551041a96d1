"""
System configuration package.

Exports:
    - BuilderSettings: Settings for locating and interpreting logging documents
    - get_settings: Get settings singleton
    - reload_settings: Force reload settings
    - LoggerFactory: Factory for logwire's own diagnostic loggers
    - LoggingConfig: Diagnostic logging configuration model
"""

from logwire.system.config import BuilderSettings, get_settings, reload_settings
from logwire.system.log_system import LoggerFactory, LoggingConfig

__all__ = [
    "BuilderSettings",
    "get_settings",
    "reload_settings",
    "LoggerFactory",
    "LoggingConfig",
]
