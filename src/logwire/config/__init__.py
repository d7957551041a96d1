"""
Configuration document package.

Exports:
    - ConfigurationStore: Read-only lookup of named definitions by section
    - load_config: Load a document from a directory, file, or mapping
    - validate_document: JSON Schema check of the document shape
"""

from logwire.config.loader import find_config, load_config, substitute_env_vars
from logwire.config.schema import DOCUMENT_SCHEMA, validate_document
from logwire.config.store import SECTIONS, ConfigurationStore

__all__ = [
    "ConfigurationStore",
    "SECTIONS",
    "DOCUMENT_SCHEMA",
    "validate_document",
    "find_config",
    "load_config",
    "substitute_env_vars",
]
