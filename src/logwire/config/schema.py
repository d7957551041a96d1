"""JSON Schema for logging configuration documents."""

from typing import Any

import jsonschema
from jsonschema import Draft202012Validator

from logwire.errors import ConfigLoadError

_COMPONENT_REF: dict[str, Any] = {"type": ["string", "object"]}

DOCUMENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "logwire configuration document",
    "type": "object",
    "properties": {
        "channels": {
            "type": ["object", "null"],
            "additionalProperties": {
                "type": ["object", "null"],
                "properties": {
                    "extends": {"type": "string"},
                    "use_microseconds": {"type": "boolean"},
                    "register_error_handler": {"type": "boolean"},
                    "handlers": {"type": ["array", "null"], "items": _COMPONENT_REF},
                    "processors": {"type": ["array", "null"], "items": _COMPONENT_REF},
                },
            },
        },
        "handlers": {
            "type": ["object", "null"],
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "type": {"type": "string"},
                    "class": {"type": "string"},
                    "bubble": {"type": "boolean"},
                    "level": {"type": ["string", "integer"]},
                    "handler": _COMPONENT_REF,
                    "arguments": {"type": ["array", "object"]},
                },
            },
        },
        "processors": {
            "type": ["object", "null"],
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "class": {"type": "string"},
                    "arguments": {"type": ["array", "object"]},
                },
            },
        },
    },
}

_validator = Draft202012Validator(DOCUMENT_SCHEMA)


def validate_document(document: Any, source: str = "<mapping>") -> None:
    """
    Validate the shape of a parsed document.

    Args:
        document: Parsed document
        source: Where the document came from (for the error message)

    Raises:
        ConfigLoadError: If the document violates the schema
    """
    try:
        _validator.validate(document)
    except jsonschema.ValidationError as e:
        raise ConfigLoadError(
            f"Invalid logging configuration in {source}: {e.message}\n"
            f"Path: {list(e.path)}\n"
            f"Schema path: {list(e.schema_path)}"
        ) from e
