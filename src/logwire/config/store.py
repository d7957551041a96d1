"""Read-only store of named channel, handler and processor definitions."""

import pprint
from types import MappingProxyType
from typing import Any, Mapping

import yaml

SECTIONS = ("channels", "handlers", "processors")


def freeze(value: Any) -> Any:
    """Return a read-only deep view of ``value`` (mappings and sequences)."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Return a plain, mutable copy of nested mappings and sequences; leaves are shared."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


class ConfigurationStore:
    """
    Holds a parsed logging document.

    The document is frozen at construction; there is no mutation API.
    Channels synthesized on demand (an undeclared name extending ``default``)
    live in the channel builder, never here.

    Args:
        document: Parsed document with optional ``channels``, ``handlers``
            and ``processors`` sections

    Example:
        >>> store = ConfigurationStore({"handlers": {"console": {"type": "Stream", "file": "stderr"}}})
        >>> store.lookup("handlers", "console")["type"]
        'Stream'
        >>> store.lookup("handlers", "missing") is None
        True
    """

    def __init__(self, document: Mapping[str, Any]):
        self._raw = thaw(document)
        self._document = freeze(self._raw)

    def lookup(self, section: str, name: str) -> Mapping[str, Any] | None:
        """
        Look up a named definition.

        Args:
            section: One of ``channels``, ``handlers``, ``processors``
            name: Definition name

        Returns:
            The definition, or None if the section has no such name.
            A channel declared with an empty body yields an empty mapping.

        Raises:
            KeyError: If ``section`` is not a known section
        """
        if section not in SECTIONS:
            raise KeyError(f"Unknown section '{section}'. Available: {', '.join(SECTIONS)}")
        entries = self._document.get(section) or {}
        if name not in entries:
            return None
        definition = entries[name]
        return MappingProxyType({}) if definition is None else definition

    def has(self, section: str, name: str) -> bool:
        """Check whether ``section`` declares ``name``."""
        return self.lookup(section, name) is not None

    def names(self, section: str) -> list[str]:
        """List declared names of a section, in document order."""
        if section not in SECTIONS:
            raise KeyError(f"Unknown section '{section}'. Available: {', '.join(SECTIONS)}")
        return list(self._document.get(section) or {})

    @property
    def document(self) -> Mapping[str, Any]:
        """Read-only view of the whole document."""
        return self._document

    def dump(self) -> str:
        """Render the whole document as YAML (used in error messages)."""
        try:
            return yaml.safe_dump(self._raw, default_flow_style=False, sort_keys=False)
        except yaml.representer.RepresenterError:
            # Mapping sources may carry live objects (streams, handlers)
            return pprint.pformat(self._raw, sort_dicts=False)
