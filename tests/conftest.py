"""Root conftest for all tests - setup sys.path and shared builder fixtures."""

import sys
from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

# Add project root to sys.path so tests.fixtures targets are importable by dotted path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from logwire.builder.context import ResolutionContext  # noqa: E402
from logwire.config.store import ConfigurationStore  # noqa: E402
from logwire.errors import ErrorReporter  # noqa: E402


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Write a logging document to tmp_path and return the file path."""

    def _write(document: dict[str, Any] | str, name: str = "logwire.yaml") -> Path:
        path = tmp_path / name
        text = document if isinstance(document, str) else yaml.safe_dump(document, sort_keys=False)
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def make_context() -> Callable[..., ResolutionContext]:
    """Build a resolution context over a document."""

    def _make(document: dict[str, Any] | None = None, channel: str = "test") -> ResolutionContext:
        store = ConfigurationStore(document or {})
        return ResolutionContext(channel=channel, reporter=ErrorReporter(store.dump))

    return _make
