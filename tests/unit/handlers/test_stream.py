"""Tests for StreamHandler and NullHandler."""

import io
import logging
import os
import stat
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from logwire.handlers import NullHandler, StreamHandler
from logwire.levels import Level


def make_record(level: int = logging.WARNING, msg: str = "disk almost full") -> logging.LogRecord:
    return logging.LogRecord("app", level, __file__, 10, msg, None, None)


class TestStreamHandler:
    """Test StreamHandler targets and output."""

    def test_open_stream(self) -> None:
        """Test an open stream is written to directly."""
        buffer = io.StringIO()
        handler = StreamHandler(buffer)

        handler.handle(make_record())

        assert buffer.getvalue() == "disk almost full\n"
        assert handler.url is None

    @pytest.mark.parametrize(
        "name, stream_name",
        [("stdout", "stdout"), ("stderr", "stderr"), ("ext://sys.stdout", "stdout"), ("ext://sys.stderr", "stderr")],
    )
    def test_standard_streams(self, name: str, stream_name: str) -> None:
        """Test standard stream names map to sys streams."""
        handler = StreamHandler(name)

        assert handler.stream is getattr(sys, stream_name)

    def test_file_opened_lazily(self, tmp_path: Path) -> None:
        """Test a path is not touched until the first record."""
        path = tmp_path / "nested" / "app.log"
        handler = StreamHandler(path)

        assert handler.url == str(path)
        assert not path.exists()

        handler.handle(make_record())
        handler.close()

        assert path.read_text() == "disk almost full\n"

    def test_file_appends(self, tmp_path: Path) -> None:
        """Test existing file content is kept."""
        path = tmp_path / "app.log"
        path.write_text("earlier\n")
        handler = StreamHandler(str(path))

        handler.handle(make_record())
        handler.close()

        assert path.read_text() == "earlier\ndisk almost full\n"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_file_permission(self, tmp_path: Path) -> None:
        """Test file_permission applies to a newly created file."""
        path = tmp_path / "private.log"
        handler = StreamHandler(path, file_permission=0o600)

        handler.handle(make_record())
        handler.close()

        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_level_threshold(self) -> None:
        """Test records below the level are dropped by the channel check."""
        handler = StreamHandler(io.StringIO(), level="error")

        assert handler.level == Level.ERROR
        assert not handler.is_handling(make_record(logging.WARNING))
        assert handler.is_handling(make_record(logging.CRITICAL))

    def test_close_leaves_foreign_stream_open(self) -> None:
        """Test streams the handler did not open are not closed."""
        buffer = io.StringIO()
        handler = StreamHandler(buffer)

        handler.close()

        assert not buffer.closed

    def test_no_target_reported(self) -> None:
        """Test a handler left without stream or path reports the record instead of raising."""
        handler = StreamHandler(io.StringIO())
        handler.stream = None
        handler.handleError = MagicMock()

        handler.handle(make_record())

        handler.handleError.assert_called_once()


class TestNullHandler:
    """Test NullHandler."""

    def test_never_bubbles(self) -> None:
        """Test a null handler stops propagation."""
        handler = NullHandler()

        assert handler.bubble is False
        assert handler.level == Level.DEBUG

    def test_discards(self) -> None:
        """Test emit accepts and drops records."""
        handler = NullHandler("warning")

        handler.handle(make_record())

        assert handler.level == Level.WARNING
