"""Handler writing formatted records to a stream or file."""

import logging
import os
import sys
from pathlib import Path
from typing import IO, Any

from logwire.handlers.base import Handler
from logwire.levels import MINIMUM_LEVEL

# ``ext://`` spellings follow logging.config.dictConfig
STANDARD_STREAMS = {
    "stdout": "stdout",
    "stderr": "stderr",
    "ext://sys.stdout": "stdout",
    "ext://sys.stderr": "stderr",
}


class StreamHandler(Handler):
    """
    Writes one formatted line per record.

    Args:
        file: File path, "stdout"/"stderr", or an open writable stream
        level: Minimum level name or ordinal
        bubble: Whether records continue to the next handler
        file_permission: Octal mode applied when the handler creates the file
    """

    terminator = "\n"

    def __init__(
        self,
        file: str | Path | IO[str],
        level: Any = MINIMUM_LEVEL,
        bubble: bool = True,
        file_permission: int | None = None,
    ):
        super().__init__(level, bubble)
        self.file_permission = file_permission
        self.stream: IO[str] | None = None
        self.url: str | None = None
        self._owns_stream = False

        if hasattr(file, "write"):
            self.stream = file  # type: ignore[assignment]
        elif str(file) in STANDARD_STREAMS:
            self.stream = getattr(sys, STANDARD_STREAMS[str(file)])
        else:
            self.url = str(Path(file).expanduser())  # type: ignore[arg-type]

    def _open(self, url: str) -> IO[str]:
        """Open ``url`` for appending, creating parent directories."""
        path = Path(url)
        path.parent.mkdir(parents=True, exist_ok=True)
        created = not path.exists()
        stream = open(path, "a", encoding="utf-8")
        if created and self.file_permission is not None:
            os.chmod(path, self.file_permission)
        self._owns_stream = True
        return stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if self.stream is None:
                if self.url is None:
                    raise ValueError("Stream handler has neither an open stream nor a file path")
                self.stream = self._open(self.url)
            self.stream.write(self.format(record) + self.terminator)
            self.stream.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        self.acquire()
        try:
            if self._owns_stream and self.stream is not None:
                self.stream.close()
                self.stream = None
                self._owns_stream = False
        finally:
            self.release()
            super().close()
