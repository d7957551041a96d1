"""Handler writing one file per date period and pruning old ones."""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any

from logwire.handlers.stream import StreamHandler
from logwire.levels import MINIMUM_LEVEL

FILE_PER_DAY = "%Y-%m-%d"
FILE_PER_MONTH = "%Y-%m"
FILE_PER_YEAR = "%Y"


class RotatingFileHandler(StreamHandler):
    """
    Writes to ``{filename}-{date}`` files, starting a new file when the date changes.

    ``app.log`` with the default formats writes ``app-2025-01-31.log``. Only the
    ``max_files`` newest files matching the pattern are kept (0 keeps all).

    Args:
        filename: Base file path
        max_files: Number of dated files to keep (0 = unlimited)
        level: Minimum level name or ordinal
        bubble: Whether records continue to the next handler
        file_permission: Octal mode applied when a file is created
    """

    def __init__(
        self,
        filename: str | Path,
        max_files: int = 0,
        level: Any = MINIMUM_LEVEL,
        bubble: bool = True,
        file_permission: int | None = None,
    ):
        self.filename = str(Path(filename).expanduser())
        self.max_files = int(max_files)
        self.filename_format = "{filename}-{date}"
        self.date_format = FILE_PER_DAY
        self._now = datetime.now
        super().__init__(self._timed_filename(), level, bubble, file_permission)
        self._current_date = self._now().strftime(self.date_format)

    def set_filename_format(self, filename_format: str, date_format: str) -> None:
        """
        Change how dated file names are built.

        Args:
            filename_format: Pattern with ``{filename}`` and ``{date}`` placeholders
            date_format: strftime format for ``{date}``

        Raises:
            ValueError: If the pattern lacks ``{date}``
        """
        if "{date}" not in filename_format:
            raise ValueError(f"Invalid filename format {filename_format!r}: it must contain {{date}}")
        self.filename_format = filename_format
        self.date_format = date_format
        self._reopen()

    def _timed_filename(self) -> str:
        path = Path(self.filename)
        name = self.filename_format.format(filename=path.stem, date=self._now().strftime(self.date_format))
        return str(path.with_name(name + path.suffix))

    def _glob_pattern(self) -> str:
        path = Path(self.filename)
        return self.filename_format.format(filename=path.stem, date="*") + path.suffix

    def _reopen(self) -> None:
        self.acquire()
        try:
            if self._owns_stream and self.stream is not None:
                self.stream.close()
            self.stream = None
            self._owns_stream = False
            self.url = self._timed_filename()
            self._current_date = self._now().strftime(self.date_format)
        finally:
            self.release()

    def emit(self, record: logging.LogRecord) -> None:
        if self._now().strftime(self.date_format) != self._current_date:
            self._reopen()
            self.rotate()
        super().emit(record)

    def rotate(self) -> list[Path]:
        """
        Delete dated files beyond ``max_files``.

        Returns:
            Paths that were deleted
        """
        if self.max_files <= 0:
            return []

        directory = Path(self.filename).parent
        if not directory.exists():
            return []

        matcher = re.compile(re.escape(self._glob_pattern()).replace(r"\*", ".+") + "$")
        candidates = sorted(
            (p for p in directory.glob(self._glob_pattern()) if matcher.match(p.name)),
            reverse=True,
        )
        deleted = []
        for path in candidates[self.max_files :]:
            if str(path) == self.url:
                continue
            path.unlink()
            deleted.append(path)
        return deleted
