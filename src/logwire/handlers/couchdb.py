"""Handler storing records as CouchDB documents."""

import logging
from datetime import datetime, timezone
from typing import Any, Mapping

import requests

from logwire.handlers.base import Handler
from logwire.levels import MINIMUM_LEVEL

DEFAULT_OPTIONS: dict[str, Any] = {
    "host": "localhost",
    "port": 5984,
    "dbname": "logger",
    "username": None,
    "password": None,
    "timeout": 5.0,
}


class CouchDBHandler(Handler):
    """
    POSTs each record as a JSON document to ``http://host:port/dbname/``.

    Built from the whole handler definition, so ``level`` and ``bubble`` may
    appear in ``options`` next to the connection settings.

    Args:
        options: Connection settings (``host``, ``port``, ``dbname``,
            ``username``, ``password``, ``timeout``)
        http_client: Session used for requests (a new one by default)
    """

    def __init__(self, options: Mapping[str, Any] | None = None, http_client: requests.Session | None = None):
        merged = {**DEFAULT_OPTIONS, **dict(options or {})}
        super().__init__(merged.get("level", MINIMUM_LEVEL), merged.get("bubble", True))
        self.options = merged
        self._http = http_client or requests.Session()
        if merged.get("username"):
            self._http.auth = (merged["username"], merged.get("password") or "")

    @property
    def url(self) -> str:
        return f"http://{self.options['host']}:{self.options['port']}/{self.options['dbname']}/"

    def to_document(self, record: logging.LogRecord) -> dict[str, Any]:
        """Convert a record to the stored JSON document."""
        document = {
            "message": record.getMessage(),
            "level": record.levelno,
            "level_name": record.levelname,
            "channel": record.name,
            "datetime": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
        }
        if record.exc_info:
            document["exception"] = logging.Formatter().formatException(record.exc_info)
        return document

    def emit(self, record: logging.LogRecord) -> None:
        try:
            response = self._http.post(
                self.url,
                json=self.to_document(record),
                timeout=float(self.options["timeout"]),
            )
            response.raise_for_status()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        try:
            self._http.close()
        finally:
            super().close()
