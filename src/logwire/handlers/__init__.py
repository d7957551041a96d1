"""
Handler library.

Handler ``type`` shorthands in a logging document resolve against this
package: ``type: Stream`` constructs :class:`StreamHandler`,
``type: RotatingFile`` constructs :class:`RotatingFileHandler`, and so on.
"""

from logwire.handlers.base import Handler
from logwire.handlers.buffer import BufferHandler
from logwire.handlers.couchdb import CouchDBHandler
from logwire.handlers.null import NullHandler
from logwire.handlers.rotating import RotatingFileHandler
from logwire.handlers.stream import StreamHandler

__all__ = [
    "Handler",
    "StreamHandler",
    "RotatingFileHandler",
    "BufferHandler",
    "NullHandler",
    "CouchDBHandler",
]
