"""Exception types raised by the line reader pipeline.

Every pipeline stage re-raises its native failure (``OSError``, ``zlib.error``,
``UnicodeDecodeError``, ...) as one of these types, chained to the original.
"""


class LineReaderError(Exception):
    """Base class for all line reader failures."""


class SourceError(LineReaderError):
    """The source file could not be opened or read."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class DecompressionError(LineReaderError):
    """Compressed content is corrupt, truncated, or not compressed at all."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class DecodeError(LineReaderError):
    """Bytes are invalid for the encoding, or the encoding is unknown."""

    def __init__(self, message: str, encoding: str | None = None):
        super().__init__(message)
        self.encoding = encoding


class ConfigurationError(LineReaderError):
    """Reader configuration is invalid."""
