"""Public line reading entry points.

This module wires the chunk source, the transform chain, the text stream
adapter and the line segmenter into the operations callers use:

- ``read_lines``: lines of a (possibly gzip-compressed) text file.
- ``text_file_stream`` / ``text_file_events``: the decoded text chunks, as a
  plain stream or as ``Item``/``Complete``/``Failure`` events.
- ``read_lines_native``: the same lines produced by Python's own line reader.
"""

import gzip
import io
import zlib
from collections.abc import AsyncGenerator, Iterator
from contextlib import aclosing

import structlog

from line_reader_core.async_utils import apply_transforms, pipe
from line_reader_core.config import LineReaderConfig
from line_reader_core.events import StreamEvent, dematerialize, materialize
from line_reader_core.exceptions import (
    DecodeError,
    DecompressionError,
    LineReaderError,
    SourceError,
)
from line_reader_core.segmenter import split_lines
from line_reader_core.strategies.file_source import FileChunkSource
from line_reader_core.strategies.transform_factories import (
    build_transform_chain,
    is_compressed,
)

# Get logger for this module
logger = structlog.get_logger(__name__)


def _resolve_config(
    encoding: str | None, config: LineReaderConfig | dict | None
) -> LineReaderConfig:
    """Merge an explicit encoding argument into a validated config."""
    config = LineReaderConfig.from_params(config)
    if encoding is not None:
        config = LineReaderConfig.from_params({**vars(config), "encoding": encoding})
    return config


def text_file_events(
    path: str,
    encoding: str | None = None,
    config: LineReaderConfig | dict | None = None,
) -> AsyncGenerator[StreamEvent, None]:
    """Stream the decoded text of a file as events.

    Args:
        path: File-system path; a ``.gz`` suffix (any case) enables gunzip.
        encoding: Character encoding, overriding ``config.encoding``.
        config: Reader configuration (dataclass or dict).

    Returns:
        Async generator of ``Item(str)`` events ended by exactly one
        ``Complete`` or ``Failure``.
    """
    config = _resolve_config(encoding, config)
    source = FileChunkSource(chunk_size=config.chunk_size)
    transforms = build_transform_chain(path, config)
    return pipe(apply_transforms(source.read(path), transforms), materialize)


def text_file_stream(
    path: str,
    encoding: str | None = None,
    config: LineReaderConfig | dict | None = None,
) -> AsyncGenerator[str, None]:
    """Stream the decoded text of a file as chunks.

    Chunk boundaries follow the underlying reads, not lines; chunks may be
    empty. A pipeline failure is raised as a ``LineReaderError`` after the
    chunks delivered before it.
    """
    return pipe(text_file_events(path, encoding, config), dematerialize)


async def read_lines(
    path: str,
    encoding: str | None = None,
    config: LineReaderConfig | dict | None = None,
) -> AsyncGenerator[str, None]:
    """Read a text file line by line.

    Lines end at ``\\n`` or ``\\r\\n``; terminators are not included. The
    final value is the text after the last terminator, so a file ending with
    a newline yields a trailing empty string and an empty file yields ``""``.

    Args:
        path: File-system path; a ``.gz`` suffix (any case) enables gunzip.
        encoding: Character encoding, overriding ``config.encoding``.
        config: Reader configuration (dataclass or dict).

    Yields:
        str: Lines in file order.

    Raises:
        SourceError: If the file cannot be opened or read.
        DecompressionError: If compressed content is corrupt or truncated.
        DecodeError: If the bytes are invalid for the encoding.
    """
    config = _resolve_config(encoding, config)
    logger.info(
        "LINE_READER_STARTING",
        path=path,
        encoding=config.encoding,
        compressed=is_compressed(path, config.compressed_suffixes),
    )

    lines_read = 0
    try:
        async with aclosing(
            pipe(text_file_stream(path, config=config), split_lines)
        ) as lines:
            async for line in lines:
                lines_read += 1
                yield line
    except LineReaderError as e:
        logger.error("LINE_READER_FAILED", path=path, lines=lines_read, error=str(e))
        raise

    logger.info("LINE_READER_COMPLETED", path=path, lines=lines_read)


def read_lines_native(
    path: str,
    encoding: str | None = None,
    config: LineReaderConfig | dict | None = None,
) -> Iterator[str]:
    """Read a text file line by line using Python's built-in line reader.

    The file is read through ``io.TextIOWrapper`` with ``newline=""`` so that
    the raw terminator of the last line is still visible. If the file ends
    with a terminator, one extra empty string is yielded to match
    ``read_lines``.

    Unlike ``read_lines``, a lone ``\\r`` also ends a line here, and an empty
    file yields no lines at all.
    """
    config = _resolve_config(encoding, config)
    compressed = is_compressed(path, config.compressed_suffixes)
    logger.info(
        "NATIVE_LINE_READER_STARTING",
        path=path,
        encoding=config.encoding,
        compressed=compressed,
    )

    try:
        if compressed:
            raw = gzip.open(path, "rb")
        else:
            raw = open(path, "rb")
    except OSError as e:
        raise SourceError(f"Cannot open {path}: {e}", path=path) from e

    try:
        text = io.TextIOWrapper(
            raw, encoding=config.encoding, errors=config.errors, newline=""
        )
    except LookupError as e:
        raw.close()
        raise DecodeError(
            f"Unknown encoding: {config.encoding}", encoding=config.encoding
        ) from e

    lines_read = 0
    last_line = None
    with text:
        try:
            for last_line in text:
                lines_read += 1
                yield _strip_terminator(last_line)
        except (gzip.BadGzipFile, EOFError, zlib.error) as e:
            raise DecompressionError(
                f"Error decompressing {path}: {e}", path=path
            ) from e
        except UnicodeDecodeError as e:
            raise DecodeError(
                f"Invalid {config.encoding} data: {e}", encoding=config.encoding
            ) from e
        except OSError as e:
            raise SourceError(f"Error reading {path}: {e}", path=path) from e

    # A trailing terminator is followed by one empty line, as in read_lines
    if last_line is not None and last_line.endswith(("\n", "\r")):
        lines_read += 1
        yield ""

    logger.info("NATIVE_LINE_READER_COMPLETED", path=path, lines=lines_read)


def _strip_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line
