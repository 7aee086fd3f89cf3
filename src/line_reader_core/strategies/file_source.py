"""File chunk source strategy implementation."""

from collections.abc import AsyncGenerator
from dataclasses import dataclass

import aiofiles
import structlog

from line_reader_core.config import DEFAULT_CHUNK_SIZE
from line_reader_core.exceptions import SourceError
from line_reader_core.strategy_types import ChunkSourceStrategy

logger = structlog.get_logger(__name__)


@dataclass
class FileChunkSource(ChunkSourceStrategy):
    """Read a local file as a stream of fixed-size byte chunks.

    The file handle is owned by the generator: it is closed when the stream
    is exhausted, when reading fails, and when the consumer closes the
    generator before the end of the file.
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE

    async def read(self, path: str) -> AsyncGenerator[bytes, None]:
        bytes_read = 0
        try:
            async with aiofiles.open(path, "rb") as handle:
                while True:
                    chunk = await handle.read(self.chunk_size)
                    if not chunk:
                        break
                    bytes_read += len(chunk)
                    logger.debug(
                        "CHUNK_READ", path=path, size=len(chunk), total=bytes_read
                    )
                    yield chunk
        except OSError as e:
            raise SourceError(f"Error reading {path}: {e}", path=path) from e
