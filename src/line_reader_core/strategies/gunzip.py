"""Gzip decompression transform."""

import zlib
from collections.abc import AsyncGenerator, AsyncIterable
from dataclasses import dataclass

from line_reader_core.config import DEFAULT_CHUNK_SIZE
from line_reader_core.exceptions import DecompressionError
from line_reader_core.strategy_types import ChunkTransformStrategy

# 16 (gzip container) + 15 (maximum window size)
GZIP_WBITS = 31


@dataclass
class GunzipTransform(ChunkTransformStrategy):
    """Decompress a gzip byte stream chunk by chunk.

    Multi-member archives (e.g. produced by ``cat a.gz b.gz``) are decoded as
    one continuous stream, and zero padding after a member is ignored, the same
    way CPython's ``gzip`` module reads them. An empty input yields nothing.
    No output chunk is larger than ``max_output_size``.
    """

    path: str | None = None
    max_output_size: int = DEFAULT_CHUNK_SIZE

    async def transform(
        self, chunks: AsyncIterable[bytes]
    ) -> AsyncGenerator[bytes, None]:
        engine = zlib.decompressobj(wbits=GZIP_WBITS)
        seen_input = False

        async for chunk in chunks:
            if not chunk:
                continue
            seen_input = True
            data = chunk
            while True:
                if engine.eof:
                    # Previous member is done; skip padding, start the next
                    data = data.lstrip(b"\x00")
                    if not data:
                        break
                    engine = zlib.decompressobj(wbits=GZIP_WBITS)
                try:
                    output = engine.decompress(data, self.max_output_size)
                except zlib.error as e:
                    raise DecompressionError(
                        f"Error decompressing gzip data: {e}", path=self.path
                    ) from e
                if output:
                    yield output
                if engine.eof:
                    data = engine.unused_data
                    continue
                data = engine.unconsumed_tail
                # A full output chunk may leave pending output inside zlib
                if not data and len(output) < self.max_output_size:
                    break

        if not seen_input:
            return

        if not engine.eof:
            raise DecompressionError(
                "Compressed file ended before the end-of-stream marker was reached",
                path=self.path,
            )
