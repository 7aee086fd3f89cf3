"""Character decoding transform."""

import codecs
from collections.abc import AsyncGenerator, AsyncIterable
from dataclasses import dataclass

from line_reader_core.config import DEFAULT_ENCODING, DEFAULT_ERRORS
from line_reader_core.exceptions import DecodeError
from line_reader_core.strategy_types import ChunkTransformStrategy


@dataclass
class DecodeTransform(ChunkTransformStrategy):
    """Decode a byte stream into text using an incremental decoder.

    Multi-byte characters split across byte chunks are held back until the
    rest of the character arrives. The encoding name is looked up when the
    stream starts, so an unknown name fails the stream rather than the caller.
    """

    encoding: str = DEFAULT_ENCODING
    errors: str = DEFAULT_ERRORS

    async def transform(self, chunks: AsyncIterable[bytes]) -> AsyncGenerator[str, None]:
        try:
            decoder = codecs.getincrementaldecoder(self.encoding)(errors=self.errors)
        except LookupError as e:
            raise DecodeError(
                f"Unknown encoding: {self.encoding}", encoding=self.encoding
            ) from e

        async for chunk in chunks:
            yield self._decode(decoder, chunk, final=False)
        yield self._decode(decoder, b"", final=True)

    def _decode(
        self, decoder: codecs.IncrementalDecoder, chunk: bytes, final: bool
    ) -> str:
        try:
            return decoder.decode(chunk, final)
        except UnicodeDecodeError as e:
            raise DecodeError(
                f"Invalid {self.encoding} data: {e}", encoding=self.encoding
            ) from e
        except LookupError as e:
            # unknown error handler name
            raise DecodeError(str(e), encoding=self.encoding) from e
