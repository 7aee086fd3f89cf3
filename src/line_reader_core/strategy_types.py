"""Strategy type definitions for the line reader pipeline.

This module defines the abstract base classes for the pluggable stages of the
pipeline: the chunk source that reads raw bytes, and the transforms
(decompression, decoding) applied to its output in sequence.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator, AsyncIterable
from typing import Any


class ChunkSourceStrategy(ABC):
    """Abstract base class for chunk sources.

    Chunk sources produce the raw bytes of a resource as an ordered, lazy
    sequence of chunks.
    """

    @abstractmethod
    def read(self, path: str) -> AsyncGenerator[bytes, None]:
        """Read the resource at path as a stream of byte chunks.

        Args:
            path: Identifier for the raw input (a file-system path).

        Yields:
            Byte chunks in file order.

        Raises:
            SourceError: If the resource cannot be opened or read.
        """


class ChunkTransformStrategy(ABC):
    """Abstract base class for chunk transforms.

    A transform consumes an upstream chunk stream and emits zero or more
    downstream chunks per upstream chunk. Upstream failures propagate through
    unchanged; the transform's own failures are raised as LineReaderError.
    """

    @abstractmethod
    def transform(self, chunks: AsyncIterable[Any]) -> AsyncGenerator[Any, None]:
        """Transform an upstream chunk stream.

        Args:
            chunks: Async iterable yielding upstream chunks.

        Yields:
            Transformed chunks, in upstream order.
        """
