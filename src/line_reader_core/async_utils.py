"""Async utility functions for the line reader.

This module contains utility functions for composing async chunk streams,
particularly for running byte streams through the transform chain.
"""

from collections.abc import AsyncGenerator, AsyncIterable, Callable, Sequence
from contextlib import AsyncExitStack
from typing import Any

from line_reader_core.strategy_types import ChunkTransformStrategy

Stage = Callable[[AsyncIterable[Any]], AsyncGenerator[Any, None]]


async def pipe(source: AsyncIterable[Any], *stages: Stage) -> AsyncGenerator[Any, None]:
    """Pipe a source stream through stages in order.

    Each stage pulls from the one before it, so a failure raised by any stage
    (or by the source) surfaces once at the end of the chain. When this
    generator finishes, fails, or is closed early, every stage is closed from
    last to first, ending with the source.

    Args:
        source: Async iterable yielding source items
        stages: Callables mapping an upstream stream to a downstream generator

    Yields:
        Items emitted by the last stage
    """
    async with AsyncExitStack() as stack:
        stream = source
        aclose = getattr(stream, "aclose", None)
        if aclose is not None:
            stack.push_async_callback(aclose)
        for stage in stages:
            stream = stage(stream)
            stack.push_async_callback(stream.aclose)

        async for item in stream:
            yield item


def apply_transforms(
    chunks: AsyncIterable[Any],
    transforms: Sequence[ChunkTransformStrategy],
) -> AsyncGenerator[Any, None]:
    """Pipe a chunk stream through transform strategies in order."""
    return pipe(chunks, *(stage.transform for stage in transforms))
