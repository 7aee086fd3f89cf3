"""Line segmentation of arbitrarily chunked text.

Text arrives in chunks whose boundaries have nothing to do with line
boundaries. The segmenter folds a small state over the chunks: the lines
completed by the latest chunk, and the unterminated remainder carried into
the next one. Only ``\\n`` and ``\\r\\n`` end a line; a lone ``\\r`` is kept as
part of the line.

After the real input ends, one synthetic ``"\\n"`` is fed through the same
step to flush the remainder. As a result, input that ends with a terminator
produces a trailing empty line, and empty input produces a single empty line:

    "a\\nb\\n" -> ["a", "b", ""]
    "a\\nb"    -> ["a", "b"]
    ""        -> [""]
"""

import re
from collections.abc import AsyncGenerator, AsyncIterable, Iterable, Iterator
from dataclasses import dataclass

LINE_TERMINATOR = re.compile(r"\r?\n")
FLUSH_TERMINATOR = "\n"


@dataclass(frozen=True)
class AccumulatorState:
    """Fold state threaded from one chunk to the next."""

    lines: tuple[str, ...] = ()
    remainder: str = ""


def segment_step(state: AccumulatorState, chunk: str) -> AccumulatorState:
    """Fold one text chunk into the accumulator.

    Args:
        state: State after the previous chunk
        chunk: Incoming text chunk (may be empty)

    Returns:
        New state whose ``lines`` are the lines completed by this chunk
    """
    *lines, remainder = LINE_TERMINATOR.split(state.remainder + chunk)
    return AccumulatorState(lines=tuple(lines), remainder=remainder)


def iter_lines(chunks: Iterable[str]) -> Iterator[str]:
    """Yield the lines of a synchronous sequence of text chunks."""
    state = AccumulatorState()
    for chunk in _with_flush(chunks):
        state = segment_step(state, chunk)
        yield from state.lines


async def split_lines(chunks: AsyncIterable[str]) -> AsyncGenerator[str, None]:
    """Yield the lines of an async stream of text chunks.

    If ``chunks`` raises, the error propagates and the pending remainder is
    discarded, so no partial line is ever emitted after a failure.

    Args:
        chunks: Async iterable yielding text chunks of any size

    Yields:
        str: Lines without their terminators, in source order
    """
    state = AccumulatorState()
    async for chunk in chunks:
        state = segment_step(state, chunk)
        for line in state.lines:
            yield line
    state = segment_step(state, FLUSH_TERMINATOR)
    for line in state.lines:
        yield line


def _with_flush(chunks: Iterable[str]) -> Iterator[str]:
    yield from chunks
    yield FLUSH_TERMINATOR
