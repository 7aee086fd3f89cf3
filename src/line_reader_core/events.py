"""Stream events for the text stream adapter.

A stream is represented as a sequence of ``Item`` events ended by exactly one
``Complete`` or ``Failure``. Carrying the terminal outcome in-band means a
failure can never race a completion.
"""

from collections.abc import AsyncGenerator, AsyncIterable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from line_reader_core.exceptions import LineReaderError

T = TypeVar("T")


@dataclass(frozen=True)
class Item(Generic[T]):
    """A single value delivered by the stream."""

    value: T


@dataclass(frozen=True)
class Complete:
    """The stream ended normally."""


@dataclass(frozen=True)
class Failure:
    """The stream was aborted by a pipeline failure."""

    error: LineReaderError


StreamEvent = Union[Item[T], Complete, Failure]


async def materialize(stream: AsyncIterable[T]) -> AsyncGenerator[StreamEvent, None]:
    """Convert an async stream into events ending with one terminal event.

    Args:
        stream: Async iterable that may raise LineReaderError

    Yields:
        Item for every value, then Complete or Failure
    """
    try:
        async for value in stream:
            yield Item(value)
    except LineReaderError as e:
        yield Failure(e)
        return
    yield Complete()


async def dematerialize(events: AsyncIterable[StreamEvent]) -> AsyncGenerator[T, None]:
    """Convert events back into a plain async stream.

    Values are yielded until the first terminal event; a Failure is raised.
    Nothing after the terminal event is delivered.
    """
    async for event in events:
        if isinstance(event, Item):
            yield event.value
        elif isinstance(event, Failure):
            raise event.error
        else:
            return
