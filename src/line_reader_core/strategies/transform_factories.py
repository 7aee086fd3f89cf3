"""Transform chain construction for the line reader."""

from line_reader_core.config import DEFAULT_COMPRESSED_SUFFIXES, LineReaderConfig
from line_reader_core.strategies.decode import DecodeTransform
from line_reader_core.strategies.gunzip import GunzipTransform
from line_reader_core.strategy_types import ChunkTransformStrategy


def is_compressed(
    path: str, suffixes: tuple[str, ...] = DEFAULT_COMPRESSED_SUFFIXES
) -> bool:
    """Return True if the file name ends with a compressed-file suffix.

    The match is case-insensitive; file contents are never inspected.
    """
    lowered = path.lower()
    return any(lowered.endswith(suffix.lower()) for suffix in suffixes)


def build_transform_chain(
    path: str, config: LineReaderConfig
) -> list[ChunkTransformStrategy]:
    """Build the ordered transform chain for a file.

    Args:
        path: File-system path of the source, used for the compression policy.
        config: Reader configuration providing encoding and suffixes.

    Returns:
        ``[GunzipTransform, DecodeTransform]`` for compressed files,
        ``[DecodeTransform]`` otherwise.
    """
    transforms: list[ChunkTransformStrategy] = []
    if is_compressed(path, config.compressed_suffixes):
        transforms.append(
            GunzipTransform(path=path, max_output_size=config.chunk_size)
        )
    transforms.append(DecodeTransform(encoding=config.encoding, errors=config.errors))
    return transforms
