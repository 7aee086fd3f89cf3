import codecs
from dataclasses import dataclass, fields, is_dataclass
from typing import Any

from line_reader_core.exceptions import ConfigurationError

DEFAULT_ENCODING = "utf-8"
DEFAULT_CHUNK_SIZE = 64 * 1024
DEFAULT_COMPRESSED_SUFFIXES = (".gz",)
# Invalid bytes become U+FFFD unless "strict" is configured
DEFAULT_ERRORS = "replace"


@dataclass
class LineReaderConfig:
    """line reader configuration container."""

    encoding: str = DEFAULT_ENCODING
    errors: str = DEFAULT_ERRORS
    chunk_size: int = DEFAULT_CHUNK_SIZE
    compressed_suffixes: tuple[str, ...] = DEFAULT_COMPRESSED_SUFFIXES

    @classmethod
    def from_params(cls, params: Any) -> "LineReaderConfig":
        """Build a validated config from a dict or another config dataclass.

        Args:
            params: Dictionary of settings, a dataclass carrying the same
                fields, or None for defaults.

        Returns:
            Validated LineReaderConfig instance

        Raises:
            ConfigurationError: If a value has the wrong type or is out of range
        """
        if params is None:
            params_dict: dict[str, Any] = {}
        elif is_dataclass(params):
            params_dict = {
                f.name: getattr(params, f.name)
                for f in fields(params)
                if hasattr(params, f.name)
            }
        elif isinstance(params, dict):
            params_dict = params
        else:
            raise ConfigurationError(
                f"config must be a dict or dataclass, got {type(params).__name__}"
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(params_dict) - known)
        if unknown:
            raise ConfigurationError(f"unknown config keys: {', '.join(unknown)}")

        if "encoding" in params_dict and (
            not isinstance(params_dict["encoding"], str) or not params_dict["encoding"]
        ):
            raise ConfigurationError("encoding must be a non-empty string")

        if "errors" in params_dict:
            if not isinstance(params_dict["errors"], str):
                raise ConfigurationError("errors must be a string")
            try:
                codecs.lookup_error(params_dict["errors"])
            except LookupError as e:
                raise ConfigurationError(
                    f"unknown error handler: {params_dict['errors']}"
                ) from e

        if "chunk_size" in params_dict:
            chunk_size = params_dict["chunk_size"]
            if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
                raise ConfigurationError("chunk_size must be an integer")
            if chunk_size <= 0:
                raise ConfigurationError("chunk_size must be positive")

        suffixes = params_dict.get("compressed_suffixes", DEFAULT_COMPRESSED_SUFFIXES)
        if not isinstance(suffixes, (list, tuple)) or not all(
            isinstance(s, str) and s for s in suffixes
        ):
            raise ConfigurationError(
                "compressed_suffixes must be a list of non-empty strings"
            )

        return cls(
            encoding=params_dict.get("encoding", DEFAULT_ENCODING),
            errors=params_dict.get("errors", DEFAULT_ERRORS),
            chunk_size=params_dict.get("chunk_size", DEFAULT_CHUNK_SIZE),
            compressed_suffixes=tuple(suffixes),
        )
