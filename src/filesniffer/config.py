"""Search configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_SAMPLE_BYTES = 512
DEFAULT_CHUNK_SIZE = 64 * 1024


def _env_int(name: str) -> int | None:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    return int(value)


@dataclass(slots=True)
class SnifferConfig:
    depth: int = 0
    gzip_mode: bool = False
    sample_bytes: int = DEFAULT_SAMPLE_BYTES
    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_line_bytes: int | None = None
    max_concurrency: int | None = None
    ignore_hidden: bool = True
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError("Depth must be >= 0")
        if self.sample_bytes <= 0:
            raise ValueError("sample_bytes must be positive")
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if self.max_concurrency is not None and self.max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")

    @classmethod
    def from_env(cls, **overrides: object) -> "SnifferConfig":
        """Build a config, letting FILESNIFFER_* variables override the defaults."""
        values: dict[str, object] = {}
        for key, env_name in (
            ("sample_bytes", "FILESNIFFER_SAMPLE_BYTES"),
            ("chunk_size", "FILESNIFFER_CHUNK_SIZE"),
            ("max_concurrency", "FILESNIFFER_MAX_CONCURRENCY"),
            ("max_line_bytes", "FILESNIFFER_MAX_LINE_BYTES"),
        ):
            env_value = _env_int(env_name)
            if env_value is not None:
                values[key] = env_value
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]
