"""Tests for search configuration."""

from __future__ import annotations

import pytest

from filesniffer.config import DEFAULT_CHUNK_SIZE, DEFAULT_SAMPLE_BYTES, SnifferConfig


class TestSnifferConfig:
    """Test SnifferConfig dataclass."""

    def test_default_config(self) -> None:
        """Should create config with default values."""
        config = SnifferConfig()

        assert config.depth == 0
        assert config.gzip_mode is False
        assert config.sample_bytes == DEFAULT_SAMPLE_BYTES == 512
        assert config.chunk_size == DEFAULT_CHUNK_SIZE
        assert config.max_line_bytes is None
        assert config.max_concurrency is None
        assert config.ignore_hidden is True

    def test_custom_config(self) -> None:
        config = SnifferConfig(depth=2, gzip_mode=True, max_concurrency=4)

        assert config.depth == 2
        assert config.gzip_mode is True
        assert config.max_concurrency == 4

    @pytest.mark.parametrize(
        "kwargs",
        [{"depth": -1}, {"sample_bytes": 0}, {"chunk_size": 0}, {"max_concurrency": 0}],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            SnifferConfig(**kwargs)

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should read FILESNIFFER_* overrides."""
        monkeypatch.setenv("FILESNIFFER_SAMPLE_BYTES", "1024")
        monkeypatch.setenv("FILESNIFFER_MAX_CONCURRENCY", "8")
        monkeypatch.setenv("FILESNIFFER_CHUNK_SIZE", "")

        config = SnifferConfig.from_env()

        assert config.sample_bytes == 1024
        assert config.max_concurrency == 8
        assert config.chunk_size == DEFAULT_CHUNK_SIZE

    def test_from_env_explicit_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FILESNIFFER_SAMPLE_BYTES", "1024")

        config = SnifferConfig.from_env(sample_bytes=64, depth=3)

        assert config.sample_bytes == 64
        assert config.depth == 3
