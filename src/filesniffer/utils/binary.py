"""Binary/text classification of candidate files."""

from __future__ import annotations

import logging
from pathlib import Path

from filesniffer.config import DEFAULT_SAMPLE_BYTES
from filesniffer.utils.files import GZIP_EXTENSION, PathLike, extension_of

LOGGER = logging.getLogger(__name__)

BINARY = "binary"
TEXT = "text"

# Formats whose content is never worth sampling.
BINARY_EXTENSIONS = frozenset(
    {
        # archives and compressed data
        ".7z", ".apk", ".ar", ".arj", ".bz2", ".cab", ".cpio", ".deb", ".dmg",
        ".egg", ".gz", ".iso", ".jar", ".lz", ".lz4", ".lzma", ".rar", ".rpm",
        ".tar", ".tbz", ".tbz2", ".tgz", ".txz", ".war", ".whl", ".xz", ".z",
        ".zip", ".zst",
        # images
        ".bmp", ".cur", ".gif", ".heic", ".icns", ".ico", ".jpeg", ".jpg",
        ".pbm", ".pgm", ".png", ".ppm", ".psd", ".raw", ".tga", ".tif",
        ".tiff", ".webp", ".xcf",
        # audio and video
        ".aac", ".aif", ".aiff", ".avi", ".flac", ".flv", ".m4a", ".m4v",
        ".mid", ".midi", ".mkv", ".mov", ".mp2", ".mp3", ".mp4", ".mpeg",
        ".mpg", ".oga", ".ogg", ".ogv", ".opus", ".wav", ".webm", ".wma",
        ".wmv",
        # executables, libraries and bytecode
        ".a", ".bin", ".class", ".com", ".dll", ".dylib", ".elf", ".exe",
        ".lib", ".msi", ".o", ".obj", ".pyc", ".pyd", ".pyo", ".so", ".wasm",
        # fonts
        ".eot", ".otf", ".ttc", ".ttf", ".woff", ".woff2",
        # documents and databases
        ".doc", ".docx", ".odp", ".ods", ".odt", ".pdf", ".ppt", ".pptx",
        ".sqlite", ".sqlite3", ".db", ".xls", ".xlsx",
    }
)

# 0-8, 11, 14-31: tab, LF, FF, CR and everything from 0x7F up are tolerated.
_CONTROL_BYTES = frozenset([*range(0, 9), 11, *range(14, 32)])


def has_binary_extension(path: PathLike) -> bool:
    return extension_of(path) in BINARY_EXTENSIONS


def contains_control_bytes(data: bytes) -> bool:
    """Return True as soon as a control byte outside the text range is found."""
    return any(byte in _CONTROL_BYTES for byte in data)


def read_sample(path: PathLike, size: int = DEFAULT_SAMPLE_BYTES) -> bytes:
    """Read at most ``size`` bytes from the start of ``path``.

    Raises ``OSError`` when the file cannot be opened; callers decide how
    that is surfaced.
    """
    with Path(path).open("rb") as handle:
        return handle.read(size)


def is_binary(
    path: PathLike,
    *,
    gzip_mode: bool = False,
    sample_bytes: int = DEFAULT_SAMPLE_BYTES,
) -> bool:
    """Decide whether ``path`` should be skipped by the line scanner.

    With ``gzip_mode`` a ``.gz`` file is always text since its
    decompressed content is what gets scanned.
    """
    extension = extension_of(path)
    if gzip_mode and extension == GZIP_EXTENSION:
        return False
    if extension in BINARY_EXTENSIONS:
        LOGGER.debug("Skipping %s: binary extension %s", path, extension)
        return True
    binary = contains_control_bytes(read_sample(path, sample_bytes))
    if binary:
        LOGGER.debug("Skipping %s: control bytes in first %d bytes", path, sample_bytes)
    return binary


def classify(path: PathLike, *, gzip_mode: bool = False, sample_bytes: int = DEFAULT_SAMPLE_BYTES) -> str:
    return BINARY if is_binary(path, gzip_mode=gzip_mode, sample_bytes=sample_bytes) else TEXT
