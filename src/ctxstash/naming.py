"""Filename codec: index <-> entry filename, driven by StashConfig.

    encode_filename(12, cfg)        -> "00012.md"
    decode_ref("00012.md", cfg)     -> "00012"
    ref_index("00012")              -> 12

Round-trip is string-level: padding is a minimum width, so an index with
more digits than leading_zeros is rendered in full and decodes to the same
digits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ctxstash.config import CONFIG_FILENAME

if TYPE_CHECKING:
    from ctxstash.config import StashConfig


def pad_index(index: int, config: StashConfig) -> str:
    if index < 0:
        msg = f"index must be >= 0 (got {index})"
        raise ValueError(msg)
    return str(index).zfill(config.leading_zeros)


def encode_filename(index: int, config: StashConfig) -> str:
    return filename_for_ref(pad_index(index, config), config)


def filename_for_ref(ref: str, config: StashConfig) -> str:
    """Wrap a literal ref in the configured prefix/suffix. No validation."""
    return f"{config.file_prefix}{ref}{config.file_suffix}"


def decode_ref(filename: str, config: StashConfig) -> str | None:
    """Return the text between prefix and suffix, or None if filename is not ours.

    Matching is exact and case-sensitive. Overlapping prefix/suffix and an
    empty ref both count as no match.
    """
    prefix, suffix = config.file_prefix, config.file_suffix
    if len(filename) <= len(prefix) + len(suffix):
        return None
    if not filename.startswith(prefix) or not filename.endswith(suffix):
        return None
    return filename[len(prefix):len(filename) - len(suffix)]


def ref_index(ref: str) -> int | None:
    """Strict base-10 parse of a ref. Signs, spaces, underscores and non-ASCII digits fail."""
    if not ref or not ref.isascii() or not ref.isdigit():
        return None
    return int(ref)


def is_entry_filename(filename: str, config: StashConfig) -> bool:
    """True if filename names a context entry (and not the config file)."""
    return filename != CONFIG_FILENAME and decode_ref(filename, config) is not None
