"""Output filename generation."""

import re
from datetime import datetime, timezone

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9]")
_TIMESTAMP_SEPARATORS = re.compile(r"[:.]")

# Common per-component limit (ext4, APFS, NTFS)
MAX_FILENAME_BYTES = 255


def sanitize_description(description: str) -> str:
    """Replace every character outside [A-Za-z0-9] with an underscore."""
    return _UNSAFE_CHARS.sub("_", description)


def filesystem_timestamp(now: datetime | None = None) -> str:
    """
    Render a UTC timestamp safe for filenames, e.g. 2026-10-18T12-34-56-789Z.

    Millisecond precision; ':' and '.' are replaced with '-'.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    iso = now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"
    return _TIMESTAMP_SEPARATORS.sub("-", iso)


def generate_filename(
    description: str,
    is_variation: bool = False,
    variation_index: int | None = None,
    now: datetime | None = None,
) -> str:
    """
    Return clay_<description>_[variation_<n+1>_]<timestamp>.png.

    Args:
        description: User description; sanitized for the filesystem
        is_variation: Whether this file belongs to a variation batch
        variation_index: Zero-based index within the batch
        now: Timestamp override (defaults to the current time)
    """
    sanitized = sanitize_description(description)
    timestamp = filesystem_timestamp(now)
    if is_variation and variation_index is not None:
        return f"clay_{sanitized}_variation_{variation_index + 1}_{timestamp}.png"
    return f"clay_{sanitized}_{timestamp}.png"


__all__ = [
    "MAX_FILENAME_BYTES",
    "filesystem_timestamp",
    "generate_filename",
    "sanitize_description",
]
