from __future__ import annotations

from champion_gallery.config import Settings


def thumbnail_url(image_file_name: str, settings: Settings) -> str:
    return settings.thumbnail_base + image_file_name


def portrait_url(image_file_name: str, settings: Settings) -> str:
    """Loading-screen portrait: extension swapped for the portrait suffix.

    Returns "" when the file name has no extension, which renders as a
    broken image rather than failing.
    """
    stem, dot, _ = image_file_name.rpartition(".")
    if not dot:
        return ""
    return settings.portrait_base + stem + settings.portrait_suffix


def stat_percent(value: int) -> int:
    return max(0, min(100, value * 10))
