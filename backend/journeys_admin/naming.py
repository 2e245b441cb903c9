"""
Journeys Admin Backend — File Naming

Hero images, stamps and reference photos are looked up by names derived from
the location name. Every derivation lives here so the convention stays in one place.
"""

import re
from pathlib import PurePath

HERO_IMAGE_EXT = ".jpg"
STAMP_EXT = ".png"
REFERENCE_IMAGE_EXT = ".jpg"

_DISALLOWED_CHARS = re.compile(r"[^a-z0-9\s_\-]")
_SEPARATOR_RUNS = re.compile(r"[\s_]+")


def location_slug(name: str) -> str:
    """
    Normalize a location name into a filename stem.

    Rules: lowercase, drop '&' and other special characters,
    collapse whitespace/underscore runs into a single '_'.

        "Griffith Park Observatory" -> "griffith_park_observatory"
        "Park & Gym"                -> "park_gym"
    """
    slug = name.lower().replace("&", "")
    slug = _DISALLOWED_CHARS.sub("", slug)
    slug = _SEPARATOR_RUNS.sub("_", slug)
    return slug.strip("_")


def hero_image_filename(name: str) -> str:
    return f"{location_slug(name)}{HERO_IMAGE_EXT}"


def stamp_filename(name: str) -> str:
    """Stamp file for a location. Accepts a name or an existing stamp filename."""
    if name.lower().endswith(STAMP_EXT):
        name = name[: -len(STAMP_EXT)]
    return f"{location_slug(name)}{STAMP_EXT}"


def reference_image_filename(name: str, index: int) -> str:
    return f"{location_slug(name)}_{index}{REFERENCE_IMAGE_EXT}"


def stock_photo_query(name: str) -> str:
    """Search term for the stock-photo API: '&' removed, spaces/underscores -> '+'."""
    query = name.replace("&", "")
    query = query.replace(" ", "+")
    return query.replace("_", "+")


def safe_filename(filename: str) -> str:
    """
    Validate a filename supplied by a caller before it is written to disk.

    Raises ValueError for empty names or names with a directory component.
    """
    if not filename or not filename.strip():
        raise ValueError("Filename is empty")
    if PurePath(filename).name != filename or filename in (".", ".."):
        raise ValueError(f"Filename must not contain a path: {filename!r}")
    return filename
