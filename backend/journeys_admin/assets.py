"""
Journeys Admin Backend — Local Asset Storage

Generated stamps and reference photos are written under the directories
configured in settings. Existing files are overwritten.
"""

import asyncio
from pathlib import Path

from journeys_admin.config import log, settings
from journeys_admin.naming import safe_filename


class AssetError(Exception):
    pass


def stamps_dir() -> Path:
    return Path(settings.stamps_dir)


def images_dir() -> Path:
    return Path(settings.images_dir)


async def write_asset(directory: Path, filename: str, content: bytes) -> Path:
    """Write `content` to directory/filename, creating the directory if needed."""
    try:
        safe_filename(filename)
    except ValueError as e:
        raise AssetError(str(e)) from e

    path = directory / filename

    def _write() -> None:
        directory.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)

    try:
        await asyncio.to_thread(_write)
    except OSError as e:
        raise AssetError(f"Could not write {path}: {e}") from e

    log("INFO", "asset written", path=str(path), size_bytes=len(content))
    return path


async def save_stamp(filename: str, content: bytes) -> Path:
    return await write_asset(stamps_dir(), filename, content)


async def save_reference_image(filename: str, content: bytes) -> Path:
    return await write_asset(images_dir(), filename, content)
