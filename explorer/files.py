import logging
import os
from dataclasses import dataclass

import aiofiles

logger = logging.getLogger(__name__)

READ_ERROR_PLACEHOLDER = "Error reading file."


@dataclass
class LocalFile:
    """An uploaded file: ``path`` is relative and includes the top folder name."""

    path: str
    source: str

    async def read(self) -> str:
        async with aiofiles.open(self.source, encoding="utf-8") as f:
            content: str = await f.read()
            return content


def scan_directory(root: str, ignored_dirs: list[str] | None = None) -> list[LocalFile]:
    """List every file under ``root`` as an upload batch, in sorted walk order."""
    root = os.path.abspath(os.path.expanduser(root))
    top = os.path.basename(root.rstrip(os.sep))
    prefix = [top] if top else []
    ignored = set(ignored_dirs or [])
    entries = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in ignored)
        rel_dir = os.path.relpath(dirpath, root)
        for name in sorted(filenames):
            parts = prefix if rel_dir == "." else [*prefix, *rel_dir.split(os.sep)]
            entries.append(LocalFile(path="/".join([*parts, name]), source=os.path.join(dirpath, name)))
    return entries


async def read_text(entry: LocalFile, placeholder: str = READ_ERROR_PLACEHOLDER) -> str:
    try:
        return await entry.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read %s: %s", entry.path, e)
        return placeholder
