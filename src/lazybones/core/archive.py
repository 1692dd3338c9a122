"""Unpack template archives, keeping the file permissions stored in them."""
from __future__ import annotations

import logging
import os
import shutil
import stat
import zipfile
from pathlib import Path
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

UNZIP_FILE_TYPE_MESSAGE = "unzip() has to be called on a *.zip file."
UNZIP_DESTINATION_MESSAGE = "'destination' has to be a directory."

EntryFilter = Callable[[Path], bool]


def unzip(
    archive: Path,
    destination: Path,
    entry_filter: Optional[EntryFilter] = None,
) -> List[Path]:
    """Extract ``archive`` into ``destination``.

    Args:
        archive: A regular file with a ``.zip`` extension.
        destination: An existing directory.
        entry_filter: Optional predicate receiving the target path of each
            entry; entries for which it returns False are skipped.

    Returns:
        The paths that were extracted, in archive order.

    Raises:
        ValueError: If ``archive`` is not a zip file, ``destination`` is not a
            directory, or an entry would land outside ``destination``.
    """
    archive = Path(archive)
    destination = Path(destination)
    if not archive.is_file() or not archive.name.lower().endswith(".zip"):
        raise ValueError(UNZIP_FILE_TYPE_MESSAGE)
    if not destination.is_dir():
        raise ValueError(UNZIP_DESTINATION_MESSAGE)

    root = destination.resolve()
    extracted: List[Path] = []
    with zipfile.ZipFile(archive) as zf:
        for info in zf.infolist():
            target = destination / info.filename
            if not _is_within(root, target):
                raise ValueError(f"Archive entry escapes the destination: {info.filename}")
            if entry_filter is not None and not entry_filter(target):
                continue

            if info.is_dir():
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(info) as src, open(target, "wb") as dst:
                    shutil.copyfileobj(src, dst)

            extracted.append(target)
            update_file_permissions(target, info.external_attr >> 16)

    logger.debug("Extracted %d entries from %s into %s", len(extracted), archive, destination)
    return extracted


def update_file_permissions(path: Path, unix_mode: int) -> None:
    """Apply the permission bits of ``unix_mode`` to ``path``.

    Owner bits are applied as given. Group bits are set to the same as the
    "other" bits. A mode with no permission bits (archives made on systems
    without Unix modes) leaves the file untouched.
    """
    perms = stat.S_IMODE(unix_mode) & 0o777
    if perms == 0:
        return
    owner = perms & 0o700
    other = perms & 0o007
    os.chmod(path, owner | (other << 3) | other)


def _is_within(root: Path, target: Path) -> bool:
    try:
        target.resolve().relative_to(root)
    except ValueError:
        return False
    return True


__all__ = ["unzip", "update_file_permissions"]
