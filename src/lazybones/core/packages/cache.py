"""Inspect the local cache of downloaded template archives."""
from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Tuple

CACHED_ARCHIVE_PATTERN = re.compile(r"^(.*)-(\d+\.\d[^-]*(?:-SNAPSHOT)?)\.zip$")


class TemplateCache:
    """Read-only view of the template cache directory."""

    def __init__(self, cache_dir: Path) -> None:
        self.cache_dir = Path(cache_dir).expanduser()

    def cached_templates(self) -> Dict[str, List[str]]:
        """Return ``{template name: [versions, newest first]}`` for cached archives.

        Archives without a version in their name (downloaded from a URL) are
        not listed.
        """
        templates: Dict[str, List[str]] = {}
        if not self.cache_dir.is_dir():
            return templates

        for path in sorted(self.cache_dir.iterdir()):
            match = CACHED_ARCHIVE_PATTERN.match(path.name)
            if not match or not path.is_file():
                continue
            templates.setdefault(match.group(1), []).append(match.group(2))

        return {
            name: sorted(versions, key=version_sort_key, reverse=True)
            for name, versions in sorted(templates.items())
        }


def version_sort_key(version: str) -> Tuple:
    """Sort key ordering ``1.10`` after ``1.9`` and snapshots before releases."""
    base, _, qualifier = version.partition("-")
    parts = tuple(
        (0, int(p), "") if p.isdigit() else (1, 0, p) for p in re.split(r"[.]", base)
    )
    # A release sorts after any qualified build of the same version.
    return (parts, (1, "") if not qualifier else (0, qualifier))


__all__ = ["CACHED_ARCHIVE_PATTERN", "TemplateCache", "version_sort_key"]
