"""Resolve a template name and version to a download URL and cache path."""
from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Iterable, Optional
from urllib.parse import unquote, urlparse

from lazybones.core.config.converters import is_url

from .exceptions import PackageNotFoundError
from .models import PackageInfo, PackageLocation
from .sources import PackageSource

logger = logging.getLogger(__name__)

ARCHIVE_EXTENSION = ".zip"


class PackageLocationBuilder:
    """Works out where a template package comes from and where it is cached.

    Args:
        cache_dir: Directory holding cached template archives.
    """

    def __init__(self, cache_dir: Path) -> None:
        self.cache_dir = Path(cache_dir).expanduser()

    def build_package_location(
        self,
        name: str,
        version: Optional[str],
        sources: Iterable[PackageSource],
    ) -> PackageLocation:
        """Return the package location for ``name`` at ``version``.

        URLs are downloaded as-is and cached under the base name of their
        path. A named package whose requested version is already cached needs
        no source lookup at all. Otherwise the sources are queried in order.

        Raises:
            PackageNotFoundError: If no source hosts ``name``.
            NoVersionsPublishedError: If the hosting source has no versions of it.
        """
        if is_url(name):
            return self._build_for_url(name)

        if version and version.strip():
            cached = self.cache_path(name, version)
            if cached.exists():
                logger.debug("Found %s in the cache", cached)
                return PackageLocation(remote_location=None, cache_location=cached)

        info = self._find_package_info(name, sources)
        version_to_download = version if version and version.strip() else info.latest_version
        return PackageLocation(
            remote_location=info.source.template_url(info.name, version_to_download),
            cache_location=self.cache_path(name, version_to_download),
        )

    def cache_path(self, name: str, version: Optional[str] = None) -> Path:
        """Return ``<cache_dir>/<name>[-<version>].zip``."""
        suffix = f"-{version}" if version and version.strip() else ""
        return self.cache_dir / f"{name}{suffix}{ARCHIVE_EXTENSION}"

    def _build_for_url(self, url: str) -> PackageLocation:
        base_name = PurePosixPath(unquote(urlparse(url).path)).stem
        return PackageLocation(remote_location=url, cache_location=self.cache_path(base_name))

    def _find_package_info(self, name: str, sources: Iterable[PackageSource]) -> PackageInfo:
        for source in sources:
            logger.debug("Searching for %s in %r", name, source)
            info = source.fetch_package_info(name)
            if info is not None:
                logger.debug("Found %s in %r", name, source)
                return info
        raise PackageNotFoundError(name)


__all__ = ["PackageLocationBuilder", "ARCHIVE_EXTENSION"]
