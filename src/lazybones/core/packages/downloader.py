"""Download template packages into the local cache."""
from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.request import urlopen

from lazybones.core.utils.io import ensure_parent_dir

from .exceptions import PackageNotFoundError
from .models import PackageLocation

logger = logging.getLogger(__name__)

COPY_BUFFER_SIZE = 64 * 1024


class PackageDownloader:
    """Fetches template archives, reusing cached copies when present."""

    def download_package(
        self,
        location: PackageLocation,
        name: str,
        version: Optional[str] = None,
    ) -> Path:
        """Return the cached archive for ``location``, downloading it if needed.

        A failed download never leaves a partial archive in the cache.

        Raises:
            PackageNotFoundError: If the remote resource does not exist.
            urllib.error.URLError: For any other transport failure.
        """
        package_file = Path(location.cache_location)
        if package_file.exists():
            return package_file

        if location.remote_location is None:
            raise PackageNotFoundError(name, version)

        ensure_parent_dir(package_file)
        logger.debug("%s is not cached locally", package_file)
        logger.debug("Downloading %s into %s", location.remote_location, package_file)

        try:
            with urlopen(location.remote_location) as response, open(package_file, "wb") as out:
                shutil.copyfileobj(response, out, COPY_BUFFER_SIZE)
        except Exception as exc:
            package_file.unlink(missing_ok=True)
            if _is_not_found(exc):
                raise PackageNotFoundError(name, version) from exc
            raise

        return package_file


def _is_not_found(exc: BaseException) -> bool:
    if isinstance(exc, HTTPError):
        return exc.code == 404
    if isinstance(exc, URLError):
        return isinstance(exc.reason, FileNotFoundError)
    return isinstance(exc, FileNotFoundError)


__all__ = ["PackageDownloader"]
