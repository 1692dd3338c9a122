"""Template package resolution, download and caching.

The pipeline is: ``PackageLocationBuilder`` turns a name and optional version
into a ``PackageLocation`` using the configured ``PackageSource`` list, then
``PackageDownloader`` makes sure the archive is in the cache.
"""
from __future__ import annotations

from .cache import TemplateCache
from .downloader import PackageDownloader
from .exceptions import NoVersionsPublishedError, PackageError, PackageNotFoundError
from .location import PackageLocationBuilder
from .models import PackageInfo, PackageLocation, TemplateArg
from .offline import is_offline
from .sources import PackageSource, RemotePackageSource, build_package_sources

__all__ = [
    "PackageInfo",
    "PackageLocation",
    "TemplateArg",
    "PackageSource",
    "RemotePackageSource",
    "build_package_sources",
    "PackageLocationBuilder",
    "PackageDownloader",
    "TemplateCache",
    "is_offline",
    "PackageError",
    "PackageNotFoundError",
    "NoVersionsPublishedError",
]
