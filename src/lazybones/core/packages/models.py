"""Value objects describing template packages and where they live."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from .sources import PackageSource

QUALIFIER_SEPARATOR = "::"


@dataclass(frozen=True, slots=True)
class PackageInfo:
    """Metadata about a template package published by a package source."""

    source: "PackageSource" = field(compare=False, repr=False)
    name: str
    latest_version: str
    versions: Tuple[str, ...] = ()
    owner: str = ""
    description: str = ""
    url: Optional[str] = None

    def has_version(self) -> bool:
        return len(self.versions) > 0


@dataclass(frozen=True, slots=True)
class PackageLocation:
    """Where a package can be downloaded from, and where it is cached.

    ``remote_location`` is None when the package is already cached and no
    download is needed.
    """

    remote_location: Optional[str]
    cache_location: Path


@dataclass(frozen=True, slots=True)
class TemplateArg:
    """A template reference such as ``ratpack::controller::service``.

    The first ``::`` separated part is the template name; the rest are
    qualifiers passed on to the template's post-install step.
    """

    template_name: str
    qualifiers: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, arg: str) -> "TemplateArg":
        parts = arg.split(QUALIFIER_SEPARATOR)
        return cls(template_name=parts[0], qualifiers=tuple(parts[1:]))

    def __str__(self) -> str:
        return QUALIFIER_SEPARATOR.join((self.template_name, *self.qualifiers))


__all__ = [
    "PackageInfo",
    "PackageLocation",
    "TemplateArg",
]
