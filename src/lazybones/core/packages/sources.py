"""Package sources: remote repositories that publish template packages."""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List, Optional
from urllib.error import HTTPError
from urllib.parse import quote
from urllib.request import Request, urlopen

from lazybones.core.schemas.validation import validate_payload

from .exceptions import NoVersionsPublishedError
from .models import PackageInfo

if TYPE_CHECKING:
    from lazybones.core.config import Configuration

logger = logging.getLogger(__name__)

PACKAGE_SUFFIX = "-template"
DEFAULT_API_URL = "https://bintray.com/api/v1"
DEFAULT_TEMPLATE_URL = "https://dl.bintray.com/v1/content"


class PackageSource(ABC):
    """A source of information about packaged templates."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human readable name of the source, used when listing templates."""

    @abstractmethod
    def list_package_names(self) -> List[str]:
        """Return the names of the available packages (empty if there are none)."""

    @abstractmethod
    def fetch_package_info(self, name: str) -> Optional[PackageInfo]:
        """Return details about package ``name``, or None if this source doesn't host it."""

    @abstractmethod
    def template_url(self, name: str, version: str) -> str:
        """Return the URL to download ``version`` of package ``name`` from."""


class RemotePackageSource(PackageSource):
    """A repository on a Bintray style REST API.

    Packages are published as ``<name>-template``; the suffix is hidden from
    callers, who deal in bare template names.

    Args:
        repo_name: Repository path, e.g. ``pledbrook/lazybones-templates``.
        api_base_url: Base URL of the JSON API.
        template_base_url: Base URL template archives are downloaded from.
    """

    def __init__(
        self,
        repo_name: str,
        api_base_url: str = DEFAULT_API_URL,
        template_base_url: str = DEFAULT_TEMPLATE_URL,
    ) -> None:
        self.repo_name = repo_name
        self.api_base_url = api_base_url.rstrip("/")
        self.template_base_url = template_base_url.rstrip("/")

    @property
    def name(self) -> str:
        return self.repo_name

    def __repr__(self) -> str:
        return f"RemotePackageSource({self.repo_name!r})"

    def template_url(self, name: str, version: str) -> str:
        return f"{self.template_base_url}/{self.repo_name}/{name}{PACKAGE_SUFFIX}-{version}.zip"

    def list_package_names(self) -> List[str]:
        payload = self._get_json(f"/repos/{self.repo_name}/packages")
        validate_payload(payload, "package-list.schema.yaml")
        names = [
            entry["name"][: -len(PACKAGE_SUFFIX)]
            for entry in payload
            if entry["name"].endswith(PACKAGE_SUFFIX)
        ]
        return sorted(names)

    def fetch_package_info(self, name: str) -> Optional[PackageInfo]:
        """Fetch package details from the API.

        Returns:
            The package info, or None if the repository doesn't host ``name``.

        Raises:
            NoVersionsPublishedError: If the package exists but has no versions.
            urllib.error.URLError: For transport failures and HTTP errors other than 404.
            SchemaValidationError: If the API response is malformed.
        """
        try:
            payload = self._get_json(f"/packages/{self.repo_name}/{quote(name)}{PACKAGE_SUFFIX}")
        except HTTPError as exc:
            if exc.code != 404:
                raise
            logger.debug("%s does not host %s", self.repo_name, name)
            return None

        validate_payload(payload, "package-info.schema.yaml")
        if payload.get("latest_version") is None:
            raise NoVersionsPublishedError(name)

        pkg_name = payload["name"]
        if pkg_name.endswith(PACKAGE_SUFFIX):
            pkg_name = pkg_name[: -len(PACKAGE_SUFFIX)]

        return PackageInfo(
            source=self,
            name=pkg_name,
            latest_version=payload["latest_version"],
            versions=tuple(payload.get("versions") or ()),
            owner=payload.get("owner") or "",
            description=payload.get("desc") or "",
            url=payload.get("desc_url"),
        )

    def _get_json(self, path: str) -> Any:
        url = f"{self.api_base_url}{path}"
        logger.debug("GET %s", url)
        req = Request(url, method="GET", headers={"Accept": "application/json"})
        with urlopen(req) as response:
            return json.loads(response.read().decode("utf-8"))


def build_package_sources(config: "Configuration") -> List[PackageSource]:
    """Build the ordered list of package sources named by ``templateRepositories``."""
    repositories = config.get_setting("templateRepositories") or []
    api_url = config.get_setting("repositories.apiUrl") or DEFAULT_API_URL
    template_url = config.get_setting("repositories.templateUrl") or DEFAULT_TEMPLATE_URL
    return [RemotePackageSource(repo, api_url, template_url) for repo in repositories]


__all__ = [
    "PACKAGE_SUFFIX",
    "PackageSource",
    "RemotePackageSource",
    "build_package_sources",
]
