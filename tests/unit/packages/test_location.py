"""Tests for resolving template names and URLs to package locations."""
from __future__ import annotations

from pathlib import Path

import pytest


class TestUrlTemplates:
    def test_url_uses_base_name_without_version(self, tmp_path: Path) -> None:
        from lazybones.core.packages import PackageLocationBuilder

        builder = PackageLocationBuilder(tmp_path)
        location = builder.build_package_location(
            "http://example.org/files/my-template.zip?x=1", None, []
        )
        assert location.remote_location == "http://example.org/files/my-template.zip?x=1"
        assert location.cache_location == tmp_path / "my-template.zip"

    def test_url_ignores_sources(self, tmp_path: Path, fake_source) -> None:
        from lazybones.core.packages import PackageLocationBuilder

        source = fake_source({"x": ("1.0", ["1.0"])})
        PackageLocationBuilder(tmp_path).build_package_location("file:///tmp/x.zip", "2.0", [source])
        assert source.lookups == []


class TestNamedTemplates:
    def test_cached_version_needs_no_lookup(self, tmp_path: Path, fake_source) -> None:
        from lazybones.core.packages import PackageLocationBuilder

        (tmp_path / "ratpack-1.2.zip").write_bytes(b"zip")
        source = fake_source({"ratpack": ("1.3", ["1.3", "1.2"])})

        location = PackageLocationBuilder(tmp_path).build_package_location("ratpack", "1.2", [source])
        assert location.remote_location is None
        assert location.cache_location == tmp_path / "ratpack-1.2.zip"
        assert source.lookups == []

    def test_latest_version_is_used_when_none_given(self, tmp_path: Path, fake_source) -> None:
        from lazybones.core.packages import PackageLocationBuilder

        source = fake_source({"ratpack": ("1.3", ["1.3", "1.2"])}, base_url="http://dl.example/repo")
        location = PackageLocationBuilder(tmp_path).build_package_location("ratpack", None, [source])
        assert location.remote_location == "http://dl.example/repo/ratpack-template-1.3.zip"
        assert location.cache_location == tmp_path / "ratpack-1.3.zip"

    def test_blank_version_means_latest(self, tmp_path: Path, fake_source) -> None:
        from lazybones.core.packages import PackageLocationBuilder

        source = fake_source({"ratpack": ("1.3", ["1.3"])})
        location = PackageLocationBuilder(tmp_path).build_package_location("ratpack", "  ", [source])
        assert location.cache_location == tmp_path / "ratpack-1.3.zip"

    def test_first_source_hosting_the_package_wins(self, tmp_path: Path, fake_source) -> None:
        from lazybones.core.packages import PackageLocationBuilder

        first = fake_source({}, base_url="http://one")
        second = fake_source({"x": ("2.0", ["2.0"])}, base_url="http://two")
        third = fake_source({"x": ("3.0", ["3.0"])}, base_url="http://three")

        location = PackageLocationBuilder(tmp_path).build_package_location(
            "x", "2.0", [first, second, third]
        )
        assert location.remote_location == "http://two/x-template-2.0.zip"
        assert first.lookups == ["x"]
        assert third.lookups == []

    def test_not_found_anywhere(self, tmp_path: Path, fake_source) -> None:
        from lazybones.core.packages import PackageLocationBuilder, PackageNotFoundError

        with pytest.raises(PackageNotFoundError) as exc:
            PackageLocationBuilder(tmp_path).build_package_location("ghost", None, [fake_source({})])
        assert exc.value.name == "ghost"
        assert str(exc.value) == "Cannot find a template named 'ghost'"

    def test_no_versions_published(self, tmp_path: Path, fake_source) -> None:
        from lazybones.core.packages import NoVersionsPublishedError, PackageLocationBuilder

        with pytest.raises(NoVersionsPublishedError):
            PackageLocationBuilder(tmp_path).build_package_location(
                "empty", None, [fake_source({"empty": (None, [])})]
            )

    def test_cache_dir_home_is_expanded(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        from lazybones.core.packages import PackageLocationBuilder

        monkeypatch.setenv("HOME", str(tmp_path))
        builder = PackageLocationBuilder(Path("~/cache"))
        assert builder.cache_path("x", "1.0") == tmp_path / "cache" / "x-1.0.zip"
        assert builder.cache_path("x") == tmp_path / "cache" / "x.zip"

    def test_only_last_source_hosts_the_package(self, tmp_path: Path, fake_source) -> None:
        """Sources are consulted in order until one knows the package."""
        from lazybones.core.packages import PackageLocationBuilder

        sources = [fake_source({}), fake_source({}), fake_source({"x": ("1.0", ["1.0"])}, base_url="http://3")]
        location = PackageLocationBuilder(tmp_path).build_package_location("x", None, sources)
        assert location.remote_location == "http://3/x-template-1.0.zip"
        assert [s.lookups for s in sources] == [["x"], ["x"], ["x"]]
