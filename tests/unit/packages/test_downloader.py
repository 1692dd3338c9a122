"""Tests for downloading template archives into the cache."""
from __future__ import annotations

import io
from pathlib import Path
from urllib.error import HTTPError, URLError

import pytest


class TestPackageDownloader:
    def test_cached_file_is_returned_without_download(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        from lazybones.core.packages import PackageDownloader, PackageLocation

        cached = tmp_path / "x-1.0.zip"
        cached.write_bytes(b"cached")

        def _fail(*args, **kwargs):
            raise AssertionError("urlopen must not be called")

        monkeypatch.setattr("lazybones.core.packages.downloader.urlopen", _fail)
        location = PackageLocation(remote_location="http://example.invalid/x.zip", cache_location=cached)
        assert PackageDownloader().download_package(location, "x", "1.0") == cached

    def test_download_from_file_url(self, tmp_path: Path) -> None:
        from lazybones.core.packages import PackageDownloader, PackageLocation

        remote = tmp_path / "remote" / "x-template-1.0.zip"
        remote.parent.mkdir()
        remote.write_bytes(b"archive bytes")
        target = tmp_path / "cache" / "x-1.0.zip"

        location = PackageLocation(remote_location=remote.as_uri(), cache_location=target)
        assert PackageDownloader().download_package(location, "x", "1.0") == target
        assert target.read_bytes() == b"archive bytes"

    def test_missing_file_url_is_not_found(self, tmp_path: Path) -> None:
        from lazybones.core.packages import PackageDownloader, PackageLocation, PackageNotFoundError

        target = tmp_path / "cache" / "x-1.0.zip"
        location = PackageLocation(
            remote_location=(tmp_path / "missing.zip").as_uri(), cache_location=target
        )
        with pytest.raises(PackageNotFoundError) as exc:
            PackageDownloader().download_package(location, "x", "1.0")
        assert str(exc.value) == "Cannot find version 1.0 of template 'x'"
        assert not target.exists()

    def test_http_404_is_not_found(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        from lazybones.core.packages import PackageDownloader, PackageLocation, PackageNotFoundError

        def _not_found(url, *args, **kwargs):
            raise HTTPError(url, 404, "Not Found", {}, io.BytesIO())

        monkeypatch.setattr("lazybones.core.packages.downloader.urlopen", _not_found)
        target = tmp_path / "x-2.0.zip"
        location = PackageLocation(remote_location="http://example.invalid/x.zip", cache_location=target)
        with pytest.raises(PackageNotFoundError):
            PackageDownloader().download_package(location, "x", "2.0")
        assert not target.exists()

    def test_other_failures_propagate_and_leave_no_partial_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from lazybones.core.packages import PackageDownloader, PackageLocation

        class _Broken(io.BytesIO):
            def __enter__(self):
                return self

            def __exit__(self, *exc):
                return False

            def read(self, *args):
                raise URLError("connection reset")

        monkeypatch.setattr("lazybones.core.packages.downloader.urlopen", lambda url: _Broken())
        target = tmp_path / "x-2.0.zip"
        location = PackageLocation(remote_location="http://example.invalid/x.zip", cache_location=target)
        with pytest.raises(URLError):
            PackageDownloader().download_package(location, "x", "2.0")
        assert not target.exists()

    def test_uncached_without_remote(self, tmp_path: Path) -> None:
        from lazybones.core.packages import PackageDownloader, PackageLocation, PackageNotFoundError

        location = PackageLocation(remote_location=None, cache_location=tmp_path / "x-1.0.zip")
        with pytest.raises(PackageNotFoundError):
            PackageDownloader().download_package(location, "x", "1.0")
