"""Shared fixtures: an in-memory registry standing in for GitHub Packages."""

from __future__ import annotations

from typing import Sequence

import pytest

from version_cleaner.core.domain.errors import RemoteCallError
from version_cleaner.core.domain.models import VersionInfo, VersionsResult


def make_versions(*labels: str) -> list[VersionInfo]:
    """Versions oldest first, with ids `id1`, `id2`, ... in the same order."""

    return [VersionInfo(id=f"id{i}", label=label) for i, label in enumerate(labels, start=1)]


class FakeRegistry:
    """`PackageRegistry` double that records every call it receives."""

    def __init__(
        self,
        versions: Sequence[VersionInfo] = (),
        releases: Sequence[str] = (),
        *,
        package_found: bool = True,
        truncated: bool = False,
        failures: dict[str, RemoteCallError] | None = None,
    ) -> None:
        self.newest_first = list(reversed(versions))
        self.releases = list(releases)
        self.package_found = package_found
        self.truncated = truncated
        self.failures = failures or {}
        self.calls: list[tuple[str, tuple]] = []
        self.deleted: list[list[str]] = []

    def _record(self, name: str, *args: object) -> None:
        self.calls.append((name, args))
        if name in self.failures:
            raise self.failures[name]

    @property
    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def query_oldest_versions(self, owner, repo, package_name, count, token) -> VersionsResult:
        self._record("query_oldest_versions", owner, repo, package_name, count, token)
        if not self.package_found:
            return VersionsResult(package_name=None)
        return VersionsResult(package_name=package_name, versions=self.newest_first[-count:])

    async def query_all_versions(self, owner, repo, package_name, token) -> VersionsResult:
        self._record("query_all_versions", owner, repo, package_name, token)
        if not self.package_found:
            return VersionsResult(package_name=None)
        return VersionsResult(
            package_name=package_name,
            versions=self.newest_first,
            truncated=self.truncated,
        )

    async def query_releases(self, owner, repo, token) -> list[str]:
        self._record("query_releases", owner, repo, token)
        return list(self.releases)

    async def delete_versions_by_id(self, ids, token) -> None:
        self._record("delete_versions_by_id", list(ids), token)
        self.deleted.append(list(ids))


@pytest.fixture
def five_versions() -> list[VersionInfo]:
    return make_versions("0.1", "0.2", "0.3", "0.4", "0.5")
