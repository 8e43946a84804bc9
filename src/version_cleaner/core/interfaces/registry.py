"""Package registry transport contract.

Why Protocol:
- Structural contract (duck typing) with no inheritance requirement.
- The GraphQL adapter and the in-memory fakes used by tests are
  interchangeable.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from version_cleaner.core.domain.models import VersionsResult


@runtime_checkable
class PackageRegistry(Protocol):
    """Remote operations the core needs.

    Design rules:
    - Every method is async because it performs network I/O.
    - Any failure raises `core.domain.errors.RemoteCallError`; wrapping into
      domain errors happens in the core.
    - Retries, auth headers and timeouts are the implementation's concern.
    """

    async def query_oldest_versions(
        self,
        owner: str,
        repo: str,
        package_name: str,
        count: int,
        token: str,
    ) -> VersionsResult:
        """Return the `count` oldest versions, in registry (newest-first) order."""

        ...

    async def query_all_versions(
        self,
        owner: str,
        repo: str,
        package_name: str,
        token: str,
    ) -> VersionsResult:
        """Return versions starting from the oldest, bounded by the page limit."""

        ...

    async def query_releases(self, owner: str, repo: str, token: str) -> list[str]:
        """Return up to 100 release names of the repository."""

        ...

    async def delete_versions_by_id(self, ids: Sequence[str], token: str) -> None:
        """Delete every version in `ids`; raise on the first failure."""

        ...
