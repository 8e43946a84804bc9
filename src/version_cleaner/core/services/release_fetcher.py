"""Release fetcher: release names of a repository, used to protect versions."""

from __future__ import annotations

from version_cleaner.core.domain.errors import RemoteCallError, wrap_remote_failure
from version_cleaner.core.interfaces.registry import PackageRegistry

RELEASES_OPERATION = "query for releases"


async def fetch_release_names(
    registry: PackageRegistry,
    *,
    owner: str,
    repo: str,
    token: str,
) -> list[str]:
    try:
        return await registry.query_releases(owner, repo, token)
    except RemoteCallError as exc:
        raise wrap_remote_failure(RELEASES_OPERATION, exc) from exc
