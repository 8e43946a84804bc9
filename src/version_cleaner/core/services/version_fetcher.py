"""Version fetcher.

Wraps the registry's versions queries and normalizes the outcome into an
oldest-first list of `VersionInfo`, or a domain error.
"""

from __future__ import annotations

import logging

from version_cleaner.core.domain.errors import NotFoundError, RemoteCallError, wrap_remote_failure
from version_cleaner.core.domain.models import VersionInfo, VersionsResult
from version_cleaner.core.interfaces.registry import PackageRegistry

logger = logging.getLogger(__name__)

OLDEST_OPERATION = "query for oldest version"
ALL_OPERATION = "query for all versions"


def _oldest_first(
    result: VersionsResult,
    *,
    owner: str,
    repo: str,
    package_name: str,
) -> list[VersionInfo]:
    if result.package_name is None:
        raise NotFoundError(package_name=package_name, owner=owner, repo=repo)
    return list(reversed(result.versions))


async def fetch_oldest(
    registry: PackageRegistry,
    *,
    owner: str,
    repo: str,
    package_name: str,
    count: int,
    token: str,
) -> list[VersionInfo]:
    """Return the `count` oldest versions, oldest first.

    Fewer versions than requested is not an error; the discrepancy is logged.
    """

    try:
        result = await registry.query_oldest_versions(owner, repo, package_name, count, token)
    except RemoteCallError as exc:
        raise wrap_remote_failure(OLDEST_OPERATION, exc) from exc

    versions = _oldest_first(result, owner=owner, repo=repo, package_name=package_name)
    if len(versions) != count:
        logger.warning(
            "number of versions requested was: %d, but found: %d", count, len(versions)
        )
    return versions


async def fetch_all(
    registry: PackageRegistry,
    *,
    owner: str,
    repo: str,
    package_name: str,
    token: str,
) -> list[VersionInfo]:
    """Return every version the registry hands back, oldest first.

    The transport stops at its page bound. When it does, the list holds the
    oldest versions only and its length is a lower bound of the real total.
    """

    try:
        result = await registry.query_all_versions(owner, repo, package_name, token)
    except RemoteCallError as exc:
        raise wrap_remote_failure(ALL_OPERATION, exc) from exc

    versions = _oldest_first(result, owner=owner, repo=repo, package_name=package_name)
    if result.truncated:
        logger.warning(
            "only the oldest %d versions of %s were read; the observed total is a lower bound",
            len(versions),
            package_name,
        )
    return versions
