"""Deletion orchestration.

Sequential async pipeline:
    guard -> shortcut -> resolve ids -> protected releases -> fetch versions
    -> select -> delete

Each step gates the next; nothing is retried and the first error halts the
run before any deletion. The CLI only formats the `DeletionResult` or the
raised `VersionCleanerError`.
"""

from __future__ import annotations

import logging
from typing import AbstractSet

from version_cleaner.core.domain.errors import (
    AuthenticationError,
    ConfigurationError,
    RemoteCallError,
    wrap_remote_failure,
)
from version_cleaner.core.domain.models import DeletionInput, DeletionResult, RetentionPolicy
from version_cleaner.core.interfaces.registry import PackageRegistry
from version_cleaner.core.services.release_fetcher import fetch_release_names
from version_cleaner.core.services.version_fetcher import fetch_all, fetch_oldest
from version_cleaner.core.services.version_selector import select_not_kept, select_oldest

logger = logging.getLogger(__name__)

DELETE_OPERATION = "delete version mutation"

MISSING_INPUTS_MESSAGE = (
    "Could not get packageVersionIds. Explicitly specify using the 'package-version-ids' "
    "input or provide the 'package-name' and 'num-old-versions-to-delete' inputs to "
    "dynamically retrieve oldest versions, or the 'package-name' and "
    "'num-versions-to-keep' inputs to keep only the newest versions"
)


async def fetch_protected(registry: PackageRegistry, request: DeletionInput) -> frozenset[str]:
    """Release names that must never be deleted (empty unless `keep_released`)."""

    if not request.keep_released:
        return frozenset()
    names = await fetch_release_names(
        registry,
        owner=request.owner,
        repo=request.repo,
        token=request.token,
    )
    logger.debug("protecting %d release names", len(names))
    return frozenset(names)


async def get_version_ids(
    registry: PackageRegistry,
    request: DeletionInput,
    protected: AbstractSet[str] = frozenset(),
) -> list[str]:
    """Ids to delete for the request's policy, newest first for query modes."""

    policy = request.policy()

    if policy is RetentionPolicy.EXPLICIT_IDS:
        return list(request.package_version_ids)

    if policy is RetentionPolicy.OLDEST_N:
        versions = await fetch_oldest(
            registry,
            owner=request.owner,
            repo=request.repo,
            package_name=request.package_name,
            count=request.num_old_versions_to_delete,
            token=request.token,
        )
        return [v.id for v in select_oldest(versions, protected)]

    if policy is RetentionPolicy.KEEP_N:
        versions = await fetch_all(
            registry,
            owner=request.owner,
            repo=request.repo,
            package_name=request.package_name,
            token=request.token,
        )
        return [v.id for v in select_not_kept(versions, request.num_versions_to_keep, protected)]

    raise ConfigurationError(MISSING_INPUTS_MESSAGE)


async def delete_versions(registry: PackageRegistry, request: DeletionInput) -> DeletionResult:
    """Run the whole pipeline for one invocation."""

    if not request.token:
        raise AuthenticationError("No token found")

    if (
        not request.package_version_ids
        and request.num_old_versions_to_delete <= 0
        and request.num_versions_to_keep <= 0
    ):
        logger.info(
            "Either num-old-versions-to-delete or num-versions-to-keep needs to be "
            "specified. No versions will be deleted."
        )
        return DeletionResult(dry_run=request.dry_run)

    policy = request.policy()
    if policy is None:
        raise ConfigurationError(MISSING_INPUTS_MESSAGE)

    protected: frozenset[str] = frozenset()
    if policy is not RetentionPolicy.EXPLICIT_IDS:
        protected = await fetch_protected(registry, request)

    ids = await get_version_ids(registry, request, protected)
    result = DeletionResult(
        deleted_ids=ids,
        policy=policy,
        dry_run=request.dry_run,
        protected_count=len(protected),
    )

    if not ids:
        logger.info("no package versions selected for deletion")
        return result

    if request.dry_run:
        logger.info("dry run: %d versions would be deleted", len(ids))
        return result

    logger.info("deleting %d package versions", len(ids))
    try:
        await registry.delete_versions_by_id(ids, request.token)
    except RemoteCallError as exc:
        raise wrap_remote_failure(DELETE_OPERATION, exc) from exc
    return result
