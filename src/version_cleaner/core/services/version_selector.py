"""Version selection.

Pure decision logic: given versions in registry ingestion order (oldest first),
a retention rule and a set of protected keys, decide exactly which versions are
deleted. No I/O, no sorting by date or semver; registry order is trusted.

Output order is newest first among the selected versions.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Sequence

from version_cleaner.core.domain.models import VersionInfo, protection_key

logger = logging.getLogger(__name__)


def _unprotected_newest_first(
    versions: Sequence[VersionInfo],
    protected: AbstractSet[str],
) -> list[VersionInfo]:
    selected: list[VersionInfo] = []
    for version in reversed(versions):
        if protection_key(version.label) in protected:
            logger.info("keeping %s (%s): matches a release", version.label, version.id)
            continue
        selected.append(version)
    return selected


def select_oldest(
    all_oldest_first: Sequence[VersionInfo],
    protected: AbstractSet[str] = frozenset(),
) -> list[VersionInfo]:
    """Every unprotected version of the input, newest first."""

    return _unprotected_newest_first(all_oldest_first, protected)


def select_not_kept(
    all_oldest_first: Sequence[VersionInfo],
    number_to_keep: int,
    protected: AbstractSet[str] = frozenset(),
) -> list[VersionInfo]:
    """Versions outside the newest `number_to_keep`, minus protected ones.

    An input no longer than `number_to_keep` selects nothing. When the input
    was truncated by the fetch bound, the selection is computed on what was
    observed; it can only under-delete, never touch a kept version.
    """

    total = len(all_oldest_first)
    if total <= number_to_keep:
        logger.info("%d versions found, keeping %d: nothing to delete", total, number_to_keep)
        return []

    number_to_delete = total - max(number_to_keep, 0)
    return _unprotected_newest_first(all_oldest_first[:number_to_delete], protected)
