"""Core services: fetch, select and delete package versions."""

from version_cleaner.core.services.deletion_pipeline import delete_versions, get_version_ids
from version_cleaner.core.services.release_fetcher import fetch_release_names
from version_cleaner.core.services.version_fetcher import fetch_all, fetch_oldest
from version_cleaner.core.services.version_selector import select_not_kept, select_oldest

__all__ = [
    "delete_versions",
    "fetch_all",
    "fetch_oldest",
    "fetch_release_names",
    "get_version_ids",
    "select_not_kept",
    "select_oldest",
]
