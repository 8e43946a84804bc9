"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation at the edge (CLI/env) without leaking I/O into the core.
- Frozen models make versions and results safe to pass between stages.

Note:
- These models describe *what* a version or a request is, not *how* it is
  fetched from a registry.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


def protection_key(label: str) -> str:
    """Key compared against release names.

    Release names are usually a bare commit SHA while labels embed it as a
    suffix (`1.0.0-<sha>`), so everything after the first `-` is the key.
    `1.2.3-abc123` -> `abc123`; `1.2.3` -> `1.2.3`.
    """

    if "-" in label:
        return label.split("-", 1)[1]
    return label


class VersionInfo(BaseModel):
    """A single published version of a package."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque registry identifier used by the delete call.",
    )
    label: str = Field(
        ...,
        description="Version string, optionally `<version>-<commit sha>`.",
    )

    @property
    def protection_key(self) -> str:
        return protection_key(self.label)


class VersionsResult(BaseModel):
    """Raw outcome of a versions query, as the transport returns it.

    `versions` keeps registry order (newest first). `package_name` is None when
    the registry has no package matching the requested name.
    """

    model_config = ConfigDict(frozen=True)

    package_name: str | None = Field(
        default=None,
        description="Name of the matched package, None when not found.",
    )
    versions: list[VersionInfo] = Field(
        default_factory=list,
        description="Versions in registry order (newest first).",
    )
    truncated: bool = Field(
        default=False,
        description="True when more versions exist beyond the requested bound.",
    )


class RetentionPolicy(str, Enum):
    """Mutually exclusive deletion modes, listed in resolution priority."""

    EXPLICIT_IDS = "explicit-ids"
    OLDEST_N = "oldest-n"
    KEEP_N = "keep-n"


def _split_ids(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    return value


class DeletionInput(BaseModel):
    """Validated configuration record consumed by the orchestrator.

    Rules:
    - `package_version_ids` accepts a list or a comma-separated string.
    - The query-info helpers require every field the matching mode needs,
      token included.
    """

    model_config = ConfigDict(frozen=True)

    package_version_ids: list[str] = Field(
        default_factory=list,
        description="Explicit ids to delete; bypasses every query when set.",
    )
    owner: str = Field(default="", description="Repository owner (user or org).")
    repo: str = Field(default="", description="Repository name.")
    package_name: str = Field(default="", description="Package whose versions are pruned.")
    num_old_versions_to_delete: int = Field(
        default=0,
        description="Oldest-N mode: how many of the oldest versions to delete.",
    )
    num_versions_to_keep: int = Field(
        default=0,
        description="Keep-N mode: how many of the newest versions to keep.",
    )
    token: str = Field(default="", repr=False, description="Registry credential.")
    keep_released: bool = Field(
        default=True,
        description="Never delete versions whose label matches a release name.",
    )
    dry_run: bool = Field(
        default=False,
        description="Resolve the ids but skip the delete call.",
    )

    @field_validator("package_version_ids", mode="before")
    @classmethod
    def _normalize_ids(cls, value: Any) -> Any:
        return _split_ids(value)

    @field_validator("owner", "repo", "package_name", "token", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    def _has_package_coordinates(self) -> bool:
        return bool(self.owner and self.repo and self.package_name and self.token)

    def has_oldest_version_query_info(self) -> bool:
        return self._has_package_coordinates() and self.num_old_versions_to_delete > 0

    def has_num_to_keep_query_info(self) -> bool:
        return self._has_package_coordinates() and self.num_versions_to_keep > 0

    def policy(self) -> RetentionPolicy | None:
        """Resolve the retention mode in fixed priority order."""

        if self.package_version_ids:
            return RetentionPolicy.EXPLICIT_IDS
        if self.has_oldest_version_query_info():
            return RetentionPolicy.OLDEST_N
        if self.has_num_to_keep_query_info():
            return RetentionPolicy.KEEP_N
        return None


class DeletionResult(BaseModel):
    """Outcome of one orchestrator run."""

    deleted_ids: list[str] = Field(
        default_factory=list,
        description="Ids passed to the delete call (or that would be, on dry run).",
    )
    policy: RetentionPolicy | None = Field(
        default=None,
        description="Mode that produced the ids; None for the no-op shortcut.",
    )
    dry_run: bool = Field(default=False)
    protected_count: int = Field(
        default=0,
        ge=0,
        description="Size of the protected release-name set used for selection.",
    )

    @property
    def is_noop(self) -> bool:
        return not self.deleted_ids
