"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets `delete` and `versions` share table styling.
"""

from __future__ import annotations

from typing import AbstractSet, Sequence

from rich.table import Table
from rich.text import Text

from version_cleaner.core.domain.models import DeletionResult, VersionInfo


def build_result_table(result: DeletionResult) -> Table:
    """Table of the ids the run deleted (or would delete on dry run)."""

    title = "Package versions selected (dry run)" if result.dry_run else "Deleted package versions"
    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Version id", style="cyan")
    for index, version_id in enumerate(result.deleted_ids, start=1):
        table.add_row(str(index), version_id)
    return table


def build_versions_table(versions: Sequence[VersionInfo], protected: AbstractSet[str]) -> Table:
    """Versions oldest first, flagging those a release protects."""

    table = Table(title="Package versions (oldest first)")
    table.add_column("Version", style="white", no_wrap=True)
    table.add_column("Id", style="cyan")
    table.add_column("Protection key", style="magenta")
    table.add_column("Released", style="green")
    for version in versions:
        key = version.protection_key
        released = Text("yes", style="bold green") if key in protected else Text("")
        table.add_row(version.label, version.id, key, released)
    return table


def summarize(result: DeletionResult) -> str:
    """One-line summary printed after every successful run."""

    if result.is_noop:
        return "No package versions were deleted."
    count = len(result.deleted_ids)
    noun = "version" if count == 1 else "versions"
    if result.dry_run:
        return f"Dry run: {count} package {noun} would be deleted."
    return f"Deleted {count} package {noun}."
