"""version-cleaner command line.

Commands:
- `delete`: apply a retention policy to a package and delete what it selects.
- `versions`: list a package's versions with their release protection.

Every option also reads the GitHub Actions `INPUT_*` variable of the same
input, so the CLI runs unchanged as an action step.
"""

from __future__ import annotations

import asyncio
import logging
import os

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from version_cleaner.adapters import GitHubPackageRegistry
from version_cleaner.cli.ui_components import build_result_table, build_versions_table, summarize
from version_cleaner.core.config import AppSettings
from version_cleaner.core.domain.errors import AuthenticationError, ConfigurationError, VersionCleanerError
from version_cleaner.core.domain.models import DeletionInput
from version_cleaner.core.services import delete_versions, fetch_all
from version_cleaner.core.services.deletion_pipeline import fetch_protected

app = typer.Typer(
    no_args_is_help=True,
    help="Delete package versions from a repository's registry by retention policy.",
)

_console = Console()
_err_console = Console(stderr=True)


def _configure_logging(settings: AppSettings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def resolve_repository(owner: str, repo: str) -> tuple[str, str]:
    """Fill missing owner/repo from `GITHUB_REPOSITORY` (`owner/repo`)."""

    if owner and repo:
        return owner, repo
    slug = (os.environ.get("GITHUB_REPOSITORY") or "").strip()
    if "/" in slug:
        env_owner, env_repo = slug.split("/", 1)
        return owner or env_owner, repo or env_repo
    return owner, repo


def _fail(exc: Exception) -> typer.Exit:
    _err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
    return typer.Exit(code=1)


def _load_settings() -> AppSettings:
    try:
        return AppSettings()
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise _fail(ConfigurationError(f"invalid VERSION_CLEANER_ settings: {fields}")) from exc


@app.command()
def delete(
    package_version_ids: str = typer.Option(
        "",
        "--package-version-ids",
        envvar="INPUT_PACKAGE-VERSION-IDS",
        help="Comma-separated version ids to delete; skips every query.",
    ),
    owner: str = typer.Option("", envvar="INPUT_OWNER", help="Repository owner."),
    repo: str = typer.Option("", envvar="INPUT_REPO", help="Repository name."),
    package_name: str = typer.Option(
        "", "--package-name", envvar="INPUT_PACKAGE-NAME", help="Package to prune."
    ),
    num_old_versions_to_delete: int = typer.Option(
        0,
        "--num-old-versions-to-delete",
        envvar="INPUT_NUM-OLD-VERSIONS-TO-DELETE",
        help="Delete this many of the oldest versions.",
    ),
    num_versions_to_keep: int = typer.Option(
        0,
        "--num-versions-to-keep",
        envvar="INPUT_NUM-VERSIONS-TO-KEEP",
        help="Keep this many of the newest versions, delete the rest.",
    ),
    keep_released: bool = typer.Option(
        True,
        "--keep-released/--no-keep-released",
        envvar="INPUT_KEEP-RELEASED",
        help="Never delete versions matching a release name.",
    ),
    token: str = typer.Option(
        "",
        envvar=["INPUT_TOKEN", "GITHUB_TOKEN"],
        show_default=False,
        help="Token with package read/delete scopes.",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Select versions without deleting."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Resolve the versions selected by the policy and delete them."""

    settings = _load_settings()
    _configure_logging(settings, verbose)
    owner, repo = resolve_repository(owner, repo)

    request = DeletionInput(
        package_version_ids=package_version_ids,
        owner=owner,
        repo=repo,
        package_name=package_name,
        num_old_versions_to_delete=num_old_versions_to_delete,
        num_versions_to_keep=num_versions_to_keep,
        token=token,
        keep_released=keep_released,
        dry_run=dry_run,
    )
    registry = GitHubPackageRegistry(settings)

    try:
        result = asyncio.run(delete_versions(registry, request))
    except VersionCleanerError as exc:
        raise _fail(exc) from exc

    if not result.is_noop:
        _console.print(build_result_table(result))
    _console.print(summarize(result))


@app.command()
def versions(
    owner: str = typer.Option("", envvar="INPUT_OWNER", help="Repository owner."),
    repo: str = typer.Option("", envvar="INPUT_REPO", help="Repository name."),
    package_name: str = typer.Option(
        ..., "--package-name", envvar="INPUT_PACKAGE-NAME", help="Package to list."
    ),
    keep_released: bool = typer.Option(
        True,
        "--keep-released/--no-keep-released",
        envvar="INPUT_KEEP-RELEASED",
        help="Flag versions protected by a release name.",
    ),
    token: str = typer.Option(
        "",
        envvar=["INPUT_TOKEN", "GITHUB_TOKEN"],
        show_default=False,
        help="Token with package read scope.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """List versions oldest first, marking the ones a release protects."""

    settings = _load_settings()
    _configure_logging(settings, verbose)
    owner, repo = resolve_repository(owner, repo)
    request = DeletionInput(
        owner=owner,
        repo=repo,
        package_name=package_name,
        token=token,
        keep_released=keep_released,
    )
    if not request.token:
        raise _fail(AuthenticationError("No token found"))

    registry = GitHubPackageRegistry(settings)

    async def _collect():
        protected = await fetch_protected(registry, request)
        found = await fetch_all(
            registry,
            owner=request.owner,
            repo=request.repo,
            package_name=request.package_name,
            token=request.token,
        )
        return found, protected

    try:
        found, protected = asyncio.run(_collect())
    except VersionCleanerError as exc:
        raise _fail(exc) from exc

    _console.print(build_versions_table(found, protected))
    _console.print(f"{len(found)} versions, {len(protected)} release names.")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
