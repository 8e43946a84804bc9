"""GitHub Packages registry over GraphQL.

Implements `core.interfaces.registry.PackageRegistry`:
- versions are read through `repository.packages.versions`, walking the
  newest-first connection backwards (`last`/`before`) so pages arrive oldest
  chunk first;
- releases come from `repository.releases`;
- deletions use one `deletePackageVersion` mutation per id.

Every failure is raised as `RemoteCallError` with whatever message the API
supplied.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from version_cleaner.adapters.graphql_models import (
    DeleteMutationData,
    ReleasesQueryData,
    VersionsQueryData,
)
from version_cleaner.adapters.http_client import build_async_client
from version_cleaner.core.config import AppSettings
from version_cleaner.core.domain.errors import RemoteCallError
from version_cleaner.core.domain.models import VersionInfo, VersionsResult

logger = logging.getLogger(__name__)

PACKAGES_PREVIEW = "application/vnd.github.packages-preview+json"
PACKAGE_DELETES_PREVIEW = "application/vnd.github.package-deletes-preview+json"
MAX_RELEASES = 100

VERSIONS_QUERY = """
  query getVersions($owner: String!, $repo: String!, $package: String!, $last: Int!, $before: String) {
    repository(owner: $owner, name: $repo) {
      packages(first: 1, names: [$package]) {
        edges {
          node {
            name
            versions(last: $last, before: $before) {
              edges {
                node {
                  id
                  version
                }
              }
              pageInfo {
                hasPreviousPage
                startCursor
              }
            }
          }
        }
      }
    }
  }"""

RELEASES_QUERY = """
  query getReleases($owner: String!, $repo: String!, $first: Int!) {
    repository(owner: $owner, name: $repo) {
      releases(first: $first, orderBy: {field: CREATED_AT, direction: DESC}) {
        nodes {
          name
        }
      }
    }
  }"""

DELETE_MUTATION = """
  mutation deletePackageVersion($packageVersionId: ID!) {
    deletePackageVersion(input: {packageVersionId: $packageVersionId}) {
      success
    }
  }"""

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _remote_messages(payload: Any) -> list[str]:
    if not isinstance(payload, dict):
        return []
    errors = payload.get("errors")
    if isinstance(errors, list):
        return [e["message"] for e in errors if isinstance(e, dict) and isinstance(e.get("message"), str)]
    message = payload.get("message")
    if isinstance(message, str):
        return [message]
    return []


def _parse(model: type[_ModelT], data: dict[str, Any]) -> _ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise RemoteCallError([f"unexpected response shape: {exc.error_count()} invalid fields"]) from exc


class GitHubPackageRegistry:
    """Registry transport for GitHub Packages."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    async def _execute(
        self,
        query: str,
        variables: dict[str, Any],
        token: str,
        *,
        accept: str = PACKAGES_PREVIEW,
    ) -> dict[str, Any]:
        headers = {
            "Authorization": f"bearer {token}",
            "Accept": accept,
        }
        try:
            async with build_async_client(self._settings, extra_headers=headers) as client:
                response = await client.post(
                    self._settings.api_url,
                    json={"query": query, "variables": variables},
                )
        except httpx.HTTPError as exc:
            logger.debug("GraphQL request failed: %s", exc)
            raise RemoteCallError() from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.status_code >= 400:
            raise RemoteCallError(_remote_messages(payload), status_code=response.status_code)
        if not isinstance(payload, dict):
            raise RemoteCallError(status_code=response.status_code)
        if payload.get("errors"):
            raise RemoteCallError(_remote_messages(payload), status_code=response.status_code)

        data = payload.get("data")
        if not isinstance(data, dict):
            raise RemoteCallError(status_code=response.status_code)
        return data

    async def _query_versions(
        self,
        owner: str,
        repo: str,
        package_name: str,
        limit: int,
        token: str,
    ) -> VersionsResult:
        if limit <= 0:
            return VersionsResult(package_name=package_name)

        collected: list[VersionInfo] = []
        found_name: str | None = None
        before: str | None = None
        has_more = False
        remaining = limit

        while remaining > 0:
            data = await self._execute(
                VERSIONS_QUERY,
                {
                    "owner": owner,
                    "repo": repo,
                    "package": package_name,
                    "last": min(self._settings.graphql_page_size, remaining),
                    "before": before,
                },
                token,
            )
            parsed = _parse(VersionsQueryData, data)
            if parsed.repository is None or not parsed.repository.packages.edges:
                return VersionsResult(package_name=None)

            package = parsed.repository.packages.edges[0].node
            found_name = package.name
            page = [VersionInfo(id=e.node.id, label=e.node.version) for e in package.versions.edges]
            # Pages walk toward newer versions; prepending keeps newest-first order.
            collected = page + collected
            remaining -= len(page)

            has_more = package.versions.page_info.has_previous_page
            before = package.versions.page_info.start_cursor
            if not has_more or not page or before is None:
                break

        logger.debug("read %d versions of %s", len(collected), package_name)
        return VersionsResult(
            package_name=found_name,
            versions=collected,
            truncated=has_more and remaining <= 0,
        )

    async def query_oldest_versions(
        self,
        owner: str,
        repo: str,
        package_name: str,
        count: int,
        token: str,
    ) -> VersionsResult:
        return await self._query_versions(owner, repo, package_name, count, token)

    async def query_all_versions(
        self,
        owner: str,
        repo: str,
        package_name: str,
        token: str,
    ) -> VersionsResult:
        return await self._query_versions(
            owner, repo, package_name, self._settings.max_versions_page, token
        )

    async def query_releases(self, owner: str, repo: str, token: str) -> list[str]:
        data = await self._execute(
            RELEASES_QUERY,
            {"owner": owner, "repo": repo, "first": MAX_RELEASES},
            token,
        )
        parsed = _parse(ReleasesQueryData, data)
        if parsed.repository is None:
            return []
        return [node.name for node in parsed.repository.releases.nodes if node is not None and node.name]

    async def delete_versions_by_id(self, ids: Sequence[str], token: str) -> None:
        for version_id in ids:
            data = await self._execute(
                DELETE_MUTATION,
                {"packageVersionId": version_id},
                token,
                accept=PACKAGE_DELETES_PREVIEW,
            )
            parsed = _parse(DeleteMutationData, data)
            payload = parsed.delete_package_version
            if payload is None or not payload.success:
                raise RemoteCallError([f"version {version_id} was not deleted"])
            logger.info("deleted package version %s", version_id)
