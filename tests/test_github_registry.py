"""GitHub GraphQL transport, exercised against a respx-mocked endpoint."""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from version_cleaner.adapters.github_registry import (
    PACKAGE_DELETES_PREVIEW,
    PACKAGES_PREVIEW,
    GitHubPackageRegistry,
)
from version_cleaner.core.config import AppSettings
from version_cleaner.core.domain.errors import RemoteCallError

pytestmark = pytest.mark.asyncio

API_URL = "https://api.example.test/graphql"


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(api_url=API_URL, http_retries=0, graphql_page_size=100, max_versions_page=1000)


def versions_payload(labels_newest_first, *, has_previous=False, cursor=None, name="com.octo.app"):
    edges = [{"node": {"id": f"id-{label}", "version": label}} for label in labels_newest_first]
    return {
        "data": {
            "repository": {
                "packages": {
                    "edges": [
                        {
                            "node": {
                                "name": name,
                                "versions": {
                                    "edges": edges,
                                    "pageInfo": {"hasPreviousPage": has_previous, "startCursor": cursor},
                                },
                            }
                        }
                    ]
                }
            }
        }
    }


def _body(call) -> dict:
    return json.loads(call.request.content)


@respx.mock
async def test_oldest_versions_single_page(settings):
    route = respx.post(API_URL).mock(
        return_value=httpx.Response(200, json=versions_payload(["3", "2", "1"], has_previous=True, cursor="c"))
    )

    result = await GitHubPackageRegistry(settings).query_oldest_versions("octo", "app", "com.octo.app", 3, "t0k")

    assert result.package_name == "com.octo.app"
    assert [v.label for v in result.versions] == ["3", "2", "1"]
    # More (newer) versions exist past the requested oldest three.
    assert result.truncated

    request = route.calls.last.request
    assert request.headers["Authorization"] == "bearer t0k"
    assert request.headers["Accept"] == PACKAGES_PREVIEW
    variables = _body(route.calls.last)["variables"]
    assert variables == {"owner": "octo", "repo": "app", "package": "com.octo.app", "last": 3, "before": None}


@respx.mock
async def test_all_versions_walks_pages_from_oldest():
    settings = AppSettings(api_url=API_URL, http_retries=0, graphql_page_size=2, max_versions_page=5)
    route = respx.post(API_URL).mock(
        side_effect=[
            httpx.Response(200, json=versions_payload(["2", "1"], has_previous=True, cursor="c1")),
            httpx.Response(200, json=versions_payload(["4", "3"], has_previous=True, cursor="c2")),
            httpx.Response(200, json=versions_payload(["5"], has_previous=True, cursor="c3")),
        ]
    )

    result = await GitHubPackageRegistry(settings).query_all_versions("octo", "app", "com.octo.app", "t0k")

    assert [v.label for v in result.versions] == ["5", "4", "3", "2", "1"]
    assert result.truncated
    sent = [(_body(c)["variables"]["last"], _body(c)["variables"]["before"]) for c in route.calls]
    assert sent == [(2, None), (2, "c1"), (1, "c2")]


@respx.mock
async def test_all_versions_stops_when_no_previous_page(settings):
    route = respx.post(API_URL).mock(
        return_value=httpx.Response(200, json=versions_payload(["2", "1"], has_previous=False, cursor="c1"))
    )

    result = await GitHubPackageRegistry(settings).query_all_versions("octo", "app", "com.octo.app", "t0k")

    assert route.call_count == 1
    assert [v.id for v in result.versions] == ["id-2", "id-1"]
    assert not result.truncated


@respx.mock
async def test_missing_package_reports_not_found(settings):
    respx.post(API_URL).mock(
        return_value=httpx.Response(200, json={"data": {"repository": {"packages": {"edges": []}}}})
    )

    result = await GitHubPackageRegistry(settings).query_oldest_versions("octo", "app", "nope", 2, "t0k")

    assert result.package_name is None
    assert result.versions == []


@respx.mock
async def test_graphql_errors_raise_remote_call_error(settings):
    respx.post(API_URL).mock(
        return_value=httpx.Response(
            200,
            json={"data": {"repository": None}, "errors": [{"message": "Could not resolve to a Repository"}]},
        )
    )

    with pytest.raises(RemoteCallError) as excinfo:
        await GitHubPackageRegistry(settings).query_all_versions("octo", "nope", "pkg", "t0k")

    assert excinfo.value.messages == ["Could not resolve to a Repository"]


@respx.mock
async def test_http_error_status_carries_message(settings):
    respx.post(API_URL).mock(return_value=httpx.Response(401, json={"message": "Bad credentials"}))

    with pytest.raises(RemoteCallError) as excinfo:
        await GitHubPackageRegistry(settings).query_releases("octo", "app", "bad")

    assert excinfo.value.messages == ["Bad credentials"]
    assert excinfo.value.status_code == 401


@respx.mock
async def test_http_error_without_json_has_no_detail(settings):
    respx.post(API_URL).mock(return_value=httpx.Response(502, text="Bad gateway"))

    with pytest.raises(RemoteCallError) as excinfo:
        await GitHubPackageRegistry(settings).query_releases("octo", "app", "t0k")

    assert excinfo.value.messages == []


@respx.mock
async def test_network_error_is_wrapped(settings):
    respx.post(API_URL).mock(side_effect=httpx.ConnectError("connection refused"))

    with pytest.raises(RemoteCallError) as excinfo:
        await GitHubPackageRegistry(settings).query_releases("octo", "app", "t0k")

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@respx.mock
async def test_releases_skip_unnamed(settings):
    route = respx.post(API_URL).mock(
        return_value=httpx.Response(
            200,
            json={
                "data": {
                    "repository": {
                        "releases": {"nodes": [{"name": "abc123"}, {"name": None}, None, {"name": "v2"}]}
                    }
                }
            },
        )
    )

    names = await GitHubPackageRegistry(settings).query_releases("octo", "app", "t0k")

    assert names == ["abc123", "v2"]
    assert _body(route.calls.last)["variables"]["first"] == 100


@respx.mock
async def test_delete_issues_one_mutation_per_id(settings):
    route = respx.post(API_URL).mock(
        return_value=httpx.Response(200, json={"data": {"deletePackageVersion": {"success": True}}})
    )

    await GitHubPackageRegistry(settings).delete_versions_by_id(["v2", "v1"], "t0k")

    assert route.call_count == 2
    assert [_body(c)["variables"]["packageVersionId"] for c in route.calls] == ["v2", "v1"]
    assert route.calls.last.request.headers["Accept"] == PACKAGE_DELETES_PREVIEW


@respx.mock
async def test_delete_stops_at_first_unsuccessful_mutation(settings):
    route = respx.post(API_URL).mock(
        return_value=httpx.Response(200, json={"data": {"deletePackageVersion": {"success": False}}})
    )

    with pytest.raises(RemoteCallError, match="version v2 was not deleted"):
        await GitHubPackageRegistry(settings).delete_versions_by_id(["v2", "v1"], "t0k")

    assert route.call_count == 1


@respx.mock
async def test_malformed_response_is_a_remote_error(settings):
    respx.post(API_URL).mock(
        return_value=httpx.Response(
            200,
            json={"data": {"repository": {"packages": {"edges": [{"node": {"versions": {}}}]}}}},
        )
    )

    with pytest.raises(RemoteCallError, match="unexpected response shape"):
        await GitHubPackageRegistry(settings).query_oldest_versions("octo", "app", "pkg", 1, "t0k")
