"""Response shapes of the GitHub GraphQL queries.

Aliases map the camelCase wire names; unknown fields are ignored so schema
additions on the server side do not break parsing.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class VersionNode(_WireModel):
    id: str = Field(..., description="Package version node id.")
    version: str = Field(..., description="Version label.")


class VersionEdge(_WireModel):
    node: VersionNode


class PageInfo(_WireModel):
    has_previous_page: bool = Field(default=False, alias="hasPreviousPage")
    start_cursor: str | None = Field(default=None, alias="startCursor")


class VersionConnection(_WireModel):
    edges: list[VersionEdge] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo, alias="pageInfo")


class PackageNode(_WireModel):
    name: str
    versions: VersionConnection = Field(default_factory=VersionConnection)


class PackageEdge(_WireModel):
    node: PackageNode


class PackageConnection(_WireModel):
    edges: list[PackageEdge] = Field(default_factory=list)


class PackagesRepository(_WireModel):
    packages: PackageConnection = Field(default_factory=PackageConnection)


class VersionsQueryData(_WireModel):
    repository: PackagesRepository | None = None


class ReleaseNode(_WireModel):
    name: str | None = None


class ReleaseConnection(_WireModel):
    nodes: list[ReleaseNode | None] = Field(default_factory=list)


class ReleasesRepository(_WireModel):
    releases: ReleaseConnection = Field(default_factory=ReleaseConnection)


class ReleasesQueryData(_WireModel):
    repository: ReleasesRepository | None = None


class DeletePackageVersionPayload(_WireModel):
    success: bool | None = None


class DeleteMutationData(_WireModel):
    delete_package_version: DeletePackageVersionPayload | None = Field(
        default=None,
        alias="deletePackageVersion",
    )
