"""
Release schemas - the JSON shape of releases and release trains.

Field names are camelCase on the wire (``osBuild``, ``releaseTrain``,
``solutionUpdate.fileHash`` ...). Responses are rendered with
``exclude_none`` so a release without an offline bundle carries
``"solutionUpdate": {}``.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from release_spine.domains.azure_local.calculations import ReleaseTrain
from release_spine.domains.azure_local.schema import BuildType
from release_spine.domains.azure_local.transformer import Release


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SolutionUpdateSchema(CamelModel):
    """Offline update bundle; both fields absent when none is published."""

    uri: str | None = None
    file_hash: str | None = None


class ReleaseUrlsSchema(CamelModel):
    security: str = ""
    news: str = ""
    issues: str = ""


class ReleaseSchema(CamelModel):
    """A single Azure Local release."""

    version: str
    availability_date: date
    new_deployments: bool
    os_build: str
    release_train: str
    release: str
    release_shortened: str
    baseline_release: bool
    build_type: BuildType
    end_of_support_date: date | None = None
    supported: bool
    solution_update: SolutionUpdateSchema = Field(default_factory=SolutionUpdateSchema)
    urls: ReleaseUrlsSchema = Field(default_factory=ReleaseUrlsSchema)

    @classmethod
    def from_domain(cls, release: Release) -> ReleaseSchema:
        return cls(
            version=release.version,
            availability_date=release.availability_date,
            new_deployments=release.new_deployments,
            os_build=release.os_build,
            release_train=release.release_train,
            release=release.release,
            release_shortened=release.release_shortened,
            baseline_release=release.baseline_release,
            build_type=release.build_type,
            end_of_support_date=release.end_of_support_date,
            supported=release.supported,
            solution_update=SolutionUpdateSchema(
                uri=release.solution_update.uri,
                file_hash=release.solution_update.file_hash,
            ),
            urls=ReleaseUrlsSchema(
                security=release.urls.security,
                news=release.urls.news,
                issues=release.urls.issues,
            ),
        )


class ReleaseTrainSchema(CamelModel):
    supported: bool
    release_train: str

    @classmethod
    def from_domain(cls, train: ReleaseTrain) -> ReleaseTrainSchema:
        return cls(supported=train.supported, release_train=train.release_train)


class ReleasesResponse(CamelModel):
    releases: list[ReleaseSchema]

    @classmethod
    def from_domain(cls, releases: list[Release]) -> ReleasesResponse:
        return cls(releases=[ReleaseSchema.from_domain(r) for r in releases])


class ReleaseTrainsResponse(CamelModel):
    release_trains: list[ReleaseTrainSchema]

    @classmethod
    def from_domain(cls, trains: list[ReleaseTrain]) -> ReleaseTrainsResponse:
        return cls(release_trains=[ReleaseTrainSchema.from_domain(t) for t in trains])
