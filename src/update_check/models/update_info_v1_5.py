from __future__ import annotations

from pydantic import BaseModel, Field

from update_check.models.update_base import PackageType, ReleaseType, TargetPlatform
from update_check.models.update_info import InfoPageLink
from update_check.models.version import VersionInfo


class UpdatePackage_1_5(BaseModel):
    url: str = ""
    package_type: PackageType = PackageType.UNKNOWN
    release_type: ReleaseType = ReleaseType.UNKNOWN
    target_platforms: list[TargetPlatform] = Field(default_factory=list)


class UpdateInfo_1_5(BaseModel):
    """A single release with platform tagged packages.

    Schema 1.3 and 1.5 documents both land here before conversion to the
    1.6 shape.
    """

    release_version: VersionInfo = Field(default_factory=VersionInfo)
    release_date: str = ""
    release_description: str = ""
    available_packages: list[UpdatePackage_1_5] = Field(default_factory=list)
    info_links: list[InfoPageLink] = Field(default_factory=list)
