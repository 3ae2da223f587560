from __future__ import annotations

from pydantic import BaseModel, Field

from update_check.models.update_base import PackageType, ReleaseType, TargetPlatform
from update_check.models.version import VersionInfo


class InfoPageLink(BaseModel):
    """A page accompanying an update notification, e.g. a releases page."""

    url: str
    page_description: str


class DownloadLink(BaseModel):
    url: str
    package_type: PackageType = PackageType.UNKNOWN
    package_name: str | None = None


class ReleaseInfo(BaseModel):
    version: VersionInfo = Field(default_factory=VersionInfo)
    # YYYY-MM-DD
    date: str = ""
    title: str = ""
    target_platforms: list[TargetPlatform] = Field(default_factory=list)
    type: ReleaseType = ReleaseType.UNKNOWN
    tags: list[str] = Field(default_factory=list)
    download_links: list[DownloadLink] = Field(default_factory=list)
    info_links: list[InfoPageLink] = Field(default_factory=list)


class UpdateInfo(BaseModel):
    is_update_available: bool = False
    releases: list[ReleaseInfo] = Field(default_factory=list)


class Results(BaseModel):
    """Outcome of a check for updates.

    When the check fails, was_check_successful is False and error_message
    describes what went wrong. The update_info is only meaningful when the
    check succeeded.
    """

    was_check_successful: bool = False
    error_message: str = ""
    update_info: UpdateInfo = Field(default_factory=UpdateInfo)
