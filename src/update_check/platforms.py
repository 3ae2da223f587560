"""Running platform detection and release filtering."""
from __future__ import annotations

import logging
import sys

from update_check.models.update_base import TargetPlatform
from update_check.models.update_info import UpdateInfo

logger = logging.getLogger(__name__)


def detect_platform(platform: str | None = None) -> TargetPlatform:
    """Map a sys.platform value to the TargetPlatform releases are built for."""
    platform = sys.platform if platform is None else platform

    if platform.startswith("win"):
        return TargetPlatform.WINDOWS
    if platform.startswith("linux"):
        return TargetPlatform.LINUX
    if platform == "darwin":
        return TargetPlatform.DARWIN
    return TargetPlatform.UNKNOWN


def filter_to_platform(update_info: UpdateInfo, platform: TargetPlatform) -> bool:
    """Remove the releases that do not target the given platform.

    Returns True if there may be updates available for the platform. An
    unknown platform filters nothing.
    """
    if platform is TargetPlatform.UNKNOWN:
        return True

    before = len(update_info.releases)
    update_info.releases = [
        release
        for release in update_info.releases
        if platform in release.target_platforms
    ]
    logger.debug(
        "Kept %d of %d releases for %s",
        len(update_info.releases),
        before,
        platform.value,
    )

    return len(update_info.releases) > 0
