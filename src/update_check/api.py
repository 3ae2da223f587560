"""Checking for product updates."""
from __future__ import annotations

import logging

from update_check import messages
from update_check.errors import ErrorCollector, FetchError
from update_check.fetch import ContentFetcher, HttpContentFetcher, fetch_version_file
from update_check.models.settings import EnvSettings
from update_check.models.update_base import PackageType, ReleaseType, TargetPlatform
from update_check.models.update_info import Results, UpdateInfo
from update_check.models.version import VersionComparison, VersionInfo
from update_check.parser import parse_json_string
from update_check.platforms import detect_platform, filter_to_platform

logger = logging.getLogger(__name__)

API_VERSION = VersionInfo(major=2, minor=0, patch=0, build=0)

JSON_FILE_EXTENSION = ".json"

# Used when the assumed version override cannot be parsed.
DEFAULT_ASSUMED_VERSION = VersionInfo(major=1, minor=0, patch=0, build=0)


def get_api_version_info() -> VersionInfo:
    return API_VERSION


def target_platform_to_string(target_platform: TargetPlatform) -> str:
    return TargetPlatform.to_string(target_platform)


def package_type_to_string(package_type: PackageType) -> str:
    return PackageType.to_string(package_type)


def release_type_to_string(release_type: ReleaseType) -> str:
    return ReleaseType.to_string(release_type)


def resolve_comparison_version(
    product_version: VersionInfo, assume_version: str | None
) -> VersionInfo:
    """The version releases are compared against.

    ``assume_version`` (RDTS_UPDATER_ASSUME_VERSION) replaces the product
    version when set. If it is set but not "major.minor.patch.build", the
    product is assumed to be 1.0.0.0.
    """
    if assume_version is None:
        return product_version

    try:
        version = VersionInfo.parse(assume_version)
    except ValueError:
        logger.warning(
            "Ignoring invalid assumed version %r, using %s",
            assume_version,
            DEFAULT_ASSUMED_VERSION,
        )
        return DEFAULT_ASSUMED_VERSION

    logger.warning("Assuming product version %s instead of %s", version, product_version)
    return version


def decide_update_available(update_info: UpdateInfo, version: VersionInfo) -> bool:
    """Flag the update info if any release is newer than the version."""
    update_info.is_update_available = any(
        release.version.compare(version) is VersionComparison.NEWER
        for release in update_info.releases
    )
    return update_info.is_update_available


def check_for_updates(
    current_version: VersionInfo | str,
    latest_release_url: str,
    json_filename: str,
    *,
    fetcher: ContentFetcher | None = None,
    platform: TargetPlatform | None = None,
    settings: EnvSettings | None = None,
) -> Results:
    """Check whether a newer release of the product is available.

    ``latest_release_url`` is either a GitHub "releases/latest" API url, in
    which case ``json_filename`` names the release asset holding the version
    file, an http(s) url of the directory holding ``json_filename``, or a
    local directory.

    Never raises; failures are reported through the returned Results.
    """
    results = Results()
    errors = ErrorCollector()

    try:
        settings = settings or EnvSettings()

        if JSON_FILE_EXTENSION not in json_filename:
            errors.append(messages.URL_MUST_POINT_TO_A_JSON_FILE)
            return _finish(results, errors)

        if isinstance(current_version, str):
            current_version = VersionInfo.parse(current_version)

        if fetcher is None:
            with HttpContentFetcher(
                timeout=settings.http_timeout, user_agent=settings.user_agent
            ) as http_fetcher:
                content = fetch_version_file(
                    http_fetcher, latest_release_url, json_filename
                )
        else:
            content = fetch_version_file(fetcher, latest_release_url, json_filename)

        is_parsed, update_info = parse_json_string(content, errors)
        if not is_parsed:
            return _finish(results, errors)

        results.update_info = update_info
        results.was_check_successful = True

        platform = platform or settings.platform or detect_platform()
        if filter_to_platform(update_info, platform):
            version = resolve_comparison_version(
                current_version, settings.assume_version
            )
            decide_update_available(update_info, version)

    except FetchError as e:
        errors.append(str(e))
    except Exception as e:
        logger.exception("Unexpected error while checking for updates")
        errors.append(f"{messages.UNKNOWN_ERROR_OCCURRED}{e}")

    return _finish(results, errors)


def _finish(results: Results, errors: ErrorCollector) -> Results:
    if errors:
        results.was_check_successful = False
        results.update_info.is_update_available = False
        results.error_message = errors.message
        logger.warning("Check for updates failed: %s", results.error_message)
    return results
