import json

import pytest

from update_check import api, messages
from update_check.api import (
    check_for_updates,
    decide_update_available,
    resolve_comparison_version,
)
from update_check.errors import FetchError
from update_check.models.settings import EnvSettings
from update_check.models.update_base import PackageType, ReleaseType, TargetPlatform
from update_check.models.update_info import ReleaseInfo, UpdateInfo
from update_check.models.version import VersionInfo

WINDOWS = TargetPlatform.WINDOWS


class FakeFetcher:
    """Serves canned responses by url, and files by path."""

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.requested = []

    def _get(self, key):
        self.requested.append(key)
        response = self.responses.get(key)
        if isinstance(response, Exception):
            raise response
        if response is None:
            raise FetchError(f"{messages.FAILED_TO_DOWNLOAD_VERSION_FILE} {key!r} -> (404)")
        return response if isinstance(response, bytes) else json.dumps(response).encode()

    def fetch_url(self, url):
        return self._get(url)

    def read_file(self, path):
        return self._get(str(path))


@pytest.fixture
def settings():
    return EnvSettings(_env_file=None)


@pytest.fixture
def check(settings):
    def run(current_version, location, filename="updates.json", **kwargs):
        kwargs.setdefault("platform", WINDOWS)
        kwargs.setdefault("settings", settings)
        return check_for_updates(current_version, location, filename, **kwargs)

    return run


def test_scenario_newer_release_available(check, write_manifest, document_1_6):
    results = check("1.0.0.0", *write_manifest(document_1_6()))

    assert results.was_check_successful, results.error_message
    assert results.error_message == ""
    assert results.update_info.is_update_available
    assert len(results.update_info.releases) == 1


def test_scenario_current_version_is_newer(check, write_manifest, document_1_6):
    results = check("3.0.0.0", *write_manifest(document_1_6()))

    assert results.was_check_successful
    assert not results.update_info.is_update_available


def test_same_version_is_not_an_update(check, write_manifest, document_1_6):
    results = check(VersionInfo(major=2), *write_manifest(document_1_6()))

    assert results.was_check_successful
    assert not results.update_info.is_update_available


def test_scenario_no_release_for_platform(
    check, write_manifest, document_1_6, release_1_6
):
    document = document_1_6(release_1_6(ReleasePlatforms=["Darwin"]))
    results = check("1.0.0.0", *write_manifest(document))

    assert results.was_check_successful
    assert results.update_info.releases == []
    assert not results.update_info.is_update_available


def test_scenario_schema_1_3(check, write_manifest, document_1_3):
    del document_1_3["DownloadURL"][1]
    results = check("1.0.0.0", *write_manifest(document_1_3))

    assert results.was_check_successful, results.error_message
    (release,) = results.update_info.releases
    assert release.version == VersionInfo(major=1, minor=2, patch=3, build=4)
    assert release.type is ReleaseType.GENERAL_AVAILABILITY
    assert results.update_info.is_update_available


def test_scenario_unsupported_schema(check, write_manifest, document_1_6):
    document = document_1_6()
    document["SchemaVersion"] = "9.9"
    results = check("1.0.0.0", *write_manifest(document))

    assert not results.was_check_successful
    assert messages.UNSUPPORTED_SCHEMA_VERSION in results.error_message
    assert not results.update_info.is_update_available


def test_scenario_malformed_json(check, write_manifest):
    results = check("1.0.0.0", *write_manifest("{"))

    assert not results.was_check_successful
    assert "Failed to parse version file." in results.error_message


def test_schema_1_5_filtered_to_platform(check, write_manifest, document_1_5):
    results = check("1.5.2.0", *write_manifest(document_1_5))

    assert results.was_check_successful
    assert [r.type for r in results.update_info.releases] == [
        ReleaseType.GENERAL_AVAILABILITY,
        ReleaseType.BETA,
    ]
    assert not results.update_info.is_update_available


def test_first_newer_release_wins(check, write_manifest, document_1_6, release_1_6):
    document = document_1_6(
        release_1_6(ReleaseVersion={"Major": 1}),
        release_1_6(ReleaseVersion={"Major": 1, "Minor": 1}),
        release_1_6(ReleaseVersion={"Major": 0, "Build": 9}),
    )
    results = check("1.0.5.0", *write_manifest(document))

    assert results.update_info.is_update_available
    # Nothing is removed or reordered.
    assert [str(r.version) for r in results.update_info.releases] == [
        "1.0.0.0",
        "1.1.0.0",
        "0.0.0.9",
    ]


def test_invalid_document_is_never_an_update(
    check, write_manifest, document_1_6, release_1_6
):
    invalid = release_1_6()
    del invalid["ReleaseTitle"]
    results = check("1.0.0.0", *write_manifest(document_1_6(release_1_6(), invalid)))

    assert not results.was_check_successful
    assert results.error_message == messages.missing_entry("ReleaseTitle")
    assert not results.update_info.is_update_available


def test_filename_must_be_json(check):
    fetcher = FakeFetcher()
    results = check("1.0.0.0", "https://example.org", "updates.txt", fetcher=fetcher)

    assert not results.was_check_successful
    assert results.error_message == messages.URL_MUST_POINT_TO_A_JSON_FILE
    assert fetcher.requested == []


def test_missing_local_file(check, tmp_path):
    results = check("1.0.0.0", str(tmp_path), "missing.json")

    assert not results.was_check_successful
    assert results.error_message.startswith(messages.FAILED_TO_LOAD_VERSION_FILE)


def test_empty_local_file(check, write_manifest):
    results = check("1.0.0.0", *write_manifest(""))

    assert not results.was_check_successful
    assert results.error_message == messages.DOWNLOADED_AN_EMPTY_VERSION_FILE


def test_http_directory(check, document_1_6):
    fetcher = FakeFetcher({"https://example.org/tool/updates.json": document_1_6()})
    results = check("1.0.0.0", "https://example.org/tool/", fetcher=fetcher)

    assert results.was_check_successful, results.error_message
    assert results.update_info.is_update_available


def test_latest_release_asset(check, document_1_6):
    latest = "https://api.github.com/repos/acme/tool/releases/latest"
    asset_url = "https://github.com/acme/tool/releases/download/v2/updates.json"
    fetcher = FakeFetcher(
        {
            latest: {
                "assets": [
                    {"name": "tool.zip", "browser_download_url": "x"},
                    {"name": "updates.json", "browser_download_url": asset_url},
                ]
            },
            asset_url: document_1_6(),
        }
    )
    results = check("1.0.0.0", latest, fetcher=fetcher)

    assert results.was_check_successful, results.error_message
    assert fetcher.requested == [latest, asset_url]


def test_fetch_error_is_reported(check):
    fetcher = FakeFetcher(
        {"https://example.org/updates.json": FetchError("No route to host. ")}
    )
    results = check("1.0.0.0", "https://example.org", fetcher=fetcher)

    assert not results.was_check_successful
    assert results.error_message == "No route to host. "


def test_unexpected_error_is_reported(check):
    fetcher = FakeFetcher({"https://example.org/updates.json": KeyError("boom")})
    results = check("1.0.0.0", "https://example.org", fetcher=fetcher)

    assert not results.was_check_successful
    assert results.error_message.startswith(messages.UNKNOWN_ERROR_OCCURRED)
    assert "boom" in results.error_message


def test_invalid_current_version_is_reported(check, write_manifest, document_1_6):
    results = check("1.0", *write_manifest(document_1_6()))

    assert not results.was_check_successful
    assert results.error_message.startswith(messages.UNKNOWN_ERROR_OCCURRED)


def test_assumed_version_setting(check, write_manifest, document_1_6):
    settings = EnvSettings(_env_file=None, assume_version="5.0.0.0")
    results = check("1.0.0.0", *write_manifest(document_1_6()), settings=settings)

    assert results.was_check_successful
    assert not results.update_info.is_update_available


def test_assumed_version_from_environment(
    monkeypatch, write_manifest, document_1_6
):
    monkeypatch.setenv("RDTS_UPDATER_ASSUME_VERSION", "5.0.0.0")
    results = check_for_updates(
        "1.0.0.0", *write_manifest(document_1_6()), platform=WINDOWS
    )

    assert results.was_check_successful
    assert not results.update_info.is_update_available


def test_invalid_assumed_version_falls_back(check, write_manifest, document_1_6):
    # Product claims to be newest, but the override wins even when invalid.
    settings = EnvSettings(_env_file=None, assume_version="garbage")
    results = check("9.0.0.0", *write_manifest(document_1_6()), settings=settings)

    assert results.was_check_successful
    assert results.update_info.is_update_available


def test_platform_from_environment(monkeypatch, write_manifest, document_1_6):
    monkeypatch.setenv("RDTS_UPDATER_PLATFORM", "Darwin")
    results = check_for_updates("1.0.0.0", *write_manifest(document_1_6()))

    assert results.was_check_successful
    assert results.update_info.releases == []


@pytest.mark.parametrize(
    "assume_version,expected",
    [
        (None, "1.2.3.4"),
        ("2.0.0.1", "2.0.0.1"),
        ("2.0", "1.0.0.0"),
        ("", "1.0.0.0"),
    ],
)
def test_resolve_comparison_version(assume_version, expected):
    version = VersionInfo.parse("1.2.3.4")
    assert str(resolve_comparison_version(version, assume_version)) == expected


def test_decide_update_available_resets_flag():
    update_info = UpdateInfo(
        is_update_available=True,
        releases=[ReleaseInfo(version=VersionInfo(major=1))],
    )

    assert not decide_update_available(update_info, VersionInfo(major=1))
    assert not update_info.is_update_available


def test_api_version():
    assert str(api.get_api_version_info()) == "2.0.0.0"


@pytest.mark.parametrize(
    "convert,value,expected",
    [
        (api.target_platform_to_string, TargetPlatform.LINUX, "Ubuntu"),
        (api.target_platform_to_string, TargetPlatform.UNKNOWN, "Unknown"),
        (api.target_platform_to_string, "Windows", "undefined"),
        (api.package_type_to_string, PackageType.DEBIAN, "Debian"),
        (api.package_type_to_string, None, "undefined"),
        (api.release_type_to_string, ReleaseType.GENERAL_AVAILABILITY, "GA"),
        (api.release_type_to_string, 3, "undefined"),
    ],
)
def test_to_string(convert, value, expected):
    assert convert(value) == expected


def test_invalid_settings_still_check(monkeypatch, write_manifest, document_1_6):
    monkeypatch.setenv("RDTS_UPDATER_PLATFORM", "Linux")
    monkeypatch.setenv("RDTS_UPDATER_HTTP_TIMEOUT", "soon")
    results = check_for_updates("1.0.0.0", *write_manifest(document_1_6()))

    # The bad platform is ignored and the running platform is detected.
    assert results.was_check_successful, results.error_message
