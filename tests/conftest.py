import copy
import json

import pytest


RELEASE_1_6 = {
    "ReleaseVersion": {"Major": 2, "Minor": 0, "Patch": 0, "Build": 0},
    "ReleaseDate": "2024-05-01",
    "ReleaseTitle": "Radeon Developer Tool 2.0",
    "ReleaseType": "GA",
    "ReleasePlatforms": ["Windows"],
    "ReleaseTags": ["Windows", "GA"],
    "InfoPageLinks": [
        {"URL": "https://example.org/releases", "Description": "Releases page"}
    ],
    "DownloadLinks": [
        {
            "URL": "https://example.org/tool-2.0.zip",
            "PackageType": "ZIP",
            "PackageName": "tool-2.0.zip",
        }
    ],
}

DOCUMENT_1_5 = {
    "SchemaVersion": "1.5",
    "ReleaseVersion": {"Major": 1, "Minor": 5, "Patch": 2},
    "ReleaseDate": "2020-01-15",
    "ReleaseDescription": "Tool 1.5.2",
    "InfoPageLinks": [
        {"URL": "https://example.org/product", "Description": "Product page"}
    ],
    "DownloadLinks": [
        {
            "URL": "https://example.org/tool.msi",
            "TargetPlatforms": ["Windows"],
            "PackageType": "MSI",
            "ReleaseType": "GA",
        },
        {
            "URL": "https://example.org/tool.tgz",
            "TargetPlatforms": ["Ubuntu"],
            "PackageType": "TAR",
            "ReleaseType": "GA",
        },
        {
            "URL": "https://example.org/tool.zip",
            "TargetPlatforms": ["Windows"],
            "PackageType": "ZIP",
            "ReleaseType": "GA",
        },
        {
            "URL": "https://example.org/tool-beta.zip",
            "TargetPlatforms": ["Windows"],
            "PackageType": "ZIP",
            "ReleaseType": "Beta",
        },
    ],
}

DOCUMENT_1_3 = {
    "SchemaVersion": "1.3",
    "VersionString": "1.2.3.4",
    "ReleaseDate": "2019-03-01",
    "Description": "Tool 1.2",
    "InfoPageURL": [{"URL": "https://example.org/old", "Description": "Old page"}],
    "DownloadURL": [
        {"URL": "https://example.org/tool-1.2.zip", "TargetInfo": "Windows_ZIP"},
        {"URL": "https://example.org/tool-1.2.deb", "TargetInfo": "Linux_Debian"},
    ],
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep RDTS_UPDATER_* variables of the host out of the tests."""
    for name in ("ASSUME_VERSION", "PLATFORM", "HTTP_TIMEOUT", "USER_AGENT", "VERBOSE"):
        monkeypatch.delenv(f"RDTS_UPDATER_{name}", raising=False)


@pytest.fixture
def release_1_6():
    """Factory for a valid schema 1.6 release, with overrides."""

    def make(**overrides):
        release = copy.deepcopy(RELEASE_1_6)
        release.update(overrides)
        return release

    return make


@pytest.fixture
def document_1_6(release_1_6):
    """Factory for a schema 1.6 document from release dicts."""

    def make(*releases):
        return {
            "SchemaVersion": "1.6",
            "Releases": list(releases) or [release_1_6()],
        }

    return make


@pytest.fixture
def document_1_5():
    return copy.deepcopy(DOCUMENT_1_5)


@pytest.fixture
def document_1_3():
    return copy.deepcopy(DOCUMENT_1_3)


@pytest.fixture
def write_manifest(tmp_path):
    """Write a document to tmp_path, returning (directory, file name)."""

    def write(document, name="updates.json"):
        path = tmp_path / name
        text = document if isinstance(document, str) else json.dumps(document)
        path.write_text(text, encoding="utf-8")
        return str(tmp_path), name

    return write
