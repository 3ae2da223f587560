"""Version file schemas 1.3, 1.5 and 1.6.

Each schema is described by a table of fields. A field names the JSON key,
the attribute it populates and the reader that validates the value. Readers
return ``(ok, value)``: ``value`` may be partially populated even when ``ok``
is False, and every problem is appended to the shared ``ErrorCollector``
rather than raised. Values of the wrong JSON type raise ``ManifestTypeError``,
which is handled by the dispatcher.
"""
from __future__ import annotations

import re
from typing import Any, Callable, NamedTuple

from pydantic import BaseModel

from update_check import messages
from update_check.errors import ErrorCollector, ManifestTypeError
from update_check.models.update_base import PackageType, ReleaseType, TargetPlatform
from update_check.models.update_info import (
    DownloadLink,
    InfoPageLink,
    ReleaseInfo,
    UpdateInfo,
)
from update_check.models.update_info_v1_5 import UpdateInfo_1_5, UpdatePackage_1_5
from update_check.models.version import UINT32_MAX, VersionInfo

Reader = Callable[[str, Any, ErrorCollector], tuple[bool, Any]]


class SchemaField(NamedTuple):
    key: str
    attribute: str
    reader: Reader
    # Skip this field once an earlier field of the same object failed.
    requires_valid_fields: bool = False


# Schema 1.3 combined platform and package tokens.
TARGET_INFO_1_3: dict[str, tuple[TargetPlatform, PackageType]] = {
    "Windows_ZIP": (TargetPlatform.WINDOWS, PackageType.ZIP),
    "Windows_MSI": (TargetPlatform.WINDOWS, PackageType.MSI),
    "Linux_TAR": (TargetPlatform.LINUX, PackageType.TAR),
    "Linux_RPM": (TargetPlatform.LINUX, PackageType.RPM),
    "Linux_Debian": (TargetPlatform.LINUX, PackageType.DEBIAN),
}

VERSION_COMPONENTS = ("Major", "Minor", "Patch", "Build")

# scanf-style: up to four leading numbers, anything after them is ignored.
_VERSION_STRING_1_3 = re.compile(
    r"\s*(\d+)(?:\.\s*(\d+)(?:\.\s*(\d+)(?:\.\s*(\d+))?)?)?"
)


# region Type helpers


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return "string"


def _as_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ManifestTypeError(f"{key} must be a string, not {_type_name(value)}.")
    return value


def _as_list(key: str, value: Any) -> list:
    """A JSON array; null counts as an empty array."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ManifestTypeError(f"{key} must be an array, not {_type_name(value)}.")
    return value


def _as_uint32(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ManifestTypeError(f"{key} must be a number, not {_type_name(value)}.")
    if not 0 <= value <= UINT32_MAX:
        raise ManifestTypeError(f"{key} is out of range: {value}.")
    return value


def _has_keys(entry: Any, *keys: str) -> bool:
    return isinstance(entry, dict) and all(k in entry for k in keys)


# endregion

# region Readers


def read_string(key: str, value: Any, errors: ErrorCollector) -> tuple[bool, str]:
    return True, _as_str(key, value)


def read_version_string(
    key: str, value: Any, errors: ErrorCollector
) -> tuple[bool, VersionInfo | None]:
    """Read a schema 1.3 "Major.Minor.Patch.Build" string, 1 to 4 parts."""
    text = _as_str(key, value)
    match = _VERSION_STRING_1_3.match(text)
    if match is None:
        errors.append(messages.INVALID_VERSION_NUMBER)
        return False, None

    parts = [int(part) if part is not None else 0 for part in match.groups()]
    if any(part > UINT32_MAX for part in parts):
        errors.append(messages.INVALID_VERSION_NUMBER)
        return False, None

    major, minor, patch, build = parts
    return True, VersionInfo(major=major, minor=minor, patch=patch, build=build)


def read_version_object(
    key: str, value: Any, errors: ErrorCollector
) -> tuple[bool, VersionInfo | None]:
    """Read a {"Major", "Minor", "Patch", "Build"} object; absent parts are 0."""
    present = {}
    if isinstance(value, dict):
        present = {k: value[k] for k in VERSION_COMPONENTS if k in value}

    if not present:
        errors.append(messages.INVALID_VERSION_NUMBER)
        return False, None

    components = {k.lower(): _as_uint32(k, v) for k, v in present.items()}
    return True, VersionInfo(**components)


def read_info_links(
    key: str, value: Any, errors: ErrorCollector
) -> tuple[bool, list[InfoPageLink]]:
    entries = _as_list(key, value)
    if not entries:
        errors.append(messages.empty_list(key))
        return False, []

    ok = True
    links = []
    for entry in entries:
        if not _has_keys(entry, "URL", "Description"):
            ok = False
            errors.append(messages.incomplete_entry(key))
            continue

        links.append(
            InfoPageLink(
                url=_as_str("URL", entry["URL"]),
                page_description=_as_str("Description", entry["Description"]),
            )
        )

    return ok, links


def read_platforms(
    key: str, value: Any, errors: ErrorCollector
) -> tuple[bool, list[TargetPlatform]]:
    """Read a non-empty platform list, stopping at the first unknown platform."""
    entries = _as_list(key, value)
    if not entries:
        errors.append(messages.empty_list(key))
        return False, []

    platforms = []
    for entry in entries:
        platform = TargetPlatform.parse(_as_str(key, entry))
        if platform is None:
            errors.append(messages.invalid_value(key))
            return False, platforms
        platforms.append(platform)

    return True, platforms


def read_release_type(
    key: str, value: Any, errors: ErrorCollector
) -> tuple[bool, ReleaseType]:
    release_type = ReleaseType.parse(_as_str(key, value))
    if release_type is None:
        errors.append(messages.invalid_value(key))
        return False, ReleaseType.UNKNOWN
    return True, release_type


def read_tags(key: str, value: Any, errors: ErrorCollector) -> tuple[bool, list[str]]:
    return True, [_as_str(key, tag) for tag in _as_list(key, value)]


def read_download_url_1_3(
    key: str, value: Any, errors: ErrorCollector
) -> tuple[bool, list[UpdatePackage_1_5]]:
    entries = _as_list(key, value)
    if not entries:
        errors.append(messages.empty_list(key))
        return False, []

    ok = True
    packages = []
    for entry in entries:
        if not _has_keys(entry, "URL", "TargetInfo"):
            ok = False
            errors.append(messages.incomplete_entry(key))
            continue

        target = TARGET_INFO_1_3.get(_as_str("TargetInfo", entry["TargetInfo"]))
        if target is None:
            ok = False
            errors.append(messages.invalid_value("TargetInfo"))
            continue

        platform, package_type = target
        packages.append(
            UpdatePackage_1_5(
                url=_as_str("URL", entry["URL"]),
                package_type=package_type,
                target_platforms=[platform],
                # 1.3 predates release types, everything back then was GA.
                release_type=ReleaseType.GENERAL_AVAILABILITY,
            )
        )

    return ok, packages


def read_download_links_1_5(
    key: str, value: Any, errors: ErrorCollector
) -> tuple[bool, list[UpdatePackage_1_5]]:
    entries = _as_list(key, value)
    if not entries:
        errors.append(messages.empty_list(key))
        return False, []

    ok = True
    packages = []
    for entry in entries:
        entry = entry if isinstance(entry, dict) else {}
        missing = next(
            (
                k
                for k in ("URL", "TargetPlatforms", "PackageType", "ReleaseType")
                if k not in entry
            ),
            None,
        )
        if missing is not None:
            ok = False
            errors.append(messages.missing_entry(missing))
            continue

        release_ok, release_type = read_release_type(
            "ReleaseType", entry["ReleaseType"], errors
        )
        if not release_ok:
            ok = False
            continue

        package_type = PackageType.parse(_as_str("PackageType", entry["PackageType"]))
        if package_type is None:
            ok = False
            errors.append(messages.invalid_value("PackageType"))
            continue

        platforms_ok, platforms = read_platforms(
            "TargetPlatforms", entry["TargetPlatforms"], errors
        )
        if not platforms_ok:
            ok = False
            continue

        packages.append(
            UpdatePackage_1_5(
                url=_as_str("URL", entry["URL"]),
                package_type=package_type,
                release_type=release_type,
                target_platforms=platforms,
            )
        )

    return ok, packages


def read_download_links_1_6(
    key: str, value: Any, errors: ErrorCollector
) -> tuple[bool, list[DownloadLink]]:
    entries = _as_list(key, value)
    if not entries:
        errors.append(messages.empty_list(key))
        return False, []

    ok = True
    links = []
    for entry in entries:
        entry = entry if isinstance(entry, dict) else {}
        if "URL" not in entry:
            ok = False
            errors.append(messages.missing_entry("URL"))
            continue
        if "PackageType" not in entry:
            ok = False
            errors.append(messages.missing_entry("PackageType"))
            continue

        package_type = PackageType.parse(_as_str("PackageType", entry["PackageType"]))
        if package_type is None:
            ok = False
            errors.append(messages.invalid_value("PackageType"))
            continue

        package_name = entry.get("PackageName")
        links.append(
            DownloadLink(
                url=_as_str("URL", entry["URL"]),
                package_type=package_type,
                package_name=(
                    _as_str("PackageName", package_name)
                    if package_name is not None
                    else None
                ),
            )
        )

    return ok, links


# endregion

# region Field tables

SCHEMA_1_3_FIELDS = (
    SchemaField("VersionString", "release_version", read_version_string),
    SchemaField("ReleaseDate", "release_date", read_string),
    SchemaField("Description", "release_description", read_string),
    SchemaField("InfoPageURL", "info_links", read_info_links),
    SchemaField("DownloadURL", "available_packages", read_download_url_1_3),
)

SCHEMA_1_5_FIELDS = (
    SchemaField("ReleaseVersion", "release_version", read_version_object),
    SchemaField("ReleaseDate", "release_date", read_string),
    SchemaField("ReleaseDescription", "release_description", read_string),
    SchemaField("InfoPageLinks", "info_links", read_info_links),
    SchemaField("DownloadLinks", "available_packages", read_download_links_1_5),
)

SCHEMA_1_6_RELEASE_FIELDS = (
    SchemaField("ReleaseVersion", "version", read_version_object),
    SchemaField("ReleaseDate", "date", read_string),
    SchemaField("ReleaseTitle", "title", read_string),
    SchemaField("ReleaseType", "type", read_release_type),
    SchemaField("ReleasePlatforms", "target_platforms", read_platforms),
    SchemaField("ReleaseTags", "tags", read_tags),
    SchemaField("InfoPageLinks", "info_links", read_info_links),
    SchemaField(
        "DownloadLinks",
        "download_links",
        read_download_links_1_6,
        requires_valid_fields=True,
    ),
)

# endregion


def populate(
    document: dict,
    fields: tuple[SchemaField, ...],
    target: BaseModel,
    errors: ErrorCollector,
) -> bool:
    """Read every field of a table from a JSON object into a model."""
    is_parsed = True

    for field in fields:
        if field.requires_valid_fields and not is_parsed:
            continue

        if field.key not in document:
            is_parsed = False
            errors.append(messages.missing_entry(field.key))
            continue

        ok, value = field.reader(field.key, document[field.key], errors)
        if value is not None:
            setattr(target, field.attribute, value)
        is_parsed = is_parsed and ok

    return is_parsed


def parse_json_schema_1_3(
    document: dict, errors: ErrorCollector
) -> tuple[bool, UpdateInfo_1_5]:
    """Parse a schema 1.3 document directly into the schema 1.5 shape."""
    update_info = UpdateInfo_1_5()
    is_parsed = populate(document, SCHEMA_1_3_FIELDS, update_info, errors)
    return is_parsed, update_info


def parse_json_schema_1_5(
    document: dict, errors: ErrorCollector
) -> tuple[bool, UpdateInfo_1_5]:
    update_info = UpdateInfo_1_5()
    is_parsed = populate(document, SCHEMA_1_5_FIELDS, update_info, errors)
    return is_parsed, update_info


def parse_json_schema_1_6(
    document: dict, errors: ErrorCollector
) -> tuple[bool, UpdateInfo]:
    update_info = UpdateInfo()

    if "Releases" not in document:
        errors.append(messages.missing_entry("Releases"))
        return False, update_info

    releases = _as_list("Releases", document["Releases"])
    if not releases:
        errors.append(messages.empty_list("Releases"))
        return False, update_info

    is_parsed = True
    for release in releases:
        release_info = ReleaseInfo()
        release = release if isinstance(release, dict) else {}

        if not populate(release, SCHEMA_1_6_RELEASE_FIELDS, release_info, errors):
            is_parsed = False

        update_info.releases.append(release_info)

    return is_parsed, update_info


def convert_json_schema_1_5_to_1_6(update_info_1_5: UpdateInfo_1_5) -> UpdateInfo:
    """Convert the single release 1.5 shape to one release per platform set.

    Packages sharing the same target platforms and release type are grouped
    into one release. Conversion cannot fail since its input was validated.
    """
    update_info = UpdateInfo()

    for package in update_info_1_5.available_packages:
        release = next(
            (
                r
                for r in update_info.releases
                if r.target_platforms == package.target_platforms
                and r.type == package.release_type
            ),
            None,
        )

        if release is None:
            release = ReleaseInfo(
                version=update_info_1_5.release_version,
                title=update_info_1_5.release_description,
                date=update_info_1_5.release_date,
                info_links=[link.model_copy() for link in update_info_1_5.info_links],
                target_platforms=list(package.target_platforms),
                type=package.release_type,
                tags=[
                    *(TargetPlatform.to_string(p) for p in package.target_platforms),
                    ReleaseType.to_string(package.release_type),
                ],
            )
            update_info.releases.append(release)

        release.download_links.append(
            DownloadLink(url=package.url, package_type=package.package_type)
        )

    return update_info
