"""Messages reported by the update check."""

CURRENT_SCHEMA_VERSION = "1.6"

# Fetching
URL_MUST_POINT_TO_A_JSON_FILE = "URL must point to a JSON file."
UNKNOWN_ERROR_OCCURRED = "An unknown error occurred: "
FAILED_TO_DOWNLOAD_VERSION_FILE = "Failed to download version file."
FAILED_TO_LOAD_VERSION_FILE = "Failed to load version file."
DOWNLOADED_AN_EMPTY_VERSION_FILE = "Downloaded an empty version file."
FAILED_TO_LOAD_LATEST_RELEASE_INFORMATION = "Failed to load latest release information."
MISSING_ASSETS_TAG = "The latest releases JSON is missing the assets element. "
ASSET_NOT_FOUND = "The required asset was not found in the assets list. "
DOWNLOAD_URL_NOT_FOUND_IN_ASSET = "The download url was not found for the required asset. "

# Parsing
FAILED_TO_PARSE_VERSION_FILE = "Failed to parse version file."
UNSUPPORTED_SCHEMA_VERSION = (
    "The schema version of the version file is not supported; "
    f"latest supported version is {CURRENT_SCHEMA_VERSION}."
)


def missing_entry(name: str) -> str:
    return f"The version file is missing the {name} entry. "


def empty_list(name: str) -> str:
    return f"The version file contains an empty {name} list. "


def incomplete_entry(name: str) -> str:
    return f"The version file contains an incomplete {name} entry. "


def invalid_value(name: str) -> str:
    return f"The version file contains an invalid {name} value. "


INVALID_VERSION_NUMBER = "The version file contains an invalid ReleaseVersion number. "
