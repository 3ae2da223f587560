"""Version file dispatcher."""
from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Callable, NamedTuple

from pydantic import BaseModel

from update_check import messages
from update_check.errors import ErrorCollector, ManifestTypeError
from update_check.models.update_info import UpdateInfo
from update_check.schemas import (
    convert_json_schema_1_5_to_1_6,
    parse_json_schema_1_3,
    parse_json_schema_1_5,
    parse_json_schema_1_6,
)

logger = logging.getLogger(__name__)

SCHEMA_VERSION_KEY = "SchemaVersion"


class SchemaVersion(Enum):
    V1_3 = "1.3"
    V1_5 = "1.5"
    V1_6 = "1.6"


class SchemaStrategy(NamedTuple):
    parse: Callable[[dict, ErrorCollector], tuple[bool, BaseModel]]
    # Converts the parsed shape to UpdateInfo, None if it already is one.
    migrate: Callable[[BaseModel], UpdateInfo] | None = None


SCHEMAS: dict[SchemaVersion, SchemaStrategy] = {
    SchemaVersion.V1_3: SchemaStrategy(
        parse_json_schema_1_3, convert_json_schema_1_5_to_1_6
    ),
    SchemaVersion.V1_5: SchemaStrategy(
        parse_json_schema_1_5, convert_json_schema_1_5_to_1_6
    ),
    SchemaVersion.V1_6: SchemaStrategy(parse_json_schema_1_6),
}


def parse_json_string(
    json_string: str | bytes, errors: ErrorCollector
) -> tuple[bool, UpdateInfo]:
    """Parse a version file of any supported schema into an UpdateInfo.

    The returned UpdateInfo never has is_update_available set; that is
    decided after platform filtering.
    """
    try:
        if isinstance(json_string, bytes):
            json_string = json_string.decode("utf-8-sig")
        # Windows tools often save version files with a byte order mark
        document = json.loads(json_string.removeprefix("\ufeff"))

        if not isinstance(document, dict) or SCHEMA_VERSION_KEY not in document:
            errors.append(messages.missing_entry(SCHEMA_VERSION_KEY))
            return False, UpdateInfo()

        schema_value = document[SCHEMA_VERSION_KEY]
        if not isinstance(schema_value, str):
            raise ManifestTypeError(f"{SCHEMA_VERSION_KEY} must be a string.")

        try:
            schema_version = SchemaVersion(schema_value)
        except ValueError:
            logger.debug("Unsupported schema version %r", schema_value)
            errors.append(messages.UNSUPPORTED_SCHEMA_VERSION)
            return False, UpdateInfo()

        logger.debug("Parsing version file with schema %s", schema_version.value)
        strategy = SCHEMAS[schema_version]
        is_parsed, parsed = strategy.parse(document, errors)
        if not is_parsed:
            # 1.6 keeps whatever releases were read, older shapes are dropped
            return False, parsed if isinstance(parsed, UpdateInfo) else UpdateInfo()

        if strategy.migrate is not None:
            parsed = strategy.migrate(parsed)

        return True, parsed

    # JSONDecodeError and UnicodeDecodeError are ValueErrors too, deeply
    # nested documents exhaust the decoder's recursion limit
    except (ValueError, RecursionError) as e:
        errors.append(f"{messages.FAILED_TO_PARSE_VERSION_FILE} {e}")
        return False, UpdateInfo()
