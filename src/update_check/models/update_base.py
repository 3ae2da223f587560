from __future__ import annotations

from enum import Enum

STRING_UNDEFINED = "undefined"


class _WireEnum(Enum):
    """Enum whose values are the strings used in version files."""

    @classmethod
    def parse(cls, value: str):
        """Parse a wire string into a member, None if unrecognized."""
        try:
            member = cls(value)
        except ValueError:
            return None

        if member.name == "UNKNOWN":
            return None
        return member

    @classmethod
    def to_string(cls, value) -> str:
        if isinstance(value, cls):
            return value.value
        return STRING_UNDEFINED


class TargetPlatform(_WireEnum):
    UNKNOWN = "Unknown"
    WINDOWS = "Windows"
    # Version files say "Ubuntu" for every Linux distribution.
    LINUX = "Ubuntu"
    RHEL = "RHEL"
    DARWIN = "Darwin"


class PackageType(_WireEnum):
    UNKNOWN = "Unknown"
    ZIP = "ZIP"
    MSI = "MSI"
    TAR = "TAR"
    RPM = "RPM"
    DEBIAN = "Debian"


class ReleaseType(_WireEnum):
    UNKNOWN = "Unknown"
    GENERAL_AVAILABILITY = "GA"
    BETA = "Beta"
    ALPHA = "Alpha"
    PATCH = "Patch"
    DEVELOPMENT = "Development"
