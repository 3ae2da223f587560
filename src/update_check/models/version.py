from __future__ import annotations

import re
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated

UINT32_MAX = 0xFFFFFFFF

UInt32 = Annotated[int, Field(ge=0, le=UINT32_MAX)]

_VERSION_PATTERN = re.compile(
    r"\s*(\d+)\s*\.\s*(\d+)\s*\.\s*(\d+)\s*\.\s*(\d+)\s*"
)


class VersionComparison(IntEnum):
    OLDER = -1
    EQUAL = 0
    NEWER = 1


class VersionInfo(BaseModel):
    """A version of the format Major.Minor.Patch.Build."""

    model_config = ConfigDict(frozen=True)

    major: UInt32 = 0
    minor: UInt32 = 0
    patch: UInt32 = 0
    build: UInt32 = 0

    @classmethod
    def parse(cls, value: str) -> VersionInfo:
        """Parse exactly "major.minor.patch.build", surrounding whitespace allowed."""
        match = _VERSION_PATTERN.fullmatch(value)
        if match is None:
            raise ValueError(f"Invalid version string: {value!r}")

        major, minor, patch, build = (int(part) for part in match.groups())
        return cls(major=major, minor=minor, patch=patch, build=build)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return self.major, self.minor, self.patch, self.build

    def to_string(self) -> str:
        return ".".join(str(part) for part in self.as_tuple())

    def compare(self, other: VersionInfo) -> VersionComparison:
        """Compare this version to another version."""
        mine, theirs = self.as_tuple(), other.as_tuple()
        if mine > theirs:
            return VersionComparison.NEWER
        if mine < theirs:
            return VersionComparison.OLDER
        return VersionComparison.EQUAL

    def __str__(self) -> str:
        return self.to_string()

    def __lt__(self, other: VersionInfo) -> bool:
        return self.compare(other) is VersionComparison.OLDER

    def __le__(self, other: VersionInfo) -> bool:
        return self.compare(other) is not VersionComparison.NEWER

    def __gt__(self, other: VersionInfo) -> bool:
        return self.compare(other) is VersionComparison.NEWER

    def __ge__(self, other: VersionInfo) -> bool:
        return self.compare(other) is not VersionComparison.OLDER
