"""
Semantic format versions stamped on stored documents.

A version has the shape ``MAJOR.MINOR.PATCH[-PRERELEASE]`` where the
prerelease part is a label optionally followed by a number, e.g.
``1.5.0-alpha09``. Ordering is total:

- numeric fields compare first;
- a release sorts after every prerelease of the same numeric triple;
- prereleases compare by label, then by number (a missing number sorts first).

Usage:
    >>> FormatVersion.parse("1.5.0-alpha09") < FormatVersion.parse("1.5.0")
    True
    >>> str(FormatVersion.parse("1.7.0-beta02"))
    '1.7.0-beta02'
"""

import re
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Optional, Tuple, Union

from asset_migrate.errors import MalformedVersion

_VERSION_RE = re.compile(
    r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    r"(?:-(?P<prerelease>[0-9A-Za-z][0-9A-Za-z.\-]*))?$",
    re.ASCII,
)
_PRERELEASE_RE = re.compile(r"^(?P<label>.*?)(?P<digits>\d*)$", re.ASCII)


@total_ordering
@dataclass(frozen=True)
class FormatVersion:
    """
    Immutable, hashable, totally ordered format version.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        prerelease_label: Prerelease label (``"alpha"``), ``None`` for releases.
        prerelease_number: Trailing prerelease number, if any.
        prerelease_digits: Original digit text, kept so ``alpha09`` renders
            back as ``alpha09``. Ignored by comparisons.
    """

    major: int
    minor: int
    patch: int
    prerelease_label: Optional[str] = None
    prerelease_number: Optional[int] = None
    prerelease_digits: Optional[str] = field(default=None, compare=False, repr=False)

    ZERO = None  # assigned below the class body

    @classmethod
    def parse(cls, text) -> "FormatVersion":
        """Parse ``text`` or raise :class:`MalformedVersion`."""
        if not isinstance(text, str):
            raise MalformedVersion(text)
        match = _VERSION_RE.match(text.strip())
        if match is None:
            raise MalformedVersion(text)

        label = None
        number = None
        digits = None
        prerelease = match.group("prerelease")
        if prerelease is not None:
            parts = _PRERELEASE_RE.match(prerelease)
            label = parts.group("label")
            digits = parts.group("digits") or None
            if digits is not None:
                number = int(digits)

        return cls(
            int(match.group("major")),
            int(match.group("minor")),
            int(match.group("patch")),
            prerelease_label=label,
            prerelease_number=number,
            prerelease_digits=digits,
        )

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease_label is not None

    def sort_key(self) -> Tuple:
        if self.prerelease_label is None:
            return (self.major, self.minor, self.patch, 1, "", -1)
        number = self.prerelease_number if self.prerelease_number is not None else -1
        return (self.major, self.minor, self.patch, 0, self.prerelease_label, number)

    def __lt__(self, other):
        if not isinstance(other, FormatVersion):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease_label is None:
            return text
        if self.prerelease_digits is not None:
            digits = self.prerelease_digits
        elif self.prerelease_number is not None:
            digits = str(self.prerelease_number)
        else:
            digits = ""
        return f"{text}-{self.prerelease_label}{digits}"


FormatVersion.ZERO = FormatVersion(0, 0, 0)

VersionLike = Union[FormatVersion, str]


def coerce_version(value: VersionLike) -> FormatVersion:
    """Return ``value`` as a :class:`FormatVersion`, parsing text if needed."""
    if isinstance(value, FormatVersion):
        return value
    return FormatVersion.parse(value)


def compare(a: VersionLike, b: VersionLike) -> int:
    """Three-way comparison: -1 if ``a < b``, 0 if equal, 1 if ``a > b``."""
    left = coerce_version(a)
    right = coerce_version(b)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0
