"""
Semantic version model used to stamp aggregated documentation.

Versions have the form ``MAJOR.MINOR.MICRO[-TAG]``. Any tag marks the version
as a pre-release and is rendered back as ``-SNAPSHOT``.

Example:
    >>> v = parse_version("8.1.0-SNAPSHOT")
    >>> str(v)
    '8.1.0-SNAPSHOT'
    >>> minor_series(v)
    '8.1'
"""

from dataclasses import dataclass

PRERELEASE_SUFFIX = "SNAPSHOT"


class FormatError(Exception):
    """Raised when a version string or value is malformed."""
    pass


@dataclass(frozen=True)
class Version:
    """A three component version with an optional pre-release flag.

    Ordering looks at ``(major, minor, micro)`` only. A release and its
    pre-release are neither less nor greater than each other.
    """

    major: int
    minor: int
    micro: int
    is_prerelease: bool = False

    def __post_init__(self):
        for field_name in ("major", "minor", "micro"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise FormatError(f"Version {field_name} must be an integer: {value!r}")
            if value < 0:
                raise FormatError(f"Version {field_name} must not be negative: {value}")

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse a version string, see :func:`parse_version`."""
        return parse_version(text)

    def __str__(self) -> str:
        return to_display_string(self)

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) >= 0


def _parse_number(segment: str, text: str) -> int:
    # int() alone would accept "+1", " 1" and "1_0"
    if not segment.isdigit() or not segment.isascii():
        raise FormatError(f"Invalid version '{text}': '{segment}' is not a number")
    return int(segment)


def parse_version(text: str) -> Version:
    """
    Parse a ``MAJOR.MINOR.MICRO[-TAG]`` version string.

    Args:
        text: Version string (e.g., '8.1.0' or '8.1.0-SNAPSHOT')

    Returns:
        Parsed Version

    Raises:
        FormatError: If the string does not have exactly three numeric
            segments or carries a malformed tag
    """
    if not isinstance(text, str):
        raise FormatError(f"Version must be a string: {text!r}")

    segments = text.strip().split(".")
    if len(segments) != 3:
        raise FormatError(
            f"Invalid version '{text}': expected MAJOR.MINOR.MICRO, "
            + f"got {len(segments)} segment(s)"
        )

    major_text, minor_text, micro_text = segments
    is_prerelease = False
    if "-" in micro_text:
        micro_text, tag = micro_text.split("-", 1)
        if not tag or "-" in tag:
            raise FormatError(f"Invalid version '{text}': malformed pre-release tag")
        is_prerelease = True

    return Version(
        major=_parse_number(major_text, text),
        minor=_parse_number(minor_text, text),
        micro=_parse_number(micro_text, text),
        is_prerelease=is_prerelease,
    )


def compare(a: Version, b: Version) -> int:
    """
    Compare two versions by major, then minor, then micro.

    The pre-release flag is ignored, so ``1.2.3`` and ``1.2.3-SNAPSHOT``
    compare equal.

    Returns:
        -1, 0 or 1
    """
    for left, right in ((a.major, b.major), (a.minor, b.minor), (a.micro, b.micro)):
        if left != right:
            return -1 if left < right else 1
    return 0


def to_display_string(version: Version) -> str:
    """Render a version as ``MAJOR.MINOR.MICRO`` plus ``-SNAPSHOT`` for pre-releases."""
    text = f"{version.major}.{version.minor}.{version.micro}"
    if version.is_prerelease:
        text += f"-{PRERELEASE_SUFFIX}"
    return text


def minor_series(version: Version) -> str:
    """Render the ``MAJOR.MINOR`` release series, used to key doc cross-links."""
    return f"{version.major}.{version.minor}"
