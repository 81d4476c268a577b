"""Version info for Scio and the Beam release it was built against."""

import re
import sys
from dataclasses import dataclass
from functools import total_ordering

__version__ = "0.12.0"
BEAM_VERSION = "2.41.0"

# Stands in for "no suffix" so a plain release sorts after its pre-releases.
RELEASE_SUFFIX = chr(sys.maxunicode)

# e.g. "0.10.0-beta1+42-828dca9a-SNAPSHOT", "0.10.0-SNAPSHOT", "0.10-e135ed2-SNAPSHOT"
_PATTERN = re.compile(r"(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)(?:\.(0|[1-9][0-9]*))?(?:-(.+))?")


class MalformedVersion(ValueError):
    """Raised when a string is not MAJOR.MINOR[.PATCH][-SUFFIX]."""

    def __init__(self, text):
        super().__init__(f"Malformed version: {text!r}")
        self.text = text


@total_ordering
@dataclass(frozen=True, eq=False)
class SemVer:
    """Parsed version, ordered by (major, minor, patch, upper-cased suffix)."""
    major: int
    minor: int
    patch: int
    suffix: str = RELEASE_SUFFIX

    @property
    def is_release(self) -> bool:
        return self.suffix == RELEASE_SUFFIX

    def _key(self):
        return (self.major, self.minor, self.patch, self.is_release, self.suffix.upper())

    def __eq__(self, other):
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash(self._key())

    def __str__(self):
        core = f"{self.major}.{self.minor}.{self.patch}"
        return core if self.is_release else f"{core}-{self.suffix}"


def parse_version(v: str) -> SemVer:
    """Parse 'X.Y[.Z][-suffix]' into a SemVer.

    Patch defaults to 0. Everything after the first '-' following the
    numeric core is the suffix. Raises MalformedVersion on anything else.
    """
    if not isinstance(v, str):
        raise MalformedVersion(v)
    m = _PATTERN.fullmatch(v)
    if m is None:
        raise MalformedVersion(v)
    major, minor, patch, suffix = m.groups()
    return SemVer(
        int(major),
        int(minor),
        int(patch) if patch is not None else 0,
        suffix if suffix is not None else RELEASE_SUFFIX,
    )


def is_newer(remote: str, local: str) -> bool:
    """Return True if remote version is newer than local.

    Stable (no suffix) beats pre-release (has suffix) at the same version.
    """
    return parse_version(remote) > parse_version(local)
