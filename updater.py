"""Latest-release lookup for the Scio version check.

Queries GitHub Releases once per process and remembers the answer. Every
failure degrades to "no information available"; nothing raised by the
network or the payload ever leaves this module.
"""

import json
import logging
import threading
from dataclasses import dataclass
from typing import List, Optional
from urllib.request import urlopen, Request
from urllib.error import URLError

from config import RELEASES_URL, TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteRelease:
    """One entry of the GitHub releases listing."""
    tag_name: str
    prerelease: bool
    draft: bool

    @property
    def is_stable(self) -> bool:
        return not self.prerelease and not self.draft

    @classmethod
    def from_dict(cls, data: dict) -> "RemoteRelease":
        tag_name = data["tag_name"]
        prerelease = data["prerelease"]
        draft = data["draft"]
        if not isinstance(tag_name, str):
            raise TypeError(f"tag_name is not a string: {tag_name!r}")
        if not isinstance(prerelease, bool) or not isinstance(draft, bool):
            raise TypeError(f"prerelease/draft flags are not booleans in {tag_name!r}")
        return cls(tag_name=tag_name, prerelease=prerelease, draft=draft)


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a release lookup.

    ``version`` set: a stable release was found.
    Both ``None``: the listing had no qualifying release.
    ``error`` set: the lookup failed and ``version`` is ``None``.
    """
    version: Optional[str] = None
    error: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.version is not None


def select_latest(releases: List[RemoteRelease]) -> Optional[str]:
    """Return the first stable 'v'-prefixed tag, without the 'v'."""
    for release in releases:
        if not release.is_stable:
            continue
        if release.tag_name.startswith("v"):
            return release.tag_name[1:]
    return None


def fetch_latest_release(url: str = RELEASES_URL, timeout: float = TIMEOUT_SECONDS) -> FetchResult:
    """Ask GitHub for the newest stable release tag. Never raises."""
    try:
        req = Request(url, headers={"Accept": "application/vnd.github+json"})
        with urlopen(req, timeout=timeout) as resp:
            payload = json.loads(resp.read().decode())
        if not isinstance(payload, list):
            raise TypeError(f"expected a list of releases, got {type(payload).__name__}")
        releases = [RemoteRelease.from_dict(item) for item in payload]
        return FetchResult(version=select_latest(releases))
    except (URLError, OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        logger.debug("Release lookup failed: %s", e)
        return FetchResult(error=str(e) or type(e).__name__)
    except Exception as e:
        logger.debug("Release lookup unexpected error: %s", e)
        return FetchResult(error=str(e) or type(e).__name__)


# Populated by the first call to latest_release() and never refreshed.
_latest: Optional[FetchResult] = None
_latest_lock = threading.Lock()


def latest_release() -> FetchResult:
    """Return the process-wide lookup result, fetching it on first use."""
    global _latest
    if _latest is None:
        with _latest_lock:
            if _latest is None:
                _latest = fetch_latest_release()
                logger.debug("Latest Scio release: %s", _latest)
    return _latest
