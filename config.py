"""
Configuration for the Scio startup version check.
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

IGNORE_ENV_VAR = "SCIO_IGNORE_VERSION_WARNING"
RELEASES_URL = "https://api.github.com/repos/spotify/scio/releases"
TIMEOUT_SECONDS = 3.0  # applies to connect and to each read
LOG_DIR = Path.home() / ".scio" / "logs"


def ignore_version_check(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return True when the version check is disabled.

    Read on every call so repeated checks never see a stale value.
    """
    if environ is None:
        environ = os.environ
    value = environ.get(IGNORE_ENV_VAR)
    if value is None:
        return False
    ignored = value.strip() == "true"
    if ignored:
        logger.debug("%s=true, skipping version check", IGNORE_ENV_VAR)
    return ignored
