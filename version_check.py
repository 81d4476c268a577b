"""
Startup version checks for Scio.

Warns when a newer Scio release is published (with a migration guide for
breaking releases) and when the installed Apache Beam does not match the
version Scio was built against.
"""

import argparse
import logging
import logging.handlers
import sys
from importlib import metadata
from typing import List, Optional

import updater
from config import IGNORE_ENV_VAR, LOG_DIR, ignore_version_check
from migrations import BOLD, RESET, YELLOW, migration_message
from version import BEAM_VERSION, MalformedVersion, __version__, parse_version

logger = logging.getLogger(__name__)

BEAM_DISTRIBUTION = "apache-beam"
SNAPSHOT_MARKER = "SNAPSHOT"


def format_newer_version_notice(current: str, latest: str) -> str:
    return (
        f"\n {YELLOW}>{BOLD} A newer version of Scio is available: {current} -> {latest}{RESET}\n"
        f" {YELLOW}>{RESET} Use `{IGNORE_ENV_VAR}=true` to disable this check.{RESET}\n"
    )


def check_version(
    current: str,
    latest_override: Optional[str] = None,
    ignore: Optional[bool] = None,
) -> List[str]:
    """Return the warning lines for running Scio ``current``.

    ``ignore=None`` reads the ignore flag from the environment. A malformed
    ``current`` raises MalformedVersion; a malformed latest version is skipped.
    """
    if ignore is None:
        ignore = ignore_version_check()
    if ignore:
        return []

    warnings = []
    v1 = parse_version(current)
    if SNAPSHOT_MARKER in v1.suffix:
        warnings.append(f"Using a SNAPSHOT version of Scio: {current}")

    latest = latest_override
    if latest is None:
        latest = updater.latest_release().version
    if latest is None:
        return warnings

    try:
        v2 = parse_version(latest)
    except MalformedVersion as e:
        logger.debug("Ignoring latest release: %s", e)
        return warnings

    if v2 > v1:
        warnings.append(format_newer_version_notice(current, latest))
        message = migration_message(v1, v2)
        if message is not None:
            warnings.append(message)
    return warnings


def warn_version() -> None:
    """Check the embedded Scio version and log every warning."""
    for line in check_version(__version__):
        logger.warning(line)


def installed_beam_version() -> Optional[str]:
    try:
        return metadata.version(BEAM_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return None


def check_runner_version(runner, installed_version: Optional[str] = None) -> Optional[str]:
    """Warn if the installed Beam differs from the one Scio was built against.

    ``runner`` is the runner class in use, or its name. Returns the warning,
    or None when the versions match.
    """
    name = runner if isinstance(runner, str) else runner.__name__
    actual = installed_version if installed_version is not None else installed_beam_version()
    if actual == BEAM_VERSION:
        return None
    message = (
        f"Mismatched version for {name}, expected: {BEAM_VERSION}, "
        f"actual: {actual if actual is not None else 'not installed'}"
    )
    logger.warning(message)
    return message


# ============================================================================
# Entry Point
# ============================================================================

def setup_logging() -> None:
    """Configure logging with file and console handlers."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / "version_check.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # File handler (rotating)
    fh = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=1024 * 1024, backupCount=3, encoding="utf-8"
    )
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%H:%M:%S"
    ))
    root.addHandler(fh)

    # Console handler
    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO)
    ch.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    root.addHandler(ch)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scio-version-check",
        description="Check the Scio and Apache Beam versions in use.",
    )
    parser.add_argument(
        "--current", default=__version__,
        help=f"Scio version to check (default: {__version__})",
    )
    parser.add_argument(
        "--latest", default=None,
        help="Latest Scio version to compare against instead of asking GitHub",
    )
    parser.add_argument(
        "--ignore", action="store_true", default=None,
        help=f"Skip the Scio version check (same as {IGNORE_ENV_VAR}=true)",
    )
    parser.add_argument(
        "--runner", default="DirectRunner",
        help="Name of the Beam runner in use (default: DirectRunner)",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    for line in check_version(args.current, args.latest, args.ignore):
        logger.warning(line)
    check_runner_version(args.runner)
    return 0


if __name__ == "__main__":
    sys.exit(main())
