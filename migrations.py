"""Migration guide notices for breaking Scio releases."""

from dataclasses import dataclass
from typing import Optional

from version import SemVer

YELLOW = "\033[33m"
BOLD = "\033[1m"
RESET = "\033[0m"

MIGRATION_URL = "https://spotify.github.io/scio/migrations/v{version}.0-Migration-Guide"


@dataclass(frozen=True)
class MigrationRule:
    """Upgrading from below ``major.minor`` to exactly ``major.minor`` needs a guide."""
    major: int
    minor: int

    @property
    def guide_version(self) -> str:
        return f"{self.major}.{self.minor}"

    @property
    def guide_url(self) -> str:
        return MIGRATION_URL.format(version=self.guide_version)

    def matches(self, current: SemVer, latest: SemVer) -> bool:
        return (
            current.major == self.major
            and current.minor < self.minor
            and latest.major == self.major
            and latest.minor == self.minor
        )


# Evaluated in order; the first match wins.
MIGRATION_RULES = (
    MigrationRule(0, 7),
    MigrationRule(0, 8),
    MigrationRule(0, 9),
    MigrationRule(0, 10),
    MigrationRule(0, 12),
)


def format_migration_notice(rule: MigrationRule) -> str:
    return (
        f"\n {YELLOW}>{BOLD} Scio {rule.guide_version} introduced some breaking changes in the API.{RESET}\n"
        f" {YELLOW}>{RESET} Follow the migration guide to upgrade: {rule.guide_url}.\n"
        f" {YELLOW}>{RESET} Scio provides automatic migration rules (See migration guide).\n"
    )


def find_rule(current: SemVer, latest: SemVer) -> Optional[MigrationRule]:
    for rule in MIGRATION_RULES:
        if rule.matches(current, latest):
            return rule
    return None


def migration_message(current: SemVer, latest: SemVer) -> Optional[str]:
    """Return the migration notice for upgrading current -> latest, if any."""
    rule = find_rule(current, latest)
    if rule is None:
        return None
    return format_migration_notice(rule)
