"""Shared pytest fixtures for the Scio version check tests."""

import io
import json
import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# 1. sys_path -- ensure the project root is importable
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


# ---------------------------------------------------------------------------
# 2. fresh_latest -- forget any memoized release lookup
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def fresh_latest(monkeypatch):
    """Reset the process-wide lookup so each test starts unfetched."""
    import updater

    monkeypatch.setattr(updater, "_latest", None)


# ---------------------------------------------------------------------------
# 3. no_ignore_env -- make sure the ignore flag is unset
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def no_ignore_env(monkeypatch):
    from config import IGNORE_ENV_VAR

    monkeypatch.delenv(IGNORE_ENV_VAR, raising=False)


# ---------------------------------------------------------------------------
# 4. fake_github -- replace urlopen with a canned releases listing
# ---------------------------------------------------------------------------

class FakeResponse(io.BytesIO):
    """Context-manager response returned by the fake urlopen."""


@pytest.fixture
def fake_github(monkeypatch):
    """Return a function that installs a fake urlopen.

    ``install(payload)`` serves ``payload`` (JSON-encoded unless bytes);
    ``install(error=exc)`` raises ``exc``. The returned list records the
    (request, timeout) of each call.
    """
    import updater

    calls = []

    def install(payload=None, error=None):
        def fake_urlopen(req, timeout=None):
            calls.append((req, timeout))
            if error is not None:
                raise error
            body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
            return FakeResponse(body)

        monkeypatch.setattr(updater, "urlopen", fake_urlopen)
        return calls

    return install
