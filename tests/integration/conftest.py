"""Fixtures for the HTTP integration suite."""

from __future__ import annotations

import pytest

from hrm_e2e.config import Settings
from hrm_e2e.live_site import require_live_site


@pytest.fixture(scope="session")
def live_site(settings: Settings) -> str:
    """Skip the module when the configured site cannot be reached."""
    return require_live_site(settings)
