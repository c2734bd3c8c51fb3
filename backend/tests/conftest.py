"""
backend/tests/conftest.py

Purpose:
    Shared pytest bootstrap for import paths used by backend and root-level
    tool module tests, plus the schedule entry most suites start from.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_THIS_FILE = Path(__file__).resolve()
_BACKEND_DIR = _THIS_FILE.parents[1]
_REPO_ROOT = _THIS_FILE.parents[2]

for candidate in (str(_BACKEND_DIR), str(_REPO_ROOT)):
    if candidate not in sys.path:
        sys.path.insert(0, candidate)


@pytest.fixture
def yankees_red_sox():
    from oddsboard.models.schedule import ScheduleEntry

    return ScheduleEntry(
        id="745001",
        league="MLB",
        start_utc="2024-07-01T23:05:00Z",
        home="Yankees",
        away="Red Sox",
    )
