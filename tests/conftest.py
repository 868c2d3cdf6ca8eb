import json
from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture(scope="session")
def report_path() -> Path:
    """A report as written by gradle-versions-plugin, covering every bucket."""
    return Path(__file__).parent / "parser" / "examples" / "report.json"


@pytest.fixture(scope="session")
def report_json(report_path: Path) -> str:
    return report_path.read_text()


@pytest.fixture
def gradle_payload() -> dict:
    return {
        "running": {"version": "4.10.2"},
        "current": {"version": "4.10.2"},
        "nightly": {"version": "5.1-20181023000026+0000"},
        "releaseCandidate": {"version": "5.0-rc-1"},
    }


@pytest.fixture
def make_report(gradle_payload: dict) -> Callable[..., str]:
    """Build a report from plain lists of dependency payloads."""

    def _make(current=(), exceeded=(), outdated=()) -> str:
        return json.dumps(
            {
                "current": list(current),
                "exceeded": list(exceeded),
                "outdated": list(outdated),
                "gradle": gradle_payload,
            }
        )

    return _make
