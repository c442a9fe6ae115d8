"""
Pytest configuration and shared fixtures.
"""

import pytest
import json
from pathlib import Path
from typing import Dict, Any

from creditfusion.logger import get_logger, reset_logger


@pytest.fixture(autouse=True)
def quiet_logger():
    """Fresh, console-free global logger for every test."""
    reset_logger()
    get_logger(enable_console=False)
    yield
    reset_logger()


@pytest.fixture
def hamlet_a() -> Dict[str, Any]:
    return {"credits": [{"title": "Hamlet", "role": "Lead", "year": "2020"}]}


@pytest.fixture
def hamlet_b() -> Dict[str, Any]:
    return {"credits": [{"title": "Hamlet", "role": "Lead", "year": "2021"}]}


@pytest.fixture
def resume_artifact() -> Dict[str, Any]:
    """Hierarchical extraction with two categories."""
    return {
        "resume_show_years": True,
        "resume": [
            {
                "category": "Film",
                "credits": [
                    {"title": "Iron Man", "role": "Pilot", "year": "2008", "director": "Jon Favreau"},
                    {"title": "The Fall", "role": "Nurse", "year": "2006"},
                ],
            },
            {
                "category": "Theatre",
                "credits": [
                    {"title": "Hamlet", "role": "Ophelia", "year": "2019", "director": "Kenneth Branagh"},
                ],
            },
        ],
    }


@pytest.fixture
def flat_artifact() -> Dict[str, Any]:
    """Flat extraction with typed credits."""
    return {
        "credits": [
            {"title": "Iron Man", "role": "Pilot", "year": "2008", "type": "Film"},
            {"title": "Neighbours", "role": "Guest", "year": "2015", "type": "Television"},
        ]
    }


@pytest.fixture
def write_artifacts(tmp_path):
    """Write artifacts to JSON files and return their paths."""
    def _write(*artifacts) -> list:
        paths = []
        for i, artifact in enumerate(artifacts):
            path = tmp_path / f"provider_{i}.json"
            path.write_text(json.dumps(artifact), encoding="utf-8")
            paths.append(path)
        return paths
    return _write


@pytest.fixture
def db_path(tmp_path) -> Path:
    return tmp_path / "data" / "baselines.db"
