"""
Tests for importing a base-metrics cache into the baseline store.
"""

import importlib.util
import json
from pathlib import Path

import pytest

from creditfusion.baselines import list_baselines, load_baseline

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "import_base_metrics.py"


@pytest.fixture
def importer():
    spec = importlib.util.spec_from_file_location("import_base_metrics", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def metrics_file(tmp_path):
    data = {
        "version": 1,
        "generatedAt": "2024-05-01T10:00:00.000Z",
        "metrics": {
            "jane_doe.pdf": {
                "consensus": {"credits": [{"title": "Hamlet", "role": "Lead"}]},
                "confidence": {"overall": 0.8, "fields": {"credits[0].title": 1.0}},
                "providers": [{"provider": "openai", "model": "gpt-4-turbo"}, {"provider": "gemini"}],
                "timestamp": "2024-05-01T10:00:00.000Z",
            },
            "broken.pdf": {"providers": []},
        },
    }
    path = tmp_path / "baseMetrics.json"
    path.write_text(json.dumps(data))
    return path


class TestImportMetrics:
    def test_imports_complete_entries(self, importer, metrics_file, db_path):
        assert importer.import_metrics(metrics_file, db_path)

        stored = load_baseline(db_path, "jane_doe.pdf")
        assert stored["providers"] == ["openai:gpt-4-turbo", "gemini"]
        assert stored["providerCount"] == 2
        assert stored["overall"] == pytest.approx(0.8)
        assert stored["updatedAt"].startswith("2024-05-01T10:00:00")
        assert [b["document"] for b in list_baselines(db_path)] == ["jane_doe.pdf"]

    def test_existing_baselines_are_skipped(self, importer, metrics_file, db_path):
        importer.import_metrics(metrics_file, db_path)
        assert importer.import_metrics(metrics_file, db_path)
        assert len(list_baselines(db_path)) == 1

    def test_dry_run_writes_nothing(self, importer, metrics_file, db_path):
        importer.import_metrics(metrics_file, db_path, dry_run=True)
        assert not db_path.exists()

    def test_parse_timestamp_fallback(self, importer):
        assert importer.parse_timestamp("not a date") is not None
