"""
Tests for confidence roll-up.
"""

import pytest

from creditfusion.consensus.confidence import leaf_name, overall_confidence, rollup


class TestOverallConfidence:
    def test_mean_of_all_entries(self):
        fields = {"Film.category_id": 1.0, "Film.credits[0].title": 1.0, "Film.credits[0].year": 0.25}
        assert overall_confidence(fields) == pytest.approx(0.75)

    def test_empty_map(self):
        assert overall_confidence({}) == 0.0


class TestRollup:
    def test_leaf_name(self):
        assert leaf_name("Film.credits[2].role") == "role"
        assert leaf_name("credits[0].attached_media") == "attached_media"
        assert leaf_name("resume_show_years") == "resume_show_years"

    def test_mean_per_field(self):
        fields = {
            "credits[0].year": 1.0,
            "credits[1].year": 0.5,
            "credits[0].role": 1.0,
        }
        assert rollup(fields) == {"year": 0.75, "role": 1.0}
