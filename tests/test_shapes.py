"""
Tests for artifact shape detection and flattening.
"""

import pytest

from creditfusion.consensus.shapes import (
    Shape,
    UnrecognizedSchemaError,
    normalize_artifact,
    passthrough_fields,
)


class TestDetectShape:
    """Test hierarchical vs flat classification."""

    def test_hierarchical(self, resume_artifact):
        artifact = normalize_artifact(resume_artifact)
        assert artifact.shape == Shape.HIERARCHICAL

    def test_flat(self, flat_artifact):
        artifact = normalize_artifact(flat_artifact)
        assert artifact.shape == Shape.FLAT

    def test_both_arrays_rejected(self):
        with pytest.raises(UnrecognizedSchemaError):
            normalize_artifact({"resume": [], "credits": []})

    def test_neither_array_rejected(self):
        with pytest.raises(UnrecognizedSchemaError):
            normalize_artifact({"personalInfo": {"name": "Jane"}})

    def test_non_list_is_not_a_shape(self):
        with pytest.raises(UnrecognizedSchemaError):
            normalize_artifact({"credits": "Hamlet"})

    def test_non_object_rejected(self):
        with pytest.raises(UnrecognizedSchemaError):
            normalize_artifact(["Hamlet"])


class TestFlattening:
    """Test records and category tags."""

    def test_hierarchical_records_are_tagged(self, resume_artifact):
        artifact = normalize_artifact(resume_artifact, source="openai.json")
        assert [r.category for r in artifact.records] == ["Film", "Film", "Theatre"]
        assert [r.title for r in artifact.records] == ["Iron Man", "The Fall", "Hamlet"]
        assert all(r.source == "openai.json" for r in artifact.records)
        assert artifact.categories == ["Film", "Theatre"]

    def test_flat_records_are_untagged(self, flat_artifact):
        artifact = normalize_artifact(flat_artifact)
        assert [r.category for r in artifact.records] == [None, None]
        assert artifact.categories == []

    def test_name_key_accepted_for_category(self):
        artifact = normalize_artifact({"resume": [{"name": "Film", "credits": [{"title": "Up"}]}]})
        assert artifact.records[0].category == "Film"

    def test_category_without_credits_list_is_kept_as_name(self):
        artifact = normalize_artifact({"resume": [{"category": "Voice"}]})
        assert artifact.categories == ["Voice"]
        assert artifact.records == []

    def test_non_object_credits_are_skipped(self):
        artifact = normalize_artifact({"credits": ["Hamlet", {"title": "Up"}]})
        assert len(artifact.records) == 1


class TestShowYears:
    """Test the display-years flag."""

    def test_boolean_is_kept(self, resume_artifact):
        assert normalize_artifact(resume_artifact).show_years is True

    def test_missing_is_none(self):
        assert normalize_artifact({"resume": []}).show_years is None

    def test_non_boolean_is_none(self):
        assert normalize_artifact({"resume": [], "resume_show_years": "yes"}).show_years is None


class TestPassthrough:
    def test_flat_adds_type(self):
        assert passthrough_fields(Shape.FLAT) == ("type",)

    def test_hierarchical_adds_nothing(self):
        assert passthrough_fields(Shape.HIERARCHICAL) == ()
