"""
Tests for record matching.
"""

from creditfusion.consensus.matching import group_records
from creditfusion.consensus.shapes import RawRecord


def records(*titles):
    return [RawRecord(fields={"title": t} if t is not None else {}) for t in titles]


class TestGroupRecords:
    """Test greedy title clustering."""

    def test_punctuation_and_case_cluster(self):
        groups = group_records(records("Iron Man", "iron man!"))
        assert len(groups) == 1
        assert len(groups[0]) == 2

    def test_sequel_does_not_cluster(self):
        groups = group_records(records("Iron Man", "Iron Man 2"))
        assert len(groups) == 2

    def test_threshold_is_strict(self):
        """Similarity of exactly 0.8 starts a new group."""
        groups = group_records(records("a b c d", "a b c d e"))
        assert len(groups) == 2

    def test_compares_against_representative_only(self):
        """A record close to a later member but not to the representative is not merged."""
        groups = group_records(records("a b c d e", "a b c d e f", "a b c d e f g"))
        assert [len(g) for g in groups] == [2, 1]
        assert groups[0].representative.title == "a b c d e"

    def test_first_matching_group_wins(self):
        groups = group_records(records("Hamlet", "Macbeth", "hamlet", "MACBETH"))
        assert [[r.title for r in g.members] for g in groups] == [
            ["Hamlet", "hamlet"],
            ["Macbeth", "MACBETH"],
        ]

    def test_untitled_records_are_dropped(self):
        groups = group_records(records("Hamlet", None, "", "   "))
        assert len(groups) == 1
        assert len(groups[0]) == 1

    def test_every_record_in_exactly_one_group(self):
        raw = records("Hamlet", "Iron Man", "hamlet", "Iron Man 2", "iron man")
        groups = group_records(raw)
        members = [id(r) for g in groups for r in g.members]
        assert sorted(members) == sorted(id(r) for r in raw)

    def test_deterministic(self):
        raw = records("Hamlet", "Iron Man", "hamlet", "Iron Man 2")
        first = [[r.title for r in g.members] for g in group_records(raw)]
        second = [[r.title for r in g.members] for g in group_records(raw)]
        assert first == second

    def test_custom_threshold(self):
        groups = group_records(records("Iron Man", "Iron Man 2"), threshold=0.5)
        assert len(groups) == 1

    def test_empty_input(self):
        assert group_records([]) == []
