"""
Tests for text normalization and deterministic ids.
"""

import re

from creditfusion.ids import consistent_id, string_hash
from creditfusion.normalize import (
    is_empty,
    normalize_title,
    token_similarity,
    vote_key,
)


class TestNormalizeTitle:
    """Test title comparison form."""

    def test_lowercases_and_strips_punctuation(self):
        assert normalize_title("Iron Man!") == "iron man"

    def test_collapses_whitespace(self):
        assert normalize_title("  The   Dark\tKnight ") == "the dark knight"

    def test_keeps_digits(self):
        assert normalize_title("Iron Man 2") == "iron man 2"

    def test_punctuation_only(self):
        assert normalize_title("!!!") == ""


class TestTokenSimilarity:
    """Test Jaccard similarity on token sets."""

    def test_identical(self):
        assert token_similarity("iron man", "iron man") == 1.0

    def test_partial_overlap(self):
        assert token_similarity("iron man", "iron man 2") == 2 / 3

    def test_disjoint(self):
        assert token_similarity("hamlet", "macbeth") == 0.0

    def test_empty_is_zero(self):
        assert token_similarity("", "hamlet") == 0.0
        assert token_similarity("hamlet", "") == 0.0

    def test_order_does_not_matter(self):
        assert token_similarity("man iron", "iron man") == 1.0


class TestVoteKey:
    """Test vote keys used for counting values."""

    def test_case_and_whitespace_insensitive(self):
        assert vote_key("  Lead ") == vote_key("lead")

    def test_numbers_become_text(self):
        assert vote_key(2020) == vote_key("2020")


class TestIsEmpty:
    def test_empty_values(self):
        assert is_empty(None)
        assert is_empty("")
        assert is_empty("   ")
        assert is_empty([])

    def test_non_empty_values(self):
        assert not is_empty("x")
        assert not is_empty(2020)
        assert not is_empty(0)


class TestConsistentId:
    """Test the deterministic grouping id."""

    def test_known_hash(self):
        assert string_hash("a") == 97
        assert string_hash("ab") == 97 * 31 + 98

    def test_astral_characters_hash_as_surrogate_pairs(self):
        # U+1F600 is the pair 0xD83D 0xDE00
        assert string_hash("\U0001F600") == 0xD83D * 31 + 0xDE00
        assert string_hash("é") == 0xE9

    def test_hash_wraps_to_signed_32_bit(self):
        value = string_hash("a much longer category name that overflows")
        assert -(2 ** 31) <= value < 2 ** 31

    def test_format(self):
        assert consistent_id("a") == "00000061-0000-0061-0000-00000061"

    def test_uuid_like_shape(self):
        pattern = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{8}$")
        assert pattern.match(consistent_id("Film"))

    def test_deterministic(self):
        assert consistent_id("Theatre") == consistent_id("Theatre")
        assert consistent_id("Theatre") != consistent_id("Film")
