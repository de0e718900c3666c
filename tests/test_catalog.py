"""Tests for the pattern catalog and pair enumeration."""

from patternrace.catalog import (
    PAIR_INDEX,
    PAIR_MEMBER_INDICES,
    PATTERN_INDEX,
    PATTERN_PAIRS,
    PATTERNS,
    PatternPair,
    make_pairs,
    make_patterns,
)


class TestPatterns:
    def test_eight_patterns_in_catalog_order(self):
        assert PATTERNS == ("DDD", "DDU", "DUD", "DUU", "UDD", "UDU", "UUD", "UUU")

    def test_patterns_are_unique_and_length_three(self):
        assert len(set(PATTERNS)) == 8
        assert all(len(p) == 3 and set(p) <= {"U", "D"} for p in PATTERNS)

    def test_make_patterns_is_idempotent(self):
        assert make_patterns() == make_patterns() == PATTERNS


class TestPairs:
    def test_fifty_six_pairs_without_self_pairs(self):
        assert len(PATTERN_PAIRS) == 56
        assert all(pair.first != pair.second for pair in PATTERN_PAIRS)
        assert len(set(PATTERN_PAIRS)) == 56

    def test_both_directions_present(self):
        assert PatternPair("DDD", "UUU") in PATTERN_PAIRS
        assert PatternPair("UUU", "DDD") in PATTERN_PAIRS

    def test_order_is_outer_first_inner_second(self):
        assert PATTERN_PAIRS[:7] == tuple(
            PatternPair("DDD", second) for second in PATTERNS[1:]
        )
        assert PATTERN_PAIRS[7] == PatternPair("DDU", "DDD")
        assert PATTERN_PAIRS[-1] == PatternPair("UUU", "UUD")

    def test_make_pairs_is_idempotent(self):
        assert make_pairs(PATTERNS) == make_pairs(PATTERNS) == PATTERN_PAIRS

    def test_make_pairs_small_catalog(self):
        assert make_pairs(["A", "B"]) == (PatternPair("A", "B"), PatternPair("B", "A"))

    def test_pair_str(self):
        assert str(PatternPair("UDD", "DDD")) == "UDD>DDD"


class TestIndices:
    def test_dense_indices(self):
        assert sorted(PATTERN_INDEX.values()) == list(range(8))
        assert sorted(PAIR_INDEX.values()) == list(range(56))

    def test_member_indices_match_pairs(self):
        for pair, (i, j) in zip(PATTERN_PAIRS, PAIR_MEMBER_INDICES):
            assert PATTERNS[i] == pair.first
            assert PATTERNS[j] == pair.second
