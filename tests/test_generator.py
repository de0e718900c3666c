"""Tests for the trial generator."""

from patternrace.generator import TrialGenerator
from patternrace.random_source import DieSource, ReplaySource


def test_threshold_split():
    source = ReplaySource([1, 2, 3, 4, 5, 6])
    generator = TrialGenerator(source, length=6, threshold=3)
    assert generator.generate() == "DDDUUU"


def test_fixed_length_and_alphabet():
    generator = TrialGenerator(DieSource(seed=9), length=100, threshold=3)
    for _ in range(20):
        sequence = generator.generate()
        assert len(sequence) == 100
        assert set(sequence) <= {"U", "D"}


def test_consecutive_sequences_consume_fresh_draws():
    source = ReplaySource([6, 6, 1, 1])
    generator = TrialGenerator(source, length=2, threshold=3)
    assert generator.generate() == "UU"
    assert generator.generate() == "DD"
    assert source.remaining == 0


def test_symbols_roughly_balanced():
    generator = TrialGenerator(DieSource(seed=21), length=10_000, threshold=3)
    ups = generator.generate().count("U")
    assert 4_700 < ups < 5_300
