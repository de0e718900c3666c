"""Tests for seed management functionality."""

import numpy as np

from patternrace.random_source import DieSource
from patternrace.seed_manager import SeedManager


class TestSeedManager:
    """Test SeedManager functionality."""

    def test_init_with_master_seed(self):
        assert SeedManager(42).master_seed == 42

    def test_init_without_master_seed(self):
        assert SeedManager().master_seed is None

    def test_derive_seed_is_deterministic(self):
        seed_mgr = SeedManager(42)

        seed1 = seed_mgr.derive_seed("trials", 0)
        seed2 = seed_mgr.derive_seed("trials", 0)
        assert seed1 == seed2
        assert isinstance(seed1, int)
        assert 0 <= seed1 <= 0x7FFFFFFFFFFFFFFF

    def test_derive_seed_distinguishes_components(self):
        seed_mgr = SeedManager(42)
        assert seed_mgr.derive_seed("trials", 0) != seed_mgr.derive_seed("trials", 1)
        assert seed_mgr.derive_seed("a", "b") != seed_mgr.derive_seed("b", "a")

    def test_derive_seed_depends_on_master_seed(self):
        assert SeedManager(1).derive_seed("trials", 0) != SeedManager(2).derive_seed(
            "trials", 0
        )

    def test_derive_seed_without_master_seed(self):
        assert SeedManager().derive_seed("trials", 0) is None

    def test_create_random_source_reproducible(self):
        a = SeedManager(7).create_random_source("trials", 3)
        b = SeedManager(7).create_random_source("trials", 3)
        assert isinstance(a, DieSource)
        assert np.array_equal(a.draw_many(100), b.draw_many(100))

    def test_create_random_source_independent_per_component(self):
        a = SeedManager(7).create_random_source("trials", 3)
        b = SeedManager(7).create_random_source("trials", 4)
        assert not np.array_equal(a.draw_many(100), b.draw_many(100))

    def test_create_random_source_range(self):
        source = SeedManager(7).create_random_source("x", low=0, high=1)
        assert (source.low, source.high) == (0, 1)
        assert set(source.draw_many(200).tolist()) == {0, 1}

    def test_create_random_source_unseeded(self):
        source = SeedManager().create_random_source("trials", 0)
        assert source.seed is None
