"""tests/test_generator.py — Unit tests for random key and tree generation."""

import logging

import pytest
from mwtree.generator import KEY_HIGH, KEY_LOW, generate, random_keys
from mwtree.invariants import find_violations
from mwtree.policy import Variant


class TestRandomKeys:
    def test_count(self):
        assert len(random_keys(25, seed=3)) == 25

    def test_zero_count(self):
        assert random_keys(0) == []

    def test_negative_count_raises(self):
        with pytest.raises(ValueError, match=">= 0"):
            random_keys(-1)

    def test_same_seed_same_keys(self):
        assert random_keys(50, seed=9) == random_keys(50, seed=9)

    def test_default_range(self):
        keys = random_keys(500, seed=1)
        assert all(KEY_LOW <= k < KEY_HIGH for k in keys)

    def test_custom_range(self):
        keys = random_keys(200, seed=2, low=5, high=8)
        assert set(keys) <= {5, 6, 7}


class TestGenerate:
    @pytest.mark.parametrize("variant", ["btree", "bplus", "bstar"])
    def test_generate_each_variant(self, variant):
        t = generate(variant, 100, degree=3, seed=11)
        assert t.variant is Variant.parse(variant)
        assert len(t) == 100
        assert find_violations(t) == []

    def test_generate_is_reproducible(self):
        a = generate(Variant.BPLUS, 60, seed=5)
        b = generate(Variant.BPLUS, 60, seed=5)
        assert a.render() == b.render()

    def test_generate_zero_gives_empty_tree(self):
        t = generate(Variant.BTREE, 0)
        assert t.root is None

    def test_generate_logs_summary(self, caplog):
        with caplog.at_level(logging.INFO, logger="mwtree.generator"):
            generate(Variant.BSTAR, 10, degree=2, seed=1)
        assert "generated bstar tree" in caplog.text
