"""
RNG Tests

XorShift128 determinism, SeededRandom as a RandomSource, seed strings,
and the sequence source used throughout the suite.
"""

import pytest

from arena_engine.state.rng import (
    SeededRandom,
    XorShift128,
    default_random_source,
    seed_to_long,
    sequence_source,
)


class TestXorShift128:

    def test_same_seed_same_stream(self):
        a, b = XorShift128(42), XorShift128(42)
        assert [a.next_long() for _ in range(10)] == [b.next_long() for _ in range(10)]

    def test_different_seeds_differ(self):
        a, b = XorShift128(42), XorShift128(43)
        assert [a.next_long() for _ in range(5)] != [b.next_long() for _ in range(5)]

    def test_zero_seed_is_usable(self):
        """Seed 0 is remapped so the state never sticks at zero."""
        rng = XorShift128(0)
        values = {rng.next_long() for _ in range(5)}
        assert len(values) == 5

    def test_next_long_is_unsigned_64(self):
        rng = XorShift128(12345)
        for _ in range(100):
            assert 0 <= rng.next_long() < 2 ** 64

    def test_next_int_bounds(self):
        rng = XorShift128(7)
        for _ in range(200):
            assert 0 <= rng.next_int(6) < 6

    @pytest.mark.parametrize("bound", [0, -3])
    def test_next_int_rejects_non_positive_bound(self, bound):
        with pytest.raises(ValueError):
            XorShift128(7).next_int(bound)

    def test_floats_in_unit_interval(self):
        rng = XorShift128(99)
        for _ in range(200):
            assert 0.0 <= rng.next_float() < 1.0
            assert 0.0 <= rng.next_double() < 1.0

    def test_copy_is_independent(self):
        """A copy continues the same stream without sharing state."""
        rng = XorShift128(2024)
        rng.next_long()
        clone = rng.copy()
        assert clone.next_long() == rng.next_long()
        clone.next_long()
        assert (clone.seed0, clone.seed1) != (rng.seed0, rng.seed1)


class TestSeededRandom:

    def test_callable_as_random_source(self, seeded_rng):
        """Calling returns doubles in [0, 1) and counts rolls."""
        for _ in range(20):
            assert 0.0 <= seeded_rng() < 1.0
        assert seeded_rng.counter == 20

    def test_string_and_int_seeds_agree(self):
        a = SeededRandom("ABC")
        b = SeededRandom(seed_to_long("ABC"))
        assert [a() for _ in range(5)] == [b() for _ in range(5)]

    def test_counter_skips_ahead(self):
        """Resuming at counter N continues where a fresh stream would be."""
        fresh = SeededRandom(77)
        for _ in range(3):
            fresh()
        resumed = SeededRandom(77, counter=3)
        assert resumed.counter == 3
        assert resumed() == fresh()

    def test_random_int_inclusive(self):
        rng = SeededRandom(5)
        seen = {rng.random_int(2) for _ in range(200)}
        assert seen == {0, 1, 2}

    def test_copy(self, seeded_rng):
        seeded_rng()
        clone = seeded_rng.copy()
        assert clone.seed == seeded_rng.seed
        assert clone.counter == seeded_rng.counter
        assert clone() == seeded_rng()


class TestSeedToLong:

    @pytest.mark.parametrize("seed,expected", [
        ("0", 0),
        ("12345", 12345),
        ("-5", -5),
        ("A", 10),
        ("ABC", (10 * 35 + 11) * 35 + 12),
        ("abc", (10 * 35 + 11) * 35 + 12),
    ])
    def test_known_values(self, seed, expected):
        assert seed_to_long(seed) == expected

    def test_letter_o_reads_as_zero(self):
        assert seed_to_long("A0") == seed_to_long("AO")

    def test_invalid_characters_skipped(self):
        assert seed_to_long("A-B") == seed_to_long("AB")

    @pytest.mark.parametrize("seed,expected", [
        ("\u00b2", 0),  # Superscript two
        ("-\u00b2", 0),
        ("A\u0663", 10),  # Arabic-Indic three
    ])
    def test_non_ascii_digits_skipped(self, seed, expected):
        """Unicode digits are not parsed as numbers; they are skipped like other unknown characters."""
        assert seed_to_long(seed) == expected

    def test_masked_to_64_bits(self):
        assert 0 <= seed_to_long("ZZZZZZZZZZZZZZZZZZZZ") < 2 ** 64


class TestSources:

    def test_sequence_cycles(self):
        source = sequence_source([0.1, 0.9])
        assert [source() for _ in range(5)] == [0.1, 0.9, 0.1, 0.9, 0.1]

    def test_sequence_rejects_empty(self):
        with pytest.raises(ValueError):
            sequence_source([])

    def test_default_source(self):
        source = default_random_source()
        assert 0.0 <= source() < 1.0
