"""Tests for password generation."""

from __future__ import annotations

import string
import time
from collections import Counter

import pytest

from rpgen.charset import CharacterClass, build_char_set
from rpgen.errors import ClassUnavailableInCharSet, MinimumsExceedLength
from rpgen.generator import generate_password, generate_passwords, rejection_budget
from rpgen.params import build_params, count_classes
from rpgen.random_source import SeededSource, SystemSource


class TestFreeForm:
    def test_length_and_count(self):
        passwords = generate_passwords(
            build_char_set(), build_params(length=20, count=5), SystemSource()
        )
        assert len(passwords) == 5
        assert all(len(pw) == 20 for pw in passwords)

    def test_only_charset_characters(self):
        charset = build_char_set(include="0-9")
        pw = generate_password(charset, build_params(length=50), SystemSource())
        assert set(pw) <= set(string.digits)

    def test_single_character_alphabet(self):
        charset = build_char_set(include="q")
        assert generate_password(charset, build_params(length=8), SystemSource()) == "q" * 8

    def test_uniform_distribution(self):
        charset = build_char_set(include="a-j")
        params = build_params(length=100, count=200)
        passwords = generate_passwords(charset, params, SeededSource("uniformity"))
        counts = Counter("".join(passwords))
        samples = 100 * 200
        expected = samples / len(charset)
        chi_squared = sum((counts[ch] - expected) ** 2 / expected for ch in charset)
        # 9 degrees of freedom; 40 is far beyond the 99.99th percentile.
        assert set(counts) == set(charset)
        assert chi_squared < 40

    def test_large_password(self):
        pw = generate_password(build_char_set(), build_params(length=10_000), SystemSource())
        assert len(pw) == 10_000


class TestMinimums:
    @pytest.mark.parametrize("seed", range(5))
    def test_minimums_satisfied(self, seed):
        params = build_params(
            length=12, count=20, min_capitals=3, min_numerals=3, min_symbols=3
        )
        passwords = generate_passwords(build_char_set(), params, SeededSource(seed))
        for pw in passwords:
            counts = count_classes(pw)
            assert counts[CharacterClass.UPPERCASE] >= 3
            assert counts[CharacterClass.NUMERAL] >= 3
            assert counts[CharacterClass.SYMBOL] >= 3

    def test_minimums_fill_entire_length(self):
        params = build_params(length=6, count=10, min_capitals=2, min_numerals=2, min_symbols=2)
        for pw in generate_passwords(build_char_set(), params, SeededSource(3)):
            counts = count_classes(pw)
            assert counts[CharacterClass.UPPERCASE] == 2
            assert counts[CharacterClass.NUMERAL] == 2
            assert counts[CharacterClass.SYMBOL] == 2

    def test_repair_path(self):
        params = build_params(length=10, count=10, min_numerals=10)
        passwords = generate_passwords(
            build_char_set(), params, SeededSource(9), rejection_attempts=0
        )
        assert all(pw.isdigit() for pw in passwords)

    def test_repair_keeps_unclassified_characters_replaceable(self):
        charset = build_char_set(include="a, ,1")
        params = build_params(length=4, count=10, min_numerals=4)
        passwords = generate_passwords(charset, params, SeededSource(2), rejection_attempts=1)
        assert passwords == ["1111"] * 10

    def test_min_exceeding_length_fails_before_drawing(self):
        class ExplodingSource(SystemSource):
            def random_bytes(self, n):
                raise AssertionError("no draw expected")

        params = build_params(length=4, min_capitals=5)
        with pytest.raises(MinimumsExceedLength):
            generate_passwords(build_char_set(), params, ExplodingSource())


class TestRejectionBudget:
    def test_far_out_minimum_goes_straight_to_repair(self):
        params = build_params(length=10_000, min_capitals=9_000)
        assert rejection_budget(build_char_set(), params.mode, 1000) == 1

    def test_budget_scales_with_length(self):
        charset = build_char_set()
        short = build_params(length=16, min_capitals=1).mode
        long = build_params(length=10_000, min_capitals=1).mode
        assert rejection_budget(charset, short, 1000) == 1000
        assert rejection_budget(charset, long, 1000) == 20

    def test_zero_attempts(self):
        mode = build_params(length=16, min_symbols=1).mode
        assert rejection_budget(build_char_set(), mode, 0) == 0

    def test_tight_minimum_on_long_password_is_prompt(self):
        params = build_params(length=10_000, min_capitals=9_000)
        start = time.perf_counter()
        (pw,) = generate_passwords(build_char_set(), params, SystemSource())
        elapsed = time.perf_counter() - start
        assert len(pw) == 10_000
        assert count_classes(pw)[CharacterClass.UPPERCASE] >= 9_000
        assert elapsed < 10

    def test_unlikely_but_plausible_minimum_is_prompt(self):
        # About 3 standard deviations above the expected 2766 capitals.
        params = build_params(length=10_000, min_capitals=2_900)
        start = time.perf_counter()
        (pw,) = generate_passwords(build_char_set(), params, SeededSource(4))
        elapsed = time.perf_counter() - start
        assert count_classes(pw)[CharacterClass.UPPERCASE] >= 2_900
        assert elapsed < 10


class TestPattern:
    def test_lllnnnsss(self):
        params = build_params(pattern="LLLNNNSSS", length=9, count=25)
        for pw in generate_passwords(build_char_set(), params, SystemSource()):
            assert len(pw) == 9
            assert all(ch in string.ascii_lowercase for ch in pw[:3])
            assert all(ch in string.digits for ch in pw[3:6])
            assert all(ch in string.punctuation for ch in pw[6:])

    def test_every_position_matches_class(self):
        pattern = "UlNsLuSn" * 4
        params = build_params(pattern=pattern, count=10)
        for pw in generate_passwords(build_char_set(), params, SeededSource(11)):
            for letter, ch in zip(pattern.upper(), pw):
                assert ch in CharacterClass(letter).characters

    def test_respects_exclusions(self):
        charset = build_char_set(exclude="a-y")
        pw = generate_password(charset, build_params(pattern="LLLL"), SystemSource())
        assert pw == "zzzz"

    def test_class_unavailable(self):
        params = build_params(pattern="LU")
        with pytest.raises(ClassUnavailableInCharSet):
            generate_passwords(build_char_set(capitals_off=True), params, SystemSource())


class TestDeterminism:
    def test_same_seed_same_output(self):
        charset = build_char_set()
        params = build_params(length=16, count=10, min_symbols=2)
        first = generate_passwords(charset, params, SeededSource(12345))
        second = generate_passwords(charset, params, SeededSource(12345))
        assert first == second

    def test_same_seed_pattern(self):
        params = build_params(pattern="LUNSLUNS", count=5)
        first = generate_passwords(build_char_set(), params, SeededSource("p"))
        second = generate_passwords(build_char_set(), params, SeededSource("p"))
        assert first == second

    def test_different_seed_differs(self):
        params = build_params(length=32)
        first = generate_passwords(build_char_set(), params, SeededSource(1))
        second = generate_passwords(build_char_set(), params, SeededSource(2))
        assert first != second

    def test_unseeded_differs(self):
        params = build_params(length=32, count=3)
        first = generate_passwords(build_char_set(), params, SystemSource())
        second = generate_passwords(build_char_set(), params, SystemSource())
        assert first != second

    def test_passwords_in_a_batch_differ(self):
        params = build_params(length=32, count=2)
        first, second = generate_passwords(build_char_set(), params, SeededSource(0))
        assert first != second
