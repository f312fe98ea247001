"""Tests for the high-level pipeline and entry point."""

from __future__ import annotations

import json
import math

import pytest

from rpgen.cli import (
    column_count,
    format_columns,
    generate_password,
    generate_passwords_with_meta,
    main,
    to_json,
)
from rpgen.config import PasswordConfig
from rpgen.errors import EmptyCharacterSet, PatternLengthMismatch


class TestPipeline:
    def test_defaults(self):
        meta = generate_passwords_with_meta(PasswordConfig())
        assert len(meta.passwords) == 1
        assert len(meta.passwords[0]) == 16
        assert meta.source_name == "system"
        assert meta.entropy_bits == pytest.approx(16 * math.log2(94))

    def test_seeded_run_is_reproducible(self):
        cfg = PasswordConfig(count=4, length=12, min_numerals=2, seed=12345)
        first = generate_passwords_with_meta(cfg)
        second = generate_passwords_with_meta(cfg)
        assert first.passwords == second.passwords
        assert first.source_name == "seeded"

    def test_pattern_config(self):
        meta = generate_passwords_with_meta(PasswordConfig(pattern="NNNN", count=3))
        assert all(pw.isdigit() and len(pw) == 4 for pw in meta.passwords)
        assert meta.entropy_bits == pytest.approx(4 * math.log2(10))

    def test_pattern_and_length_disagree(self):
        with pytest.raises(PatternLengthMismatch):
            generate_passwords_with_meta(PasswordConfig(pattern="LLL", length=16))

    def test_lowercase_only(self):
        cfg = PasswordConfig(capitals_off=True, numerals_off=True, symbols_off=True)
        meta = generate_passwords_with_meta(cfg)
        assert meta.passwords[0].islower()
        assert meta.entropy_bits == pytest.approx(75.2, abs=0.05)

    def test_empty_character_set(self):
        cfg = PasswordConfig(include_chars="a-c", exclude_chars="a-c")
        with pytest.raises(EmptyCharacterSet):
            generate_passwords_with_meta(cfg)

    def test_generate_password(self):
        assert len(generate_password(PasswordConfig(length=5, count=3))) == 5


class TestJson:
    def test_document(self):
        meta = generate_passwords_with_meta(PasswordConfig(count=2, length=8, seed=1))
        doc = json.loads(to_json(meta))
        assert doc["passwords"] == meta.passwords
        assert doc["count"] == 2
        assert doc["length"] == 8
        assert doc["entropy_bits"] == pytest.approx(meta.entropy_bits)


class TestColumnCount:
    @pytest.mark.parametrize(
        "count,columns",
        [(1, 1), (3, 1), (4, 2), (8, 2), (9, 3), (15, 3), (16, 4), (24, 4),
         (25, 5), (28, 4), (27, 3), (26, 2), (29, 3)],
    )
    def test_columns(self, count, columns):
        assert column_count(count) == columns


class TestFormatColumns:
    def test_single_column(self):
        assert format_columns(["ab", "cd"], 1) == "ab\ncd"

    def test_rows_are_padded(self):
        out = format_columns(["a", "bbb", "cc", "d", "e"], 2)
        assert out.splitlines() == ["a   bbb", "cc  d", "e"]

    def test_empty(self):
        assert format_columns([], 3) == ""


class TestMain:
    def test_prints_password(self, capsys):
        assert main() == 0
        out = capsys.readouterr().out
        assert "Rule-Based Password Generator" in out
        assert "Entropy:" in out

    def test_uses_table_layout(self, capsys, monkeypatch):
        from rpgen import cli

        monkeypatch.setattr(cli, "DEFAULT_CONFIG", PasswordConfig(count=4, length=6))
        assert cli.main() == 0
        lines = [line for line in capsys.readouterr().out.splitlines() if line]
        # 4 passwords -> 2 columns -> 2 rows of two 6-character passwords
        assert lines[1].count(" ") == 1
        assert len(lines[1]) == 13
        assert len(lines[2]) == 13
