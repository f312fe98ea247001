"""
High-level generator functions and the script entry point.
"""
from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass

from .config import PasswordConfig, DEFAULT_CONFIG
from .charset import CharSet, build_char_set
from .entropy import params_entropy
from .errors import PasswordGenerationError
from .generator import generate_passwords
from .params import GenerationParams, build_params
from .random_source import make_source

logger = logging.getLogger(__name__)


@dataclass
class GenerationMeta:
    """
    Full result of one generation run.
    """
    # Generated passwords, in draw order
    passwords: list[str]

    # Alphabet and validated parameters they were drawn with
    charset: CharSet
    params: GenerationParams

    # Search-space size per password, in bits
    entropy_bits: float

    # "system", "seeded" or "quantum"
    source_name: str

    config: PasswordConfig


def generate_passwords_with_meta(
    config: PasswordConfig | None = None,
) -> GenerationMeta:
    """
    High-level generation pipeline with metadata:

    - Build the character set from the class switches and include/exclude specs.
    - Assemble and validate parameters (length, count, minimums, pattern).
    - Pick the random source (seeded, system or quantum).
    - Draw the passwords and compute their entropy.
    """
    cfg = config or DEFAULT_CONFIG

    charset = build_char_set(
        capitals_off=cfg.capitals_off,
        numerals_off=cfg.numerals_off,
        symbols_off=cfg.symbols_off,
        exclude=cfg.exclude_chars,
        include=cfg.include_chars,
    )
    params = build_params(
        length=cfg.length,
        count=cfg.count,
        min_capitals=cfg.min_capitals,
        min_numerals=cfg.min_numerals,
        min_symbols=cfg.min_symbols,
        pattern=cfg.pattern,
    )

    source = make_source(cfg)
    passwords = generate_passwords(
        charset, params, source, rejection_attempts=cfg.rejection_attempts
    )

    return GenerationMeta(
        passwords=passwords,
        charset=charset,
        params=params,
        entropy_bits=params_entropy(charset, params),
        source_name=source.name,
        config=cfg,
    )


def generate_password(
    config: PasswordConfig | None = None,
) -> str:
    """
    High-level function: return the first password of a generation run.
    """
    meta = generate_passwords_with_meta(config)
    return meta.passwords[0]


def to_json(meta: GenerationMeta) -> str:
    """
    JSON document for machine consumers: passwords, count, length and
    entropy_bits. Entropy is only reported through this document.
    """
    return json.dumps(
        {
            "passwords": meta.passwords,
            "count": len(meta.passwords),
            "length": meta.params.length,
            "entropy_bits": meta.entropy_bits,
        },
        indent=2,
    )


def column_count(password_count: int) -> int:
    """
    Columns to use when printing `password_count` passwords as a table.
    """
    if password_count <= 3:
        return 1
    if password_count <= 8:
        return 2
    if password_count <= 15:
        return 3
    if password_count <= 24:
        return 4
    for columns in (5, 4, 3, 2):
        if password_count % columns == 0:
            return columns
    return 3


def format_columns(passwords: list[str], columns: int) -> str:
    """
    Lay passwords out left-aligned in `columns` columns, row by row.
    """
    if not passwords:
        return ""
    width = max(len(p) for p in passwords)
    rows = []
    for start in range(0, len(passwords), columns):
        row = passwords[start : start + columns]
        rows.append(" ".join(p.ljust(width) for p in row).rstrip())
    return "\n".join(rows)


def main() -> int:
    """
    Entry point for `python -m rpgen.cli` or `run_rpgen.py`.
    """
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        meta = generate_passwords_with_meta()
    except PasswordGenerationError as exc:
        logger.error("%s", exc)
        return 1

    print("\n[Rule-Based Password Generator]")
    print(format_columns(meta.passwords, column_count(len(meta.passwords))))
    print(f"Entropy: {meta.entropy_bits:.1f} bits\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
