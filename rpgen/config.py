"""
Configuration for the rule-based password generator.
"""

from __future__ import annotations

from dataclasses import dataclass


# Used when neither a length nor a pattern is given.
DEFAULT_LENGTH = 16

# Upper bound on password length to keep memory use predictable.
MAX_PASSWORD_LENGTH = 10_000


@dataclass
class PasswordConfig:
    # Desired password length in characters.
    # None means DEFAULT_LENGTH, or the pattern length when a pattern is set.
    length: int | None = None

    # How many passwords to generate from the same character set.
    count: int = 1

    # Character class switches. Lowercase is always on unless excluded.
    capitals_off: bool = False
    numerals_off: bool = False
    symbols_off: bool = False

    # Comma-separated specs like "a-z,0-9,x".
    # include_chars replaces the class switches entirely.
    exclude_chars: str | None = None
    include_chars: str | None = None

    # Minimum counts per class (free-form mode only).
    min_capitals: int | None = None
    min_numerals: int | None = None
    min_symbols: int | None = None

    # Class-letter pattern, e.g. "LLLNNNSSS". Overrides the minimums.
    pattern: str | None = None

    # A seed makes output reproducible and overrides entropy_source.
    seed: int | str | None = None

    # "system" (OS CSPRNG) or "quantum" (qiskit simulator).
    entropy_source: str = "system"

    # Quantum source tuning.
    # NOTE: Keep num_qubits <= backend limit (often 20-29 for local simulators).
    num_qubits: int = 20
    quantum_streams: int = 2
    entropy_rounds: int = 2

    # Full redraws tried before the free-form repair step kicks in.
    rejection_attempts: int = 1000


# Default configuration instance you can import elsewhere
DEFAULT_CONFIG = PasswordConfig()
