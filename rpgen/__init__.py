"""
Rule-based password generator package.
"""

from .config import PasswordConfig, DEFAULT_CONFIG
from .charset import CharacterClass, CharSet, build_char_set
from .pattern import parse_pattern
from .params import GenerationParams, build_params
from .random_source import RandomSource, SeededSource, SystemSource, make_source
from .generator import generate_passwords
from .entropy import calculate_entropy, params_entropy
from .errors import PasswordGenerationError
from .cli import generate_password, generate_passwords_with_meta

__all__ = [
    "PasswordConfig",
    "DEFAULT_CONFIG",
    "CharacterClass",
    "CharSet",
    "build_char_set",
    "parse_pattern",
    "GenerationParams",
    "build_params",
    "RandomSource",
    "SeededSource",
    "SystemSource",
    "make_source",
    "generate_passwords",
    "calculate_entropy",
    "params_entropy",
    "PasswordGenerationError",
    "generate_password",
    "generate_passwords_with_meta",
]
