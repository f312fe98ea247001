"""
Uniform random integers from a pluggable byte source.

Every source only has to hand out raw bytes; turning those into an
unbiased index is done once here, by rejection sampling, so no caller
ever reduces random bytes modulo an alphabet size.
"""

from __future__ import annotations

import hashlib
import secrets
from typing import Sequence, TypeVar

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

from .config import PasswordConfig, DEFAULT_CONFIG

T = TypeVar("T")


class RandomSource:
    """
    Base class: subclasses implement random_bytes().
    """

    name = "abstract"

    def random_bytes(self, n: int) -> bytes:
        raise NotImplementedError

    def randbits(self, k: int) -> int:
        """Return a non-negative int with k uniformly random bits."""
        if k < 0:
            raise ValueError("number of bits must be non-negative")
        if k == 0:
            return 0
        num_bytes = (k + 7) // 8
        value = int.from_bytes(self.random_bytes(num_bytes), "big")
        # Drop the surplus low bits of the last byte.
        return value >> (num_bytes * 8 - k)

    def randbelow(self, n: int) -> int:
        """
        Return a uniform int in [0, n).

        Draws bit_length(n) bits and retries while the value is >= n, so
        every outcome is equally likely; at worst half the draws retry.
        """
        if n <= 0:
            raise ValueError(f"upper bound must be positive (got {n})")
        k = n.bit_length()
        r = self.randbits(k)
        while r >= n:
            r = self.randbits(k)
        return r

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise IndexError("cannot choose from an empty sequence")
        return seq[self.randbelow(len(seq))]


class SystemSource(RandomSource):
    """Operating system CSPRNG; never reproducible."""

    name = "system"

    def random_bytes(self, n: int) -> bytes:
        return secrets.token_bytes(n)


class SeededSource(RandomSource):
    """
    Deterministic stream for reproducible output.

    The key is SHA-256 of the seed's text form and the stream is the
    ChaCha20 keystream under a zero nonce, so the same seed gives the same
    bytes on every platform and in every process.
    """

    name = "seeded"

    def __init__(self, seed: int | str | bytes) -> None:
        if isinstance(seed, bytes):
            material = seed
        else:
            material = str(seed).encode("utf-8")
        key = hashlib.sha256(material).digest()
        # 16-byte nonce: 4-byte block counter + 12-byte nonce, all zero.
        nonce = b"\x00" * 16
        self.seed = seed
        self._keystream = Cipher(algorithms.ChaCha20(key, nonce), mode=None).encryptor()

    def random_bytes(self, n: int) -> bytes:
        return self._keystream.update(b"\x00" * n)


def make_source(config: PasswordConfig | None = None) -> RandomSource:
    """
    Pick the random source a config asks for.

    A seed always wins; otherwise entropy_source selects "system" or
    "quantum".
    """
    cfg = config or DEFAULT_CONFIG

    if cfg.seed is not None:
        return SeededSource(cfg.seed)

    if cfg.entropy_source == "system":
        return SystemSource()

    if cfg.entropy_source == "quantum":
        # Local import: qiskit is slow to load and only this path needs it.
        from .quantum_engine import QuantumSource

        return QuantumSource(cfg)

    raise ValueError(
        f"Unknown entropy_source {cfg.entropy_source!r}; "
        "expected 'system' or 'quantum'."
    )
