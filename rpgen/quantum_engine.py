from __future__ import annotations

"""
Quantum entropy source: prepares qubits in superposition, measures them
in alternating bases, and turns the outcomes into uniformly random bytes.
"""
import hashlib
import logging

from qiskit import QuantumCircuit
from qiskit import transpile
from qiskit_aer import AerSimulator

from .config import PasswordConfig, DEFAULT_CONFIG
from .random_source import RandomSource

logger = logging.getLogger(__name__)

# Fresh measured bits behind every 32-byte output block.
BLOCK_BITS = 256


def bits_to_bytes(bits: list[int]) -> bytes:
    """
    Pack a list of bits [0,1,1,0,...] into bytes (8 bits per byte).
    If bits length is not a multiple of 8, pad with zeros at the end.
    """
    if not bits:
        return b""

    pad_len = (8 - (len(bits) % 8)) % 8
    bits_padded = bits + [0] * pad_len

    out = bytearray()
    for i in range(0, len(bits_padded), 8):
        byte = 0
        for bit in bits_padded[i : i + 8]:
            byte = (byte << 1) | bit
        out.append(byte)
    return bytes(out)


def amplify(data: bytes, rounds: int = 1) -> bytes:
    """
    Mix raw measurement bytes with SHA-256 `rounds` times.

    Always returns a 32-byte digest, even for rounds <= 0, so callers get
    a fixed block size.
    """
    digest = hashlib.sha256(data).digest()
    for _ in range(max(0, rounds - 1)):
        digest = hashlib.sha256(digest).digest()
    return digest


class QuantumEngine:
    """
    Encapsulates all quantum-circuit-related logic.
    """

    def __init__(self, config: PasswordConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        # Local simulator backend.
        self.backend = AerSimulator()

        if self.config.num_qubits <= 0:
            raise ValueError("num_qubits must be positive")

        # Safety: ensure requested num_qubits does not exceed backend capability.
        backend_cfg = self.backend.configuration()
        max_qubits = getattr(backend_cfg, "n_qubits", None) or getattr(
            backend_cfg, "num_qubits", None
        )
        if max_qubits is not None and self.config.num_qubits > max_qubits:
            raise ValueError(
                f"Configured num_qubits={self.config.num_qubits} exceeds "
                f"backend limit ({max_qubits}). "
                "Lower num_qubits in PasswordConfig."
            )

        self._circuit, self.measurement_basis = self._build_circuit()
        self._compiled = transpile(self._circuit, self.backend)

    def _build_circuit(self) -> tuple[QuantumCircuit, list[str]]:
        """
        Prepare N qubits, put them in superposition, then measure
        in alternating bases (Z, X, Z, X, ...).
        """
        n = self.config.num_qubits
        measurement_basis: list[str] = []

        qc = QuantumCircuit(n, n)

        for i in range(n):
            qc.h(i)

        # Odd qubits are rotated to |+i> (S after H) and read out in the X
        # basis. |+> itself is an X eigenstate and would always read 0.
        for i in range(n):
            if i % 2 == 1:
                measurement_basis.append("X")
                qc.s(i)
                qc.h(i)
            else:
                measurement_basis.append("Z")
            qc.measure(i, i)

        return qc, measurement_basis

    def measure_shots(self, shots: int) -> list[list[int]]:
        """
        Run the circuit `shots` times and return one bit list per shot.
        """
        result = self.backend.run(self._compiled, shots=shots, memory=True).result()

        # Qiskit orders bits as [q_(n-1) ... q_0]; reverse so index 0 is first qubit.
        return [[int(b) for b in shot[::-1]] for shot in result.get_memory()]

    def measure(self) -> list[int]:
        """
        Run the circuit for a single shot and return one bit per qubit.
        """
        return self.measure_shots(1)[0]


class QuantumSource(RandomSource):
    """
    Random bytes drawn from the quantum engine.

    Each refill measures at least BLOCK_BITS fresh bits per stream,
    XOR-combines `quantum_streams` such streams, prefixes a block counter
    and amplifies the result with SHA-256, yielding 32 bytes per refill.
    A 32-byte block is never released for fewer than 256 measured bits.
    """

    name = "quantum"

    def __init__(self, config: PasswordConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self.engine = QuantumEngine(self.config)
        self._buffer = bytearray()
        self._block = 0

    def _stream_bits(self) -> list[int]:
        n = self.config.num_qubits
        shots = -(-BLOCK_BITS // n)
        return [bit for shot in self.engine.measure_shots(shots) for bit in shot]

    def _combined_bits(self) -> list[int]:
        combined: list[int] | None = None
        for _ in range(max(1, self.config.quantum_streams)):
            bits = self._stream_bits()
            if combined is None:
                combined = bits
            else:
                combined = [b ^ c for b, c in zip(bits, combined)]
        assert combined is not None
        return combined

    def _refill(self) -> None:
        raw = bits_to_bytes(self._combined_bits())
        block = self._block.to_bytes(8, "big") + raw
        self._block += 1
        self._buffer.extend(amplify(block, self.config.entropy_rounds))
        logger.debug("Quantum refill %d (%d raw bits)", self._block, len(raw) * 8)

    def random_bytes(self, n: int) -> bytes:
        while len(self._buffer) < n:
            self._refill()
        out = bytes(self._buffer[:n])
        del self._buffer[:n]
        return out
