from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence

from numpy.random import Generator

from .encoding import Basis, Polarization, bits_to_string, encode, measure, random_bases, random_bits
from .parameters import InvalidParameter

logger = logging.getLogger(__name__)

Measurement = Callable[[Polarization, Basis, Generator], int]


@dataclass(frozen=True)
class Qubit:
    id: int
    alice_bit: int
    alice_basis: Basis
    alice_polarization: Polarization
    eve_basis: Optional[Basis] = None
    eve_polarization: Optional[Polarization] = None
    eve_bit: Optional[int] = None
    bob_basis: Optional[Basis] = None
    bob_measurement: Optional[int] = None

    @property
    def intercepted(self) -> bool:
        return self.eve_basis is not None

    @property
    def transmitted_polarization(self) -> Polarization:
        """The polarization that reaches Bob."""
        if self.eve_polarization is not None:
            return self.eve_polarization
        return self.alice_polarization

    @property
    def basis_match(self) -> bool:
        return self.bob_basis is not None and self.alice_basis == self.bob_basis


@dataclass(frozen=True)
class SiftedKeys:
    alice: str
    bob: str
    indices: tuple

    def __len__(self) -> int:
        return len(self.indices)


def generate_qubits(n: int, rng: Generator) -> List[Qubit]:
    """Alice's random bits and bases, encoded as polarizations."""
    if n <= 0:
        raise InvalidParameter("n must be positive")
    bits = random_bits(n, rng)
    bases = random_bases(n, rng)
    qubits = [
        Qubit(id=idx, alice_bit=bit, alice_basis=basis, alice_polarization=encode(basis, bit))
        for idx, (bit, basis) in enumerate(zip(bits, bases))
    ]
    logger.debug("Generated %d qubits", len(qubits))
    return qubits


def intercept_resend(qubits: Sequence[Qubit], rng: Generator, measurement: Measurement = measure) -> List[Qubit]:
    """Eve measures every photon in a random basis and re-emits her result."""
    eve_bases = random_bases(len(qubits), rng)
    intercepted: List[Qubit] = []
    for qubit, eve_basis in zip(qubits, eve_bases):
        eve_bit = measurement(qubit.alice_polarization, eve_basis, rng)
        intercepted.append(
            replace(
                qubit,
                eve_basis=eve_basis,
                eve_bit=eve_bit,
                eve_polarization=encode(eve_basis, eve_bit),
            )
        )
    logger.debug("Eve intercepted %d qubits", len(intercepted))
    return intercepted


def transmit(
    qubits: Sequence[Qubit], eve_enabled: bool, rng: Generator, measurement: Measurement = measure
) -> List[Qubit]:
    if not eve_enabled:
        return list(qubits)
    return intercept_resend(qubits, rng, measurement)


def measure_qubits(qubits: Sequence[Qubit], rng: Generator, measurement: Measurement = measure) -> List[Qubit]:
    """Bob measures each arriving photon in a randomly chosen basis."""
    bob_bases = random_bases(len(qubits), rng)
    return [
        replace(
            qubit,
            bob_basis=bob_basis,
            bob_measurement=measurement(qubit.transmitted_polarization, bob_basis, rng),
        )
        for qubit, bob_basis in zip(qubits, bob_bases)
    ]


def sift(qubits: Sequence[Qubit]) -> SiftedKeys:
    """Keep the positions where Alice and Bob used the same basis."""
    kept = [qubit for qubit in qubits if qubit.basis_match]
    sifted = SiftedKeys(
        alice=bits_to_string(qubit.alice_bit for qubit in kept),
        bob=bits_to_string(qubit.bob_measurement for qubit in kept),
        indices=tuple(qubit.id for qubit in kept),
    )
    logger.debug("Sifted %d of %d positions", len(sifted), len(qubits))
    return sifted
