from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

from numpy.random import Generator


class Basis(str, Enum):
    RECTILINEAR = "Rectilinear"
    DIAGONAL = "Diagonal"


class Polarization(str, Enum):
    H = "H"
    V = "V"
    D45 = "D45"
    D135 = "D135"


BITS: Tuple[int, int] = (0, 1)
BASES: Tuple[Basis, Basis] = (Basis.RECTILINEAR, Basis.DIAGONAL)

ENCODING: Dict[Basis, Dict[int, Polarization]] = {
    Basis.RECTILINEAR: {0: Polarization.H, 1: Polarization.V},
    Basis.DIAGONAL: {0: Polarization.D45, 1: Polarization.D135},
}

_DECODING: Dict[Polarization, Tuple[Basis, int]] = {
    polarization: (basis, bit)
    for basis, table in ENCODING.items()
    for bit, polarization in table.items()
}


def encode(basis: Basis, bit: int) -> Polarization:
    """Return the polarization that carries ``bit`` in ``basis``."""
    if bit not in BITS:
        raise ValueError(f"bit must be 0 or 1, got {bit!r}")
    return ENCODING[Basis(basis)][bit]


def basis_of(polarization: Polarization) -> Basis:
    return _DECODING[Polarization(polarization)][0]


def measure(polarization: Polarization, basis: Basis, rng: Generator) -> int:
    """Measure ``polarization`` in ``basis``.

    A matching basis recovers the encoded bit. A conjugate basis collapses the
    state to either outcome with equal probability; a fresh coin is drawn from
    ``rng`` on every such call.
    """
    prepared_basis, bit = _DECODING[Polarization(polarization)]
    if prepared_basis == Basis(basis):
        return bit
    return int(rng.integers(0, 2))


def random_bits(count: int, rng: Generator) -> list[int]:
    return [int(bit) for bit in rng.integers(0, 2, size=count)]


def random_bases(count: int, rng: Generator) -> list[Basis]:
    return [BASES[int(choice)] for choice in rng.integers(0, 2, size=count)]


def bits_to_string(bits) -> str:
    return "".join(str(int(bit)) for bit in bits)
