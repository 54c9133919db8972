from __future__ import annotations

from numpy.random import Generator
from qiskit import QuantumCircuit
from qiskit_aer import AerSimulator

from .encoding import Basis, Polarization, basis_of, measure

_SEED_BOUND = 2**31 - 1


class CircuitMeasurement:
    """Measures single photons by simulating a one-qubit circuit on Aer.

    Drop-in replacement for :func:`bb84sim.encoding.measure`. Each call seeds
    the simulator from ``rng`` so outcomes stay fresh per photon and a seeded
    run is reproducible.
    """

    def __init__(self) -> None:
        self._backend = AerSimulator(method="statevector")

    def __call__(self, polarization: Polarization, basis: Basis, rng: Generator) -> int:
        circuit = self.build_circuit(polarization, basis)
        seed = int(rng.integers(0, _SEED_BOUND))
        job = self._backend.run(circuit, shots=1, seed_simulator=seed)
        counts = job.result().get_counts()
        bit_string = max(counts, key=counts.get)
        return int(bit_string)

    @staticmethod
    def build_circuit(polarization: Polarization, basis: Basis) -> QuantumCircuit:
        polarization = Polarization(polarization)
        circuit = QuantumCircuit(1, 1)
        if polarization in (Polarization.V, Polarization.D135):
            circuit.x(0)
        if basis_of(polarization) == Basis.DIAGONAL:
            circuit.h(0)

        circuit.id(0)

        if Basis(basis) == Basis.DIAGONAL:
            circuit.h(0)
        circuit.measure(0, 0)
        return circuit


MEASUREMENT_BACKENDS = {
    "ideal": lambda: measure,
    "aer": CircuitMeasurement,
}


def build_measurement(name: str):
    try:
        factory = MEASUREMENT_BACKENDS[name]
    except KeyError:
        raise ValueError(f"Unsupported measurement backend '{name}'") from None
    return factory()
