import pytest
from numpy.random import default_rng

from bb84sim import (
    ENCODING,
    InvalidParameter,
    generate_qubits,
    intercept_resend,
    measure_qubits,
    sift,
    transmit,
)


def test_generate_qubits_encodes_each_bit_in_its_basis():
    qubits = generate_qubits(64, default_rng(1))

    assert len(qubits) == 64
    assert [q.id for q in qubits] == list(range(64))
    for qubit in qubits:
        assert qubit.alice_polarization == ENCODING[qubit.alice_basis][qubit.alice_bit]
        assert not qubit.intercepted
        assert qubit.bob_basis is None


@pytest.mark.parametrize("n", [0, -5])
def test_generate_qubits_rejects_non_positive_count(n):
    with pytest.raises(InvalidParameter):
        generate_qubits(n, default_rng(1))


def test_transmit_without_eve_passes_qubits_through():
    qubits = generate_qubits(16, default_rng(2))
    assert transmit(qubits, False, default_rng(3)) == qubits


def test_intercept_resend_replaces_polarization():
    rng = default_rng(4)
    qubits = intercept_resend(generate_qubits(200, rng), rng)

    assert all(q.intercepted for q in qubits)
    for qubit in qubits:
        assert qubit.eve_polarization == ENCODING[qubit.eve_basis][qubit.eve_bit]
        assert qubit.transmitted_polarization == qubit.eve_polarization
        if qubit.eve_basis == qubit.alice_basis:
            assert qubit.eve_bit == qubit.alice_bit


def test_bob_recovers_alice_bit_when_bases_match_without_eve():
    rng = default_rng(5)
    qubits = measure_qubits(generate_qubits(256, rng), rng)

    for qubit in qubits:
        assert qubit.basis_match == (qubit.alice_basis == qubit.bob_basis)
        if qubit.basis_match:
            assert qubit.bob_measurement == qubit.alice_bit


def test_sift_keeps_matching_positions_in_order():
    rng = default_rng(6)
    qubits = measure_qubits(generate_qubits(300, rng), rng)
    sifted = sift(qubits)

    matching = [q for q in qubits if q.basis_match]
    assert len(sifted.alice) == len(sifted.bob) == len(matching) == len(sifted)
    assert list(sifted.indices) == [q.id for q in matching]
    assert sifted.alice == "".join(str(q.alice_bit) for q in matching)
    assert 0.35 < len(sifted) / len(qubits) < 0.65
