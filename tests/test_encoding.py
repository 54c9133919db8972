import pytest
from numpy.random import default_rng

from bb84sim import ENCODING, Basis, Polarization, basis_of, encode, measure


@pytest.mark.parametrize(
    "basis, bit, polarization",
    [
        (Basis.RECTILINEAR, 0, Polarization.H),
        (Basis.RECTILINEAR, 1, Polarization.V),
        (Basis.DIAGONAL, 0, Polarization.D45),
        (Basis.DIAGONAL, 1, Polarization.D135),
    ],
)
def test_encode_then_measure_in_same_basis_recovers_bit(basis, bit, polarization):
    assert encode(basis, bit) == polarization
    assert basis_of(polarization) == basis
    assert measure(polarization, basis, default_rng(0)) == bit


def test_encode_rejects_non_binary_bit():
    with pytest.raises(ValueError):
        encode(Basis.RECTILINEAR, 2)


@pytest.mark.parametrize(
    "polarization, basis",
    [(Polarization.H, Basis.DIAGONAL), (Polarization.D135, Basis.RECTILINEAR)],
)
def test_conjugate_basis_measurement_draws_fresh_randomness(polarization, basis):
    rng = default_rng(11)
    outcomes = [measure(polarization, basis, rng) for _ in range(400)]

    assert set(outcomes) == {0, 1}
    assert 0.4 < sum(outcomes) / len(outcomes) < 0.6


def test_each_basis_uses_two_distinct_polarizations():
    assert set(ENCODING[Basis.RECTILINEAR].values()) == {Polarization.H, Polarization.V}
    assert set(ENCODING[Basis.DIAGONAL].values()) == {Polarization.D45, Polarization.D135}
