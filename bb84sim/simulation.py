from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from numpy.random import Generator, default_rng

from .authentication import DEFAULT_HMAC_SECRET, get_verification_status, sign_transcript, verify_transcript
from .bb84_protocol import Qubit, SiftedKeys, generate_qubits, measure_qubits, sift, transmit
from .circuits import build_measurement
from .encoding import bits_to_string
from .error_correction import BlockCorrectionResult, BlockParityCorrector
from .estimation import QBEREstimate, QBEREstimator
from .parameters import SimulationParameters
from .privacy import PrivacyAmplificationResult, amplify_pair, keys_match

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationResult:
    params: SimulationParameters
    qubits: Tuple[Qubit, ...]
    alice_key: str
    bob_key: str
    eve_key: Optional[str]
    sifted_alice_key: str
    sifted_bob_key: str
    sample_indices: Tuple[int, ...]
    qber: Optional[float]
    qber_exceeded: bool
    aborted: bool
    error_corrected_alice_key: Optional[str] = None
    error_corrected_bob_key: Optional[str] = None
    corrected_blocks: Tuple[int, ...] = ()
    leakage_bits: int = 0
    final_alice_key: Optional[str] = None
    final_bob_key: Optional[str] = None
    keys_match: bool = False
    hmac_verified: Optional[bool] = None

    @property
    def sifted_key_length(self) -> int:
        return len(self.sifted_alice_key)

    @property
    def sample_count(self) -> int:
        return len(self.sample_indices)

    def to_dataframe(self) -> "pandas.DataFrame":
        import pandas as pd

        rows: List[Dict[str, Any]] = []
        for qubit in self.qubits:
            rows.append(
                {
                    "Id": qubit.id,
                    "Alice Bit": qubit.alice_bit,
                    "Alice Basis": qubit.alice_basis.value,
                    "Polarization": qubit.alice_polarization.value,
                    "Eve Basis": qubit.eve_basis.value if qubit.intercepted else "-",
                    "Eve Bit": qubit.eve_bit if qubit.intercepted else "-",
                    "Bob Basis": qubit.bob_basis.value,
                    "Bob Bit": qubit.bob_measurement,
                    "Basis Match": qubit.basis_match,
                }
            )
        return pd.DataFrame(rows)


class BB84Simulation:
    def __init__(self, params: SimulationParameters, rng: Optional[Generator] = None, secret: bytes = DEFAULT_HMAC_SECRET):
        self.params = params
        self._rng: Generator = rng if rng is not None else default_rng(params.seed)
        self._measurement = build_measurement(params.backend)
        self._secret = secret

    def run(self) -> SimulationResult:
        params = self.params
        qubits = generate_qubits(params.n, self._rng)
        qubits = transmit(qubits, params.eve_enabled, self._rng, self._measurement)
        qubits = measure_qubits(qubits, self._rng, self._measurement)
        sifted = sift(qubits)
        estimate = QBEREstimator(params.sample_size).estimate(sifted.alice, sifted.bob, self._rng)

        base = dict(
            params=params,
            qubits=tuple(qubits),
            alice_key=bits_to_string(q.alice_bit for q in qubits),
            bob_key=bits_to_string(q.bob_measurement for q in qubits),
            eve_key=bits_to_string(q.eve_bit for q in qubits) if params.eve_enabled else None,
            sifted_alice_key=sifted.alice,
            sifted_bob_key=sifted.bob,
            sample_indices=estimate.sample_indices,
            qber=estimate.qber,
            qber_exceeded=estimate.qber_exceeded,
        )

        if params.secure_mode and estimate.qber_exceeded:
            logger.warning("QBER %.4f exceeds threshold, aborting key generation", estimate.qber)
            return SimulationResult(
                aborted=True,
                hmac_verified=get_verification_status(True, True),
                **base,
            )

        correction = self._correct_errors(estimate)
        alice_final, bob_final = self._amplify(estimate.remaining_alice, correction)
        match = keys_match(alice_final.final_key, bob_final.final_key)
        if not match:
            logger.warning("Final keys differ after %d residual errors", correction.residual_errors)

        hmac_verified = None
        if params.secure_mode:
            hmac_verified = get_verification_status(
                True, estimate.qber_exceeded, self._authenticate(qubits, sifted, estimate, correction)
            )

        result = SimulationResult(
            aborted=False,
            error_corrected_alice_key=estimate.remaining_alice,
            error_corrected_bob_key=correction.corrected_key,
            corrected_blocks=tuple(correction.corrected_blocks),
            leakage_bits=correction.leakage_bits,
            final_alice_key=alice_final.final_key,
            final_bob_key=bob_final.final_key,
            keys_match=match,
            hmac_verified=hmac_verified,
            **base,
        )
        logger.info(
            "BB84 run: n=%d sifted=%d qber=%s exceeded=%s keys_match=%s",
            params.n,
            len(sifted),
            "n/a" if estimate.qber is None else f"{estimate.qber:.4f}",
            estimate.qber_exceeded,
            match,
        )
        return result

    def _correct_errors(self, estimate: QBEREstimate) -> BlockCorrectionResult:
        corrector = BlockParityCorrector(self.params.block_size)
        return corrector.correct(estimate.remaining_alice, estimate.remaining_bob)

    def _amplify(
        self, alice_key: str, correction: BlockCorrectionResult
    ) -> Tuple[PrivacyAmplificationResult, PrivacyAmplificationResult]:
        return amplify_pair(alice_key, correction.corrected_key, self.params.final_key_length)

    def _authenticate(
        self, qubits: List[Qubit], sifted: SiftedKeys, estimate: QBEREstimate, correction: BlockCorrectionResult
    ) -> bool:
        """Alice tags her record of the public discussion, Bob checks it against his."""
        sample = estimate.sample_indices
        corrector = BlockParityCorrector(self.params.block_size)

        # Bob -> Alice
        bob_bases = [qubit.bob_basis.value for qubit in qubits]
        bob_sample = [sifted.bob[i] for i in sample]
        bob_parities = corrector.block_parities(estimate.remaining_bob)
        received_bases = self._deliver(bob_bases)
        # Alice -> Bob
        basis_match = [qubit.id for qubit, basis in zip(qubits, received_bases) if qubit.alice_basis.value == basis]
        alice_sample = [sifted.alice[i] for i in sample]

        alice_record = dict(
            bob_bases=received_bases,
            basis_match=basis_match,
            sample_indices=list(sample),
            alice_sample=alice_sample,
            bob_sample=self._deliver(bob_sample),
            alice_parities=correction.parities,
            bob_parities=self._deliver(bob_parities),
        )
        bob_record = dict(
            bob_bases=bob_bases,
            basis_match=self._deliver(basis_match),
            sample_indices=self._deliver(list(sample)),
            alice_sample=self._deliver(alice_sample),
            bob_sample=bob_sample,
            alice_parities=self._deliver(correction.parities),
            bob_parities=bob_parities,
        )
        tag = sign_transcript(alice_record, self._secret)
        return verify_transcript(bob_record, tag, self._secret)

    def _deliver(self, message: List[Any]) -> List[Any]:
        """Carry a message over the public classical channel."""
        return list(message)


def run_simulation(
    n: int,
    sample_size: float,
    block_size: int,
    final_key_length: int,
    eve_enabled: bool = False,
    secure_mode: bool = False,
    *,
    seed: Optional[int] = None,
    rng: Optional[Generator] = None,
    backend: str = "ideal",
) -> SimulationResult:
    """Run one complete BB84 session and return its read-only result."""
    params = SimulationParameters(
        n=n,
        sample_size=sample_size,
        block_size=block_size,
        final_key_length=final_key_length,
        eve_enabled=eve_enabled,
        secure_mode=secure_mode,
        seed=seed,
        backend=backend,
    )
    return BB84Simulation(params, rng=rng).run()
