"""Core building blocks for the BB84 quantum key distribution simulator."""

from .encoding import Basis, Polarization, ENCODING, encode, basis_of, measure
from .parameters import SimulationParameters, InvalidParameter, QBER_THRESHOLD, PARAMETER_RANGES
from .bb84_protocol import Qubit, SiftedKeys, generate_qubits, intercept_resend, transmit, measure_qubits, sift
from .estimation import QBEREstimator, QBEREstimate, sample_count
from .error_correction import BlockParityCorrector, BlockCorrectionResult
from .privacy import PrivacyAmplifier, PrivacyAmplificationResult, keys_match
from .authentication import get_verification_status, sign_transcript, verify_transcript
from .circuits import CircuitMeasurement
from .simulation import BB84Simulation, SimulationResult, run_simulation

__all__ = [
	"Basis",
	"Polarization",
	"ENCODING",
	"encode",
	"basis_of",
	"measure",
	"SimulationParameters",
	"InvalidParameter",
	"QBER_THRESHOLD",
	"PARAMETER_RANGES",
	"Qubit",
	"SiftedKeys",
	"generate_qubits",
	"intercept_resend",
	"transmit",
	"measure_qubits",
	"sift",
	"QBEREstimator",
	"QBEREstimate",
	"sample_count",
	"BlockParityCorrector",
	"BlockCorrectionResult",
	"PrivacyAmplifier",
	"PrivacyAmplificationResult",
	"keys_match",
	"get_verification_status",
	"sign_transcript",
	"verify_transcript",
	"CircuitMeasurement",
	"BB84Simulation",
	"SimulationResult",
	"run_simulation",
]
