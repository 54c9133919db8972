from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

QBER_THRESHOLD = 0.11
MAX_QUBITS = 5000

# Ranges offered by the parameter-input surface. The engine itself accepts
# any positive qubit count up to MAX_QUBITS.
PARAMETER_RANGES: Dict[str, Tuple[int, int]] = {
    "n": (100, 5000),
    "sample_size": (5, 50),
    "block_size": (8, 128),
    "final_key_length": (32, 256),
}

BACKENDS = ("ideal", "aer")


class InvalidParameter(ValueError):
    """Raised before a run starts when a parameter is out of range."""


@dataclass(frozen=True)
class SimulationParameters:
    n: int = 800
    sample_size: float = 20
    block_size: int = 32
    final_key_length: int = 128
    eve_enabled: bool = False
    secure_mode: bool = False
    seed: Optional[int] = None
    backend: str = "ideal"

    def __post_init__(self) -> None:
        if self.n <= 0:
            raise InvalidParameter("n must be positive")
        if self.n > MAX_QUBITS:
            raise InvalidParameter(f"n must not exceed {MAX_QUBITS}")
        if not 0 <= self.sample_size <= 100:
            raise InvalidParameter("sample_size must be a percentage between 0 and 100")
        if self.block_size <= 0:
            raise InvalidParameter("block_size must be positive")
        if self.final_key_length <= 0:
            raise InvalidParameter("final_key_length must be positive")
        if self.backend not in BACKENDS:
            raise InvalidParameter(f"Unsupported backend '{self.backend}'")

    def check_ui_ranges(self) -> None:
        """Apply the stricter ranges of the interactive input surface."""
        for name, (lower, upper) in PARAMETER_RANGES.items():
            value = getattr(self, name)
            if not lower <= value <= upper:
                raise InvalidParameter(f"{name} must be between {lower} and {upper}, got {value}")
