from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from numpy.random import Generator

from .parameters import QBER_THRESHOLD, InvalidParameter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QBEREstimate:
    sample_indices: Tuple[int, ...]
    mismatches: int
    qber: Optional[float]
    qber_exceeded: bool
    remaining_alice: str
    remaining_bob: str

    @property
    def sample_count(self) -> int:
        return len(self.sample_indices)


def sample_count(sample_size: float, sifted_length: int) -> int:
    """Number of sifted positions to disclose; halves round up."""
    return int(math.floor(sample_size / 100 * sifted_length + 0.5))


def exceeds_threshold(qber: Optional[float], threshold: float = QBER_THRESHOLD) -> bool:
    return qber is not None and qber > threshold


class QBEREstimator:
    """Discloses a random sample of the sifted keys and measures the error rate.

    Sampled positions are removed from both keys; only the undisclosed
    remainder continues to error correction.
    """

    def __init__(self, sample_size: float, threshold: float = QBER_THRESHOLD):
        if not 0 <= sample_size <= 100:
            raise InvalidParameter("sample_size must be a percentage between 0 and 100")
        self.sample_size = sample_size
        self.threshold = threshold

    def estimate(self, alice_key: str, bob_key: str, rng: Generator) -> QBEREstimate:
        if len(alice_key) != len(bob_key):
            raise InvalidParameter("Sifted keys must be of equal length")

        length = len(alice_key)
        count = min(sample_count(self.sample_size, length), length)
        chosen = rng.choice(length, size=count, replace=False) if count else []
        indices = tuple(sorted(int(idx) for idx in chosen))

        mismatches = sum(1 for idx in indices if alice_key[idx] != bob_key[idx])
        qber = mismatches / count if count else None

        disclosed = set(indices)
        keep = [idx for idx in range(length) if idx not in disclosed]
        estimate = QBEREstimate(
            sample_indices=indices,
            mismatches=mismatches,
            qber=qber,
            qber_exceeded=exceeds_threshold(qber, self.threshold),
            remaining_alice="".join(alice_key[idx] for idx in keep),
            remaining_bob="".join(bob_key[idx] for idx in keep),
        )
        logger.debug("Sampled %d of %d sifted bits, %d mismatches", count, length, mismatches)
        return estimate
