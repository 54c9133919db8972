from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List

from .parameters import InvalidParameter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockCorrectionResult:
    corrected_key: str
    corrected_blocks: List[int]
    parities: List[int]
    leakage_bits: int
    residual_errors: int


class BlockParityCorrector:
    """Single-pass block parity reconciliation.

    Both sides announce one parity per block. A block whose parities differ is
    treated as located by binary search and Bob adopts Alice's bits for it;
    the search costs ``ceil(log2(len(block)))`` further disclosed parities.
    Blocks holding an even number of errors keep matching parities and pass
    through uncorrected.
    """

    def __init__(self, block_size: int = 32):
        if block_size <= 0:
            raise InvalidParameter("block_size must be positive")
        self.block_size = block_size

    def correct(self, alice_key: str, bob_key: str) -> BlockCorrectionResult:
        if len(alice_key) != len(bob_key):
            raise InvalidParameter("Keys must be of equal length for error correction")

        alice = [int(bit) for bit in alice_key]
        bob = [int(bit) for bit in bob_key]
        length = len(alice)
        corrected_blocks: List[int] = []
        parities: List[int] = []
        leakage_bits = 0

        for start in range(0, length, self.block_size):
            end = min(start + self.block_size, length)
            alice_parity = self._parity(alice, start, end)
            parities.append(alice_parity)
            leakage_bits += 1
            if alice_parity != self._parity(bob, start, end):
                leakage_bits += math.ceil(math.log2(end - start)) if end - start > 1 else 0
                bob[start:end] = alice[start:end]
                corrected_blocks.append(start)

        residual_errors = sum(1 for i in range(length) if alice[i] != bob[i])
        logger.debug(
            "Corrected %d of %d blocks, %d residual errors",
            len(corrected_blocks),
            len(parities),
            residual_errors,
        )
        return BlockCorrectionResult(
            corrected_key="".join(str(bit) for bit in bob),
            corrected_blocks=corrected_blocks,
            parities=parities,
            leakage_bits=leakage_bits,
            residual_errors=residual_errors,
        )

    def block_parities(self, key: str) -> List[int]:
        """Parity of each block of ``key``, as one side announces them."""
        bits = [int(bit) for bit in key]
        return [
            self._parity(bits, start, min(start + self.block_size, len(bits)))
            for start in range(0, len(bits), self.block_size)
        ]

    @staticmethod
    def _parity(bits: List[int], start: int, end: int) -> int:
        parity = 0
        for bit in bits[start:end]:
            parity ^= bit
        return parity
