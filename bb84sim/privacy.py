from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrivacyAmplificationResult:
    final_key: str
    hash_function: str
    target_length: int
    discarded_bits: int


class PrivacyAmplifier:
    HASH_FUNCTION = "SHAKE-256"

    def apply(self, key: str, target_length: int | None = None) -> PrivacyAmplificationResult:
        if target_length is None:
            target_length = len(key)
        else:
            target_length = min(target_length, len(key))

        if target_length <= 0:
            return PrivacyAmplificationResult("", self.HASH_FUNCTION, 0, len(key))

        final_key = self._shake_bits(key, target_length)[:target_length]
        return PrivacyAmplificationResult(final_key, self.HASH_FUNCTION, target_length, len(key) - target_length)

    def _shake_bits(self, key: str, bit_length: int) -> str:
        # The key length is hashed too so keys differing only in trailing
        # zero padding stay distinct.
        byte_data = len(key).to_bytes(4, "big") + self._bits_to_bytes(key)
        digest = hashlib.shake_256(byte_data).digest((bit_length + 7) // 8)
        return "".join(f"{byte:08b}" for byte in digest)

    @staticmethod
    def _bits_to_bytes(bits: str) -> bytes:
        padding = (8 - len(bits) % 8) % 8
        padded = bits + "0" * padding
        return bytes(int(padded[i : i + 8], 2) for i in range(0, len(padded), 8))


def keys_match(alice_final: str | None, bob_final: str | None) -> bool:
    """Both parties produced a final key and the two are identical."""
    if alice_final is None or bob_final is None:
        return False
    return alice_final == bob_final


def amplify_pair(
    alice_key: str, bob_key: str, target_length: int, amplifier: PrivacyAmplifier | None = None
) -> tuple[PrivacyAmplificationResult, PrivacyAmplificationResult]:
    """Shorten both corrected keys with the same hash and target length."""
    amplifier = amplifier or PrivacyAmplifier()
    alice = amplifier.apply(alice_key, target_length)
    bob = amplifier.apply(bob_key, target_length)
    if alice.target_length < target_length:
        logger.warning(
            "Final key shortened to %d bits (requested %d), corrected key is too short",
            alice.target_length,
            target_length,
        )
    return alice, bob
