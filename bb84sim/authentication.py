"""Authentication of the public discussion between Alice and Bob.

Each side serializes the classical messages it exchanged (basis choices,
basis-match announcements, disclosed sample, block parities) and tags them
with HMAC-SHA256 under a pre-shared secret. Matching tags mean neither side
saw a tampered message.
"""

from __future__ import annotations

import hashlib
import hmac
import json
from typing import Any, Dict, Optional

DEFAULT_HMAC_SECRET = b"super-secret-shared-key-for-hmac-authentication"


def serialize_transcript(messages: Dict[str, Any]) -> bytes:
    return json.dumps(messages, sort_keys=True, separators=(",", ":"), default=str).encode("utf-8")


def sign_transcript(messages: Dict[str, Any], secret: bytes = DEFAULT_HMAC_SECRET) -> str:
    return hmac.new(secret, serialize_transcript(messages), hashlib.sha256).hexdigest()


def verify_transcript(
    messages: Dict[str, Any], expected_tag: str, secret: bytes = DEFAULT_HMAC_SECRET
) -> bool:
    return hmac.compare_digest(sign_transcript(messages, secret), expected_tag)


def get_verification_status(
    secure_mode: bool, qber_exceeded: bool, transcript_verified: bool = True
) -> Optional[bool]:
    """Authentication verdict shown to the user.

    ``None`` outside secure mode. In secure mode an aborted session never
    counts as authenticated.
    """
    if not secure_mode:
        return None
    if qber_exceeded:
        return False
    return transcript_verified
