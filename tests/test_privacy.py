from bb84sim import PrivacyAmplifier, keys_match


def test_privacy_amplifier_returns_requested_length():
    key = "1011" * 16  # 64 bits
    result = PrivacyAmplifier().apply(key, target_length=32)

    assert len(result.final_key) == 32
    assert set(result.final_key) <= {"0", "1"}
    assert result.discarded_bits == 32
    assert result.hash_function == "SHAKE-256"


def test_privacy_amplifier_never_exceeds_key_length():
    key = "0110" * 8  # 32 bits
    result = PrivacyAmplifier().apply(key, target_length=40)

    assert result.target_length == 32
    assert len(result.final_key) == 32
    assert result.discarded_bits == 0


def test_same_input_same_digest_and_differing_input_differs():
    amplifier = PrivacyAmplifier()
    alice = "1100" * 32
    bob = alice[:-1] + "1"

    first = amplifier.apply(alice, 128).final_key
    assert first == amplifier.apply(alice, 128).final_key
    assert first != amplifier.apply(bob, 128).final_key


def test_empty_key_yields_empty_final_key():
    result = PrivacyAmplifier().apply("", target_length=32)

    assert result.final_key == ""
    assert result.target_length == 0


def test_keys_match_compares_final_keys():
    assert keys_match("0101", "0101")
    assert not keys_match("0101", "0100")
    assert keys_match("", "")
    assert not keys_match(None, None)
    assert not keys_match("0101", None)
