import sys
import os
import hashlib
import pytest
from pydantic import ValidationError

# Ensure we can import from root
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from codec.encoder import encode
from verifier.verifier import VerificationResult, check_digest_algorithm, content_digest, verify, verify_encoded

SERVICE_ACCOUNT = '{"type":"service_account"}'.encode("utf-8")


def test_verify_success():
    result = verify(SERVICE_ACCOUNT)
    assert result.ok
    assert result.stage == "Compared"
    assert result.original_digest == result.decoded_digest
    assert result.original_digest == hashlib.sha256(SERVICE_ACCOUNT).hexdigest()
    assert result.decoded_length == len(SERVICE_ACCOUNT)


def test_verify_empty_input():
    result = verify(b"")
    assert result.ok
    assert result.original_length == 0


def test_verify_other_digest():
    result = verify(SERVICE_ACCOUNT, digest_algorithm="sha512")
    assert result.ok
    assert result.digest_algorithm == "sha512"
    assert len(result.original_digest) == 128


def test_corrupted_string_reports_mismatch():
    encoded = encode(SERVICE_ACCOUNT)
    # "{" is 123 -> "1Z"; flip the low symbol
    corrupted = encoded[:1] + "Y" + encoded[2:]
    result = verify_encoded(SERVICE_ACCOUNT, corrupted)
    assert not result.ok
    assert result.stage == "Compared"
    assert result.reason == "digest mismatch"
    assert result.decoded_digest != result.original_digest
    assert result.decoded_length == len(SERVICE_ACCOUNT)
    assert result.original_preview.startswith('{"type"')


def test_undecodable_string_reports_failure():
    encoded = encode(SERVICE_ACCOUNT)
    result = verify_encoded(SERVICE_ACCOUNT, encoded[:-1])
    assert not result.ok
    assert result.stage == "Decoded"
    assert result.decoded_length is None
    assert "odd length" in result.reason

    result = verify_encoded(SERVICE_ACCOUNT, "!" + encoded[1:])
    assert not result.ok
    assert "position 0" in result.reason


def test_every_single_symbol_corruption_is_caught():
    original = b"\x00\x01\x7f\xff"
    encoded = encode(original)
    for i in range(len(encoded)):
        for replacement in "0aZ":
            if encoded[i] == replacement:
                continue
            corrupted = encoded[:i] + replacement + encoded[i + 1:]
            assert not verify_encoded(original, corrupted).ok


def test_diagnostic_previews_are_truncated():
    original = b"x" * 500
    result = verify_encoded(original, encode(b"y" * 500), preview_bytes=10)
    assert not result.ok
    assert result.original_preview == "x" * 10 + "..."
    assert result.decoded_preview == "y" * 10 + "..."
    report = result.diagnostic()
    assert "Original length: 500 bytes" in report
    assert content_digest(original) in report


def test_stage_only_accepts_known_values():
    with pytest.raises(ValidationError):
        VerificationResult(ok=True, stage="Encoded", original_length=0, original_digest="")


def test_check_digest_algorithm():
    assert check_digest_algorithm("SHA256") == "sha256"
    for bad in ("nope", "shake_128"):
        with pytest.raises(ValueError):
            check_digest_algorithm(bad)
