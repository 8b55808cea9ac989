"""Tests for webhook HMAC signatures."""

import hashlib
import hmac

import pytest

from voicehook.webhook.signature import (
    compute_signature,
    parse_signature_header,
    sign_payload,
    verify_signature,
)

SECRET = "whsec_test"
PAYLOAD = '{"text":"","type":"session.start","session_id":"s1","turn_id":"t1"}'
TIMESTAMP = 1_700_000_000


class TestSignPayload:
    """Tests for signature generation."""

    def test_header_format(self) -> None:
        header = sign_payload(PAYLOAD, SECRET, timestamp=TIMESTAMP)
        assert header.startswith(f"t={TIMESTAMP},v1=")

    def test_digest_matches_hmac_sha256(self) -> None:
        expected = hmac.new(
            SECRET.encode(), f"{TIMESTAMP}.{PAYLOAD}".encode(), hashlib.sha256
        ).hexdigest()
        assert compute_signature(PAYLOAD, SECRET, TIMESTAMP) == expected
        assert sign_payload(PAYLOAD, SECRET, timestamp=TIMESTAMP) == (
            f"t={TIMESTAMP},v1={expected}"
        )

    def test_defaults_to_current_time(self) -> None:
        header = sign_payload(PAYLOAD, SECRET)
        parsed = parse_signature_header(header)
        assert parsed is not None
        assert parsed[0] > TIMESTAMP


class TestParseSignatureHeader:
    """Tests for header parsing."""

    def test_parses_timestamp_and_digest(self) -> None:
        assert parse_signature_header("t=12,v1=abc") == (12, ["abc"])

    def test_multiple_digests(self) -> None:
        assert parse_signature_header("t=12, v1=abc, v1=def") == (12, ["abc", "def"])

    @pytest.mark.parametrize(
        "header",
        ["", "v1=abc", "t=12", "t=abc,v1=abc", "garbage", "t=12,v1="],
    )
    def test_malformed(self, header: str) -> None:
        assert parse_signature_header(header) is None


class TestVerifySignature:
    """Tests for signature verification."""

    def test_valid_signature(self) -> None:
        header = sign_payload(PAYLOAD, SECRET, timestamp=TIMESTAMP)
        assert verify_signature(PAYLOAD, header, SECRET)

    def test_modified_payload_rejected(self) -> None:
        header = sign_payload(PAYLOAD, SECRET, timestamp=TIMESTAMP)
        assert not verify_signature(PAYLOAD.replace("s1", "s2"), header, SECRET)

    def test_wrong_secret_rejected(self) -> None:
        header = sign_payload(PAYLOAD, SECRET, timestamp=TIMESTAMP)
        assert not verify_signature(PAYLOAD, header, "other-secret")

    def test_modified_digest_rejected(self) -> None:
        header = sign_payload(PAYLOAD, SECRET, timestamp=TIMESTAMP)
        tampered = header[:-1] + ("0" if header[-1] != "0" else "1")
        assert not verify_signature(PAYLOAD, tampered, SECRET)

    def test_modified_timestamp_rejected(self) -> None:
        """The timestamp is part of the signed string."""
        header = sign_payload(PAYLOAD, SECRET, timestamp=TIMESTAMP)
        tampered = header.replace(f"t={TIMESTAMP}", f"t={TIMESTAMP + 1}")
        assert not verify_signature(PAYLOAD, tampered, SECRET)

    @pytest.mark.parametrize("header", ["", "nonsense", "t=1", "v1=abc"])
    def test_malformed_header_rejected(self, header: str) -> None:
        assert not verify_signature(PAYLOAD, header, SECRET)

    def test_empty_secret_rejected(self) -> None:
        header = sign_payload(PAYLOAD, "", timestamp=TIMESTAMP)
        assert not verify_signature(PAYLOAD, header, "")

    def test_non_ascii_digest_rejected(self) -> None:
        assert not verify_signature(PAYLOAD, f"t={TIMESTAMP},v1=ünïcode", SECRET)

    def test_any_rotated_digest_accepted(self) -> None:
        good = compute_signature(PAYLOAD, SECRET, TIMESTAMP)
        header = f"t={TIMESTAMP},v1={'0' * 64},v1={good}"
        assert verify_signature(PAYLOAD, header, SECRET)

    def test_pure_without_tolerance(self) -> None:
        """Without a tolerance, old timestamps still verify."""
        header = sign_payload(PAYLOAD, SECRET, timestamp=1)
        assert verify_signature(PAYLOAD, header, SECRET)
        assert verify_signature(PAYLOAD, header, SECRET)


class TestSignatureTolerance:
    """Tests for timestamp tolerance."""

    def test_within_tolerance(self) -> None:
        header = sign_payload(PAYLOAD, SECRET, timestamp=TIMESTAMP)
        assert verify_signature(
            PAYLOAD, header, SECRET, tolerance_seconds=300, now=TIMESTAMP + 299
        )

    def test_outside_tolerance(self) -> None:
        header = sign_payload(PAYLOAD, SECRET, timestamp=TIMESTAMP)
        assert not verify_signature(
            PAYLOAD, header, SECRET, tolerance_seconds=300, now=TIMESTAMP + 301
        )

    def test_future_timestamp_outside_tolerance(self) -> None:
        header = sign_payload(PAYLOAD, SECRET, timestamp=TIMESTAMP)
        assert not verify_signature(
            PAYLOAD, header, SECRET, tolerance_seconds=300, now=TIMESTAMP - 301
        )

    def test_tolerance_uses_clock_by_default(self) -> None:
        fresh = sign_payload(PAYLOAD, SECRET)
        stale = sign_payload(PAYLOAD, SECRET, timestamp=TIMESTAMP)
        assert verify_signature(PAYLOAD, fresh, SECRET, tolerance_seconds=300)
        assert not verify_signature(PAYLOAD, stale, SECRET, tolerance_seconds=300)
