"""HMAC-SHA256 webhook signatures.

Header format: ``t=<unix seconds>,v1=<hex digest>``. The digest covers
``f"{t}.{raw_body}"`` keyed with the shared webhook secret. More than one
``v1`` entry may be present while a secret is being rotated; any match
is accepted.
"""

import hashlib
import hmac
import time


def compute_signature(payload: str, secret: str, timestamp: int) -> str:
    """Hex HMAC-SHA256 of ``{timestamp}.{payload}``."""
    signed_payload = f"{timestamp}.{payload}"
    return hmac.new(
        secret.encode(), signed_payload.encode(), hashlib.sha256
    ).hexdigest()


def sign_payload(payload: str, secret: str, timestamp: int | None = None) -> str:
    """Build a signature header value for payload.

    Args:
        payload: Raw request body
        secret: Shared webhook secret
        timestamp: Unix timestamp (seconds); defaults to now

    Returns:
        Header value: "t={timestamp},v1={hmac_hex}"
    """
    if timestamp is None:
        timestamp = int(time.time())
    return f"t={timestamp},v1={compute_signature(payload, secret, timestamp)}"


def parse_signature_header(header: str) -> tuple[int, list[str]] | None:
    """Split a header into (timestamp, [v1 digests]); None if malformed."""
    timestamp: int | None = None
    digests: list[str] = []
    for item in header.split(","):
        key, sep, value = item.strip().partition("=")
        if not sep:
            continue
        if key == "t":
            try:
                timestamp = int(value)
            except ValueError:
                return None
        elif key == "v1" and value:
            digests.append(value)
    if timestamp is None or not digests:
        return None
    return timestamp, digests


def verify_signature(
    payload: str,
    signature: str,
    secret: str,
    *,
    tolerance_seconds: int | None = None,
    now: float | None = None,
) -> bool:
    """Check a signature header against payload and secret.

    With tolerance_seconds left as None the result depends only on
    (payload, signature, secret). When a tolerance is given, signatures
    whose timestamp is further than that from `now` are rejected too.
    """
    if not signature or not secret:
        return False

    parsed = parse_signature_header(signature)
    if parsed is None:
        return False
    timestamp, digests = parsed

    expected = compute_signature(payload, secret, timestamp).encode()
    if not any(hmac.compare_digest(expected, digest.encode()) for digest in digests):
        return False

    if tolerance_seconds is not None:
        current = time.time() if now is None else now
        if abs(current - timestamp) > tolerance_seconds:
            return False

    return True
