"""Content fingerprint used as the HTTP cache validator of served reports."""

import hashlib


def fingerprint(text: str) -> str:
    """Compute a deterministic SHA256 hex digest of the report text.

    Equal fingerprints are treated as equal content; this is change
    detection, not security.
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
