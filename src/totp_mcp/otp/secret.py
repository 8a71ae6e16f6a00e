"""Shared-secret creation and otpauth:// provisioning links."""

from __future__ import annotations

import secrets
from urllib.parse import quote

from totp_mcp.otp.base32 import ALPHABET
from totp_mcp.otp.errors import ConfigurationError, is_int


def create_secret(length: int = 16) -> str:
    """Return ``length`` symbols drawn uniformly from the base32 alphabet."""
    if not is_int(length) or length < 1:
        raise ConfigurationError(f"secret length must be a positive integer, got {length!r}")
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def provisioning_uri(secret: str, app_name: str, issuer: str) -> str:
    """Build the otpauth:// link an authenticator app scans.

    Formatting only; the secret is not validated.
    """
    return f"otpauth://totp/{quote(app_name, safe=':@')}?secret={secret}&issuer={quote(issuer, safe='')}"
