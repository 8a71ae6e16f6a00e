"""TOTP code generation and verification (RFC 4226 / RFC 6238, HMAC-SHA1).

Configuration is an immutable ``TotpConfig`` passed per call or held by a
``TotpEngine`` instance; there is no process-wide state.
"""

from __future__ import annotations

import hashlib
import hmac
import time
from dataclasses import dataclass, replace
from typing import Optional

from totp_mcp.log import logger, debug_detail
from totp_mcp.otp import base32
from totp_mcp.otp.errors import ConfigurationError, DecodeError, is_int
from totp_mcp.otp.secret import create_secret

TIME_STEP = 30
RECOMMENDED_MIN_CODE_LENGTH = 6


@dataclass(frozen=True)
class TotpConfig:
    code_length: int = 6
    clock_tolerance: int = 1

    def __post_init__(self) -> None:
        if not is_int(self.code_length) or self.code_length < 1:
            raise ConfigurationError(f"code_length must be a positive integer, got {self.code_length!r}")
        if not is_int(self.clock_tolerance) or self.clock_tolerance < 0:
            raise ConfigurationError(f"clock_tolerance must be a non-negative integer, got {self.clock_tolerance!r}")
        if self.code_length < RECOMMENDED_MIN_CODE_LENGTH:
            logger.warning(
                "code_length=%d is below %d digits; codes are easy to guess",
                self.code_length,
                RECOMMENDED_MIN_CODE_LENGTH,
            )

    def with_code_length(self, code_length: int) -> "TotpConfig":
        return replace(self, code_length=code_length)

    def with_clock_tolerance(self, clock_tolerance: int) -> "TotpConfig":
        return replace(self, clock_tolerance=clock_tolerance)


DEFAULT_CONFIG = TotpConfig()


def time_slice_at(unix_time: float) -> int:
    """Return the 30-second counter for a Unix timestamp."""
    return int(unix_time // TIME_STEP)


def current_time_slice() -> int:
    return time_slice_at(time.time())


def _counter_bytes(time_slice: int) -> bytes:
    # 32-bit counter in the low half of an 8-byte big-endian block
    return (time_slice & 0xFFFFFFFF).to_bytes(8, "big")


def dynamic_truncate(digest: bytes) -> int:
    """RFC 4226 section 5.3: pick 4 bytes at the offset in the last nibble."""
    offset = digest[-1] & 0x0F
    return int.from_bytes(digest[offset:offset + 4], "big") & 0x7FFFFFFF


def render_code(value: int, code_length: int) -> str:
    return str(value % (10 ** code_length)).zfill(code_length)


def generate_code(
    secret: str,
    time_slice: Optional[int] = None,
    config: TotpConfig = DEFAULT_CONFIG,
) -> str:
    """Generate the code for ``secret`` (base32 text) at ``time_slice``.

    Defaults to the current time slice. Raises DecodeError if the secret
    is not valid base32.
    """
    if time_slice is None:
        time_slice = current_time_slice()

    try:
        key = base32.decode(secret)
    except DecodeError:
        debug_detail("Secret decode failed")
        raise

    digest = hmac.new(key, _counter_bytes(time_slice), hashlib.sha1).digest()
    return render_code(dynamic_truncate(digest), config.code_length)


def verify_code(
    secret: str,
    candidate: str,
    time_slice: Optional[int] = None,
    config: TotpConfig = DEFAULT_CONFIG,
) -> bool:
    """Check ``candidate`` against every slice within the clock tolerance.

    A wrong code is a normal False result; only an invalid secret raises.
    """
    if time_slice is None:
        time_slice = current_time_slice()

    candidate_bytes = candidate.encode("ascii", errors="replace") if isinstance(candidate, str) else b""

    tolerance = config.clock_tolerance
    for offset in range(-tolerance, tolerance + 1):
        expected = generate_code(secret, time_slice + offset, config)
        if hmac.compare_digest(expected.encode("ascii"), candidate_bytes):
            debug_detail(f"Code matched at slice offset {offset:+d}")
            return True
    return False


class TotpEngine:
    """Generate and verify codes under a fixed configuration."""

    def __init__(self, config: TotpConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def generate_code(self, secret: str, time_slice: Optional[int] = None) -> str:
        return generate_code(secret, time_slice, self.config)

    def verify_code(self, secret: str, candidate: str, time_slice: Optional[int] = None) -> bool:
        return verify_code(secret, candidate, time_slice, self.config)

    def create_secret(self, length: int = 16) -> str:
        return create_secret(length)
