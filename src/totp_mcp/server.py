"""totp_mcp — MCP server for TOTP (RFC 6238) secrets and one-time codes.

Provides tools for AI agents to create shared secrets, generate second-factor
codes, verify user-supplied codes against a clock-drift window, and build
otpauth:// provisioning links. Nothing is persisted.
"""

import json
from typing import Optional

from mcp.server.fastmcp import FastMCP

from totp_mcp.log import logger
from totp_mcp.otp.engine import TotpConfig, TotpEngine, current_time_slice
from totp_mcp.otp.errors import ConfigurationError, DecodeError
from totp_mcp.otp.secret import create_secret, provisioning_uri

mcp = FastMCP("totp_mcp")


def _error(message: str, **extra) -> str:
    return json.dumps({"error": message, **extra}, indent=2)


# ── Tools ─────────────────────────────────────────────────────────────────────


@mcp.tool(
    name="totp_create_secret",
    annotations={
        "title": "Create TOTP Secret",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": False,
    },
)
async def totp_create_secret(length: int = 16) -> str:
    """Create a new random base32 shared secret.

    Args:
        length: Number of base32 symbols (default 16, i.e. 80 bits).

    Returns:
        JSON: {"secret": str, "length": int}
        Error: {"error": str}
    """
    try:
        secret = create_secret(length)
    except ConfigurationError as exc:
        return _error(str(exc))
    return json.dumps({"secret": secret, "length": len(secret)}, indent=2)


@mcp.tool(
    name="totp_generate_code",
    annotations={
        "title": "Generate TOTP Code",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def totp_generate_code(
    secret: str,
    time_slice: Optional[int] = None,
    code_length: int = 6,
) -> str:
    """Generate the one-time code for a base32 secret.

    Args:
        secret: Base32 shared secret (A-Z, 2-7, optional '=' padding).
        time_slice: 30-second counter to generate for. Defaults to now.
        code_length: Number of digits (default 6).

    Returns:
        JSON: {"code": str, "time_slice": int}
        Error: {"error": str}
    """
    if time_slice is None:
        time_slice = current_time_slice()
    try:
        engine = TotpEngine(TotpConfig(code_length=code_length))
        code = engine.generate_code(secret, time_slice)
    except (DecodeError, ConfigurationError) as exc:
        logger.warning("Code generation failed: %s", type(exc).__name__)
        return _error(str(exc), time_slice=time_slice)
    return json.dumps({"code": code, "time_slice": time_slice}, indent=2)


@mcp.tool(
    name="totp_verify_code",
    annotations={
        "title": "Verify TOTP Code",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def totp_verify_code(
    secret: str,
    code: str,
    time_slice: Optional[int] = None,
    code_length: int = 6,
    clock_tolerance: int = 1,
) -> str:
    """Verify a user-supplied code against the secret.

    Accepts codes from `clock_tolerance` slices before or after the current one.
    A wrong code is reported as valid=false, not as an error. Does NOT track
    which codes were already used; replay prevention is up to the caller.

    Args:
        secret: Base32 shared secret.
        code: Candidate code as typed by the user (leading zeros matter).
        time_slice: 30-second counter to verify against. Defaults to now.
        code_length: Number of digits (default 6).
        clock_tolerance: Adjacent slices accepted on each side (default 1).

    Returns:
        JSON: {"valid": bool, "time_slice": int}
        Error: {"error": str}
    """
    if time_slice is None:
        time_slice = current_time_slice()
    try:
        engine = TotpEngine(TotpConfig(code_length=code_length, clock_tolerance=clock_tolerance))
        valid = engine.verify_code(secret, code, time_slice)
    except (DecodeError, ConfigurationError) as exc:
        logger.warning("Code verification failed: %s", type(exc).__name__)
        return _error(str(exc), time_slice=time_slice)
    return json.dumps({"valid": valid, "time_slice": time_slice}, indent=2)


@mcp.tool(
    name="totp_provisioning_uri",
    annotations={
        "title": "Build Provisioning URI",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def totp_provisioning_uri(secret: str, app_name: str, issuer: str) -> str:
    """Build the otpauth:// link to enroll the secret in an authenticator app.

    Args:
        secret: Base32 shared secret.
        app_name: Label shown in the app (e.g., 'Acme:alice@example.com').
        issuer: Issuer identifier (e.g., 'Acme').

    Returns:
        JSON: {"uri": str}
    """
    return json.dumps({"uri": provisioning_uri(secret, app_name, issuer)}, indent=2)


def main():
    mcp.run()


if __name__ == "__main__":
    main()
