import asyncio
import json
import logging

from totp_mcp import server
from totp_mcp.otp import base32

RFC_SECRET = base32.encode(b"12345678901234567890")


def test_server_exports_tools() -> None:
    expected = [
        "totp_create_secret",
        "totp_generate_code",
        "totp_verify_code",
        "totp_provisioning_uri",
        "main",
    ]
    for name in expected:
        assert hasattr(server, name)


def test_generate_and_verify_round_trip() -> None:
    generated = json.loads(asyncio.run(server.totp_generate_code(RFC_SECRET, time_slice=1, code_length=8)))
    assert generated == {"code": "94287082", "time_slice": 1}

    verified = json.loads(asyncio.run(server.totp_verify_code(RFC_SECRET, "94287082", time_slice=2, code_length=8)))
    assert verified == {"valid": True, "time_slice": 2}

    rejected = json.loads(asyncio.run(server.totp_verify_code(RFC_SECRET, "94287082", time_slice=3, code_length=8)))
    assert rejected["valid"] is False


def test_invalid_secret_reports_error() -> None:
    result = json.loads(asyncio.run(server.totp_generate_code("MZXW6Y==", time_slice=1)))
    assert "padding" in result["error"]

    result = json.loads(asyncio.run(server.totp_verify_code("bad!", "123456", time_slice=1)))
    assert "error" in result


def test_invalid_config_reports_error() -> None:
    result = json.loads(asyncio.run(server.totp_verify_code(RFC_SECRET, "287082", time_slice=1, clock_tolerance=-1)))
    assert "clock_tolerance" in result["error"]


def test_create_secret_and_uri() -> None:
    created = json.loads(asyncio.run(server.totp_create_secret()))
    assert created["length"] == 16
    base32.decode(created["secret"])

    uri = json.loads(asyncio.run(server.totp_provisioning_uri(created["secret"], "Acme", "Acme")))["uri"]
    assert uri == f"otpauth://totp/Acme?secret={created['secret']}&issuer=Acme"


def test_failures_do_not_log_secret_material(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="totp_mcp"):
        asyncio.run(server.totp_generate_code("GEZDGNBVq", time_slice=1))
        asyncio.run(server.totp_verify_code("GEZDGNBV!", "123456", time_slice=1))

    assert "DecodeError" in caplog.text
    assert "GEZDGNBV" not in caplog.text
    assert "'q'" not in caplog.text
    assert "'!'" not in caplog.text
    assert "position" not in caplog.text
