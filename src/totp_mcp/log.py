"""stderr logging for the TOTP MCP server.

stdout carries MCP JSON-RPC, so the handler writes to stderr. The level comes
from TOTP_MCP_LOG_LEVEL (default INFO). Secrets, codes and the offending
symbols of a malformed secret are never passed to the logger.
"""

import logging
import os
import sys

LOG_LEVEL_ENV = "TOTP_MCP_LOG_LEVEL"


def level_from_env(default: int = logging.INFO) -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


logger = logging.getLogger("totp_mcp")
if not logger.handlers:
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(_handler)
logger.setLevel(level_from_env())


def debug_detail(message: str) -> None:
    logger.debug(message)
