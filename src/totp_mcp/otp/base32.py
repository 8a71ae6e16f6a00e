"""RFC 4648 base32 codec for TOTP shared secrets.

Works directly on integer bit buffers. Decoding is strict about padding:
only the suffix lengths a real encoder can produce are accepted.
"""

from __future__ import annotations

from typing import Dict

from totp_mcp.otp.errors import DecodeError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
PAD = "="

_LOOKUP: Dict[str, int] = {ch: i for i, ch in enumerate(ALPHABET)}

# bits mod 40 -> number of padding symbols
_PADDING_FOR_BITS = {0: 0, 8: 6, 16: 4, 24: 3, 32: 1}
_VALID_PAD_COUNTS = frozenset(_PADDING_FOR_BITS.values())


def encode(data: bytes, padding: bool = True) -> str:
    """Encode bytes as base32 text, padded to a multiple of 8 symbols."""
    if not data:
        return ""

    out = []
    buffer = 0
    bits = 0
    for byte in data:
        buffer = (buffer << 8) | byte
        bits += 8
        while bits >= 5:
            bits -= 5
            out.append(ALPHABET[(buffer >> bits) & 0x1F])
        buffer &= (1 << bits) - 1
    if bits:
        out.append(ALPHABET[(buffer << (5 - bits)) & 0x1F])

    if padding:
        out.append(PAD * _PADDING_FOR_BITS[(len(data) * 8) % 40])
    return "".join(out)


def decode(text: str) -> bytes:
    """Decode base32 text to bytes.

    Raises DecodeError on a bad padding count, padding that is not a
    contiguous suffix, a symbol outside the (uppercase) alphabet, or
    padded text whose last symbol carries non-zero fill bits. Unpadded
    text of any length is accepted as-is.
    """
    if not isinstance(text, str):
        raise DecodeError(f"expected str, got {type(text).__name__}")
    if len(text) == 0:
        return b""

    pad_count = text.count(PAD)
    if pad_count not in _VALID_PAD_COUNTS:
        raise DecodeError(f"invalid padding count: {pad_count}")
    if pad_count:
        if not text.endswith(PAD * pad_count):
            raise DecodeError("padding must be a contiguous suffix")
        if len(text) % 8 != 0:
            raise DecodeError("padded input must be a multiple of 8 symbols")
        text = text[:-pad_count]

    out = bytearray()
    buffer = 0
    bits = 0
    for pos, ch in enumerate(text):
        index = _LOOKUP.get(ch)
        if index is None:
            raise DecodeError(f"invalid base32 symbol {ch!r} at position {pos}")
        buffer = (buffer << 5) | index
        bits += 5
        if bits >= 8:
            bits -= 8
            # zero bytes are data, append unconditionally
            out.append((buffer >> bits) & 0xFF)
            buffer &= (1 << bits) - 1
    # leftover bits (< 8) of a padded block must be the encoder's zero fill
    if pad_count and buffer & ((1 << bits) - 1):
        raise DecodeError("non-zero trailing bits before padding")
    return bytes(out)
