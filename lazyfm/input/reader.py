"""Raw stdin bytes to key tokens.

Printable input comes back as the character itself; everything else is a
named token (``UP``, ``ESC``, ``BACKSPACE``, ``ENTER_CR`` ...). A lone Esc is
told apart from an escape sequence by waiting briefly for a follow-up byte.
Unrecognised sequences are swallowed whole and reported as ``UNKNOWN``.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
# Token for a complete escape sequence no key binding knows about.
UNKNOWN_SEQUENCE = "UNKNOWN"
CSI_FINAL_FIRST = 0x40
CSI_FINAL_LAST = 0x7E
_PENDING_BYTES: list[bytes] = []

_CONTROL_TOKENS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}

_CSI_FINAL_TOKENS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}


def _wait_readable(fd: int, timeout_ms: int | None) -> bool:
    if timeout_ms is None:
        return True
    readable, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    return bool(readable)


def _next_byte(fd: int, timeout_ms: int | None) -> bytes:
    """One byte from the pushback queue or ``fd``; ``b""`` on timeout or EOF."""
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    if not _wait_readable(fd, timeout_ms):
        return b""
    return os.read(fd, 1)


def _utf8_sequence_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_text(fd: int, lead: bytes) -> str:
    data = lead
    for _ in range(_utf8_sequence_length(lead[0]) - 1):
        more = _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if not more:
            break
        data += more
    return data.decode("utf-8", errors="replace")


def _decode_escape(fd: int) -> str:
    """Decode what follows an Esc byte.

    A whole control sequence is consumed even when it is not recognised, so
    its parameter bytes never leak out as ordinary keys.
    """
    introducer = _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if not introducer:
        return "ESC"
    if introducer == b"O":
        final = _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        return _CSI_FINAL_TOKENS.get(final, UNKNOWN_SEQUENCE)
    if introducer != b"[":
        # Esc followed by an ordinary key: report both, one at a time.
        _PENDING_BYTES.append(introducer)
        return "ESC"
    params = b""
    while True:
        byte = _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if not byte:
            return UNKNOWN_SEQUENCE
        if byte[0] < 0x20:
            _PENDING_BYTES.append(byte)
            return UNKNOWN_SEQUENCE
        if CSI_FINAL_FIRST <= byte[0] <= CSI_FINAL_LAST:
            break
        params += byte
    if byte in _CSI_FINAL_TOKENS and (not params or params.startswith(b"1;")):
        # Modified arrows arrive as ``ESC [1;<mod><dir>``.
        return _CSI_FINAL_TOKENS[byte]
    if byte == b"~" and params == b"3":
        return "DELETE"
    return UNKNOWN_SEQUENCE


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` on timeout/EOF.

    ``timeout_ms=None`` blocks until a byte arrives.
    """
    lead = _next_byte(fd, timeout_ms)
    if not lead:
        return ""
    if lead in _CONTROL_TOKENS:
        return _CONTROL_TOKENS[lead]
    if lead == b"\x1b":
        return _decode_escape(fd)
    return _decode_text(fd, lead)
