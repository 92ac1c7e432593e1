"""
StdinBuffer — splits raw terminal input into complete sequences.

A single read from stdin may carry several key presses ("\x1b[A\x1b[A") or
only part of one escape sequence. The buffer emits whole sequences and keeps
a trailing partial escape sequence until the rest arrives or it is flushed.
"""
from __future__ import annotations

import re

ESC = "\x1b"

_SGR_MOUSE_RE = re.compile(r"^<\d+;\d+;\d+[Mm]$")


# ─────────────────────────────────────────────────────────────────────────────
# Sequence completeness detection
# ─────────────────────────────────────────────────────────────────────────────

def _is_complete_csi(data: str) -> str:
    """Returns 'complete' or 'incomplete' for a CSI sequence."""
    if len(data) < 3:
        return "incomplete"
    payload = data[2:]
    last = payload[-1]
    if 0x40 <= ord(last) <= 0x7e:
        if payload.startswith("<"):
            return "complete" if _SGR_MOUSE_RE.match(payload) else "incomplete"
        return "complete"
    return "incomplete"


def _is_complete_sequence(data: str) -> str:
    """Returns 'complete', 'incomplete', or 'not-escape'."""
    if not data.startswith(ESC):
        return "not-escape"
    if len(data) == 1:
        return "incomplete"
    after = data[1:]

    if after.startswith("["):
        if after.startswith("[M"):
            # X10 mouse report: ESC [ M Cb Cx Cy
            return "complete" if len(data) >= 6 else "incomplete"
        if after.startswith("[[") and len(after) == 2:
            return "incomplete"
        return _is_complete_csi(data)

    if after.startswith("]"):
        if data.endswith(ESC + "\\") or data.endswith("\x07"):
            return "complete"
        return "incomplete"

    if after.startswith(("P", "_")):
        return "complete" if data.endswith(ESC + "\\") else "incomplete"

    if after.startswith("O"):
        return "complete" if len(after) >= 2 else "incomplete"

    return "complete"


def _extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """
    Split buffer into complete sequences.
    Returns (sequences, remainder).
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]

        if remaining.startswith(ESC):
            seq_end = 1
            while seq_end <= len(remaining):
                candidate = remaining[:seq_end]
                status = _is_complete_sequence(candidate)
                if status == "incomplete":
                    seq_end += 1
                    continue
                sequences.append(candidate)
                pos += seq_end
                break
            else:
                return sequences, remaining
        else:
            sequences.append(remaining[0])
            pos += 1

    return sequences, ""


# ─────────────────────────────────────────────────────────────────────────────
# StdinBuffer
# ─────────────────────────────────────────────────────────────────────────────

class StdinBuffer:
    """
    Buffers stdin input and hands back complete sequences.

    The caller decides when a pending partial sequence has waited long
    enough (``timeout_ms``) and calls :meth:`flush` to take it as-is.
    """

    def __init__(self, timeout_ms: int = 10) -> None:
        self.timeout_ms = timeout_ms
        self._buffer = ""
        self._pending_bytes = b""

    def process(self, data: str | bytes) -> list[str]:
        """Feed input data into the buffer and return complete sequences."""
        if isinstance(data, bytes):
            if len(data) == 1 and data[0] > 127 and not self._pending_bytes:
                # Meta sends ESC-prefixed keys as a single high byte on some terminals
                s = ESC + chr(data[0] - 128)
            else:
                s = self._decode(data)
        else:
            s = data

        self._buffer += s
        seqs, self._buffer = _extract_complete_sequences(self._buffer)
        return seqs

    def _decode(self, data: bytes) -> str:
        raw = self._pending_bytes + data
        self._pending_bytes = b""
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            if exc.reason == "unexpected end of data":
                # Multi-byte character split across reads
                self._pending_bytes = raw[exc.start:]
                return raw[:exc.start].decode("utf-8", errors="replace")
            return raw.decode("utf-8", errors="replace")

    def flush(self) -> list[str]:
        """Flush the buffer, returning any pending sequence."""
        if not self._buffer:
            return []
        seqs = [self._buffer]
        self._buffer = ""
        return seqs

    @property
    def pending(self) -> bool:
        return bool(self._buffer)
