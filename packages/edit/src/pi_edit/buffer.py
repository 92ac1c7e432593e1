"""
Line buffer holding the text of a loaded file.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field


def split_lines(text: str) -> list[str]:
    """Split on '\\n', dropping a trailing '\\r' per line and the empty tail."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


@dataclass
class Buffer:
    """Ordered, read-only sequence of text lines."""

    lines: list[str] = field(default_factory=list)

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> "Buffer":
        """
        Read *path* as UTF-8 and split it into lines.

        Raises OSError if the file cannot be read and UnicodeDecodeError if
        it is not valid UTF-8.
        """
        with open(path, encoding="utf-8", newline="") as f:
            text = f.read()
        return cls(lines=split_lines(text))

    def is_empty(self) -> bool:
        return not self.lines

    def line_at(self, index: int) -> str | None:
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return None

    def __len__(self) -> int:
        return len(self.lines)
