from __future__ import annotations

import sys
from typing import TextIO

CURSOR_UP_LINES = "\x1b[{count}F"
CLEAR_TO_END = "\x1b[J"


class LiveTerminalWriter:
    """Redraws a block of text in place on a terminal.

    On a stream that is not a TTY every block is appended instead.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.live = bool(getattr(self.stream, "isatty", lambda: False)())
        self._drawn_lines = 0

    def _erase(self) -> None:
        if self.live and self._drawn_lines:
            self.stream.write(CURSOR_UP_LINES.format(count=self._drawn_lines) + CLEAR_TO_END)
        self._drawn_lines = 0

    def write(self, block: str) -> None:
        if not block.endswith("\n"):
            block += "\n"
        self._erase()
        self.stream.write(block)
        self.stream.flush()
        self._drawn_lines = block.count("\n")

    def report(self, line: str) -> None:
        # Reported lines stay above the live block; the next write draws below them.
        self._erase()
        self.stream.write(line.rstrip("\n") + "\n")
        self.stream.flush()

    def close(self) -> None:
        self._drawn_lines = 0
        self.stream.flush()

    def __enter__(self) -> LiveTerminalWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
