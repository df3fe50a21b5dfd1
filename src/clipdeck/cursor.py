# -*- coding: utf-8 -*-
from typing import Callable, List, Optional


class LineCursor:
    """
    Forward-only cursor over the lines of a text blob.

    There is no lookbehind: callers capture a line when they read it or it
    is gone.
    """

    def __init__(self, text: str):
        self._lines: List[str] = text.splitlines()
        self._position = 0

    @property
    def line_number(self) -> int:
        """0-based index of the line returned by the last read, -1 before any read."""
        return self._position - 1

    @property
    def at_end(self) -> bool:
        return self._position >= len(self._lines)

    def next_line(self) -> Optional[str]:
        """Return the next line, or None once the input is exhausted."""
        if self.at_end:
            return None
        line = self._lines[self._position]
        self._position += 1
        return line

    def skip_until(self, predicate: Callable[[str], bool]) -> None:
        """Discard lines up to and including the first one matching predicate."""
        while True:
            line = self.next_line()
            if line is None or predicate(line):
                return
