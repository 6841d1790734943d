from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from punktransfers.core.interfaces import ILogSource


class JsonlLogSource(ILogSource):
    """Read one raw log message per line from an NDJSON file ("-" for stdin).

    Lines are yielded as raw bytes; blank lines are skipped. Decoding (UTF-8
    included) is left to the processor so bad lines are counted, not fatal.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = path
        self._fh: BinaryIO | None = None

    def _is_stdin(self) -> bool:
        return str(self.path) == "-"

    def _open(self) -> BinaryIO:
        if self._is_stdin():
            return sys.stdin.buffer
        return open(self.path, "rb")

    def __iter__(self) -> Iterator[bytes]:
        self._fh = self._open()
        for line in self._fh:
            line = line.strip()
            if line:
                yield line

    def close(self) -> None:
        if self._fh is not None and not self._is_stdin():
            self._fh.close()
        self._fh = None
