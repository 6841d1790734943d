"""Line-oriented and in-memory sinks."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TextIO

from punktransfers.core.interfaces import ITransferSink
from punktransfers.core.models import TransferRecord


class LoggingSink(ITransferSink):
    """Emit every record to a log stream (e.g. a container log collector)."""

    def __init__(self, logger: logging.Logger | None = None, *, level: int = logging.INFO) -> None:
        self._log = logger or logging.getLogger("punktransfers.sinks.log")
        self.level = level

    def write(self, record: TransferRecord) -> None:
        self._log.log(self.level, "Received value: %s", record)

    def close(self) -> None:
        pass


class JsonlSink(ITransferSink):
    """Append records as compact JSON lines ("-" writes to stdout)."""

    def __init__(self, path: str | Path, *, fsync: bool = False) -> None:
        self.path = path
        self.fsync = fsync
        if str(path) == "-":
            self._fh: TextIO = sys.stdout
        else:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            self._fh = open(path, "a", buffering=1, encoding="utf-8")

    def write(self, record: TransferRecord) -> None:
        self._fh.write(record.to_json_line())
        self._fh.flush()
        if self.fsync and self._fh is not sys.stdout:
            os.fsync(self._fh.fileno())

    def close(self) -> None:
        if self._fh is not sys.stdout and not self._fh.closed:
            self._fh.close()


class MemorySink(ITransferSink):
    """Keep records in a list."""

    def __init__(self) -> None:
        self.records: list[TransferRecord] = []
        self.closed = False

    def write(self, record: TransferRecord) -> None:
        self.records.append(record)

    def close(self) -> None:
        self.closed = True
