from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Literal

from punktransfers.core.errors import DecodeError, RecordParseError
from punktransfers.core.interfaces import ILogSource, ITransferSink
from punktransfers.core.models import LogRecord, TransferRecord
from punktransfers.decoding.decoder import TransferDecoder
from punktransfers.decoding.matcher import EventMatcher

OnDecodeError = Literal["skip", "halt"]


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------


@dataclass(kw_only=True)
class ProcessStats:
    """
    Counters for one processor run.

    - consumed: raw messages pulled from the source
    - malformed: messages that could not be parsed into a LogRecord
    - skipped: parsed records rejected by the matcher
    - decoded: records written to the sink
    - failed: matched records that failed to decode
    """

    consumed: int = 0
    malformed: int = 0
    skipped: int = 0
    decoded: int = 0
    failed: int = 0
    errors_by_kind: dict[str, int] = field(default_factory=lambda: defaultdict(int))

    def as_dict(self) -> dict[str, int]:
        out = {
            "consumed": self.consumed,
            "malformed": self.malformed,
            "skipped": self.skipped,
            "decoded": self.decoded,
            "failed": self.failed,
        }
        for kind, n in sorted(self.errors_by_kind.items()):
            out[f"failed.{kind}"] = n
        return out


# ---------------------------------------------------------------------------
# Processor
# ---------------------------------------------------------------------------


class TransferProcessor:
    """
    Glue between a raw message source and a transfer sink.

    Each message flows on its own: parse → match → decode → write. No state
    is carried between messages other than the counters in `stats`.

    Decode failures follow `on_decode_error`:
    - "skip": log a warning, count it, continue
    - "halt": count it and re-raise the typed `DecodeError`
    """

    def __init__(
        self,
        matcher: EventMatcher,
        decoder: TransferDecoder,
        sink: ITransferSink,
        *,
        on_decode_error: OnDecodeError = "skip",
        logger: logging.Logger | None = None,
    ) -> None:
        if on_decode_error not in ("skip", "halt"):
            raise ValueError(f"on_decode_error must be 'skip' or 'halt', got {on_decode_error!r}")
        self.matcher = matcher
        self.decoder = decoder
        self.sink = sink
        self.on_decode_error = on_decode_error
        self._log = logger or logging.getLogger("punktransfers.pipeline")
        self.stats = ProcessStats()

    def process_record(self, log: LogRecord) -> TransferRecord | None:
        """Match and decode one parsed record; return what was written, if anything."""
        if not self.matcher.matches(log):
            self.stats.skipped += 1
            return None

        result = self.decoder.decode(log)
        if result.error is not None:
            self._on_error(log, result.error)
            return None

        record = result.unwrap()
        self.sink.write(record)
        self.stats.decoded += 1
        return record

    def process_message(self, raw: str | bytes) -> TransferRecord | None:
        """Parse one raw stream message and hand it to `process_record`."""
        self.stats.consumed += 1
        try:
            log = LogRecord.from_json(raw)
        except RecordParseError as e:
            self.stats.malformed += 1
            self._log.warning("dropping malformed message: %s", e)
            return None
        return self.process_record(log)

    def _on_error(self, log: LogRecord, error: DecodeError) -> None:
        self.stats.failed += 1
        self.stats.errors_by_kind[error.kind] += 1
        self._log.warning(
            "decode error (%s) on %s field=%s block=%d tx=%s log_index=%d: %s",
            error.kind,
            log.topic0,
            error.field,
            log.block_number,
            log.transaction_hash,
            log.log_index,
            error.reason,
        )
        if self.on_decode_error == "halt":
            raise error

    def run(self, source: ILogSource, *, limit: int | None = None) -> ProcessStats:
        """Drain `source` (or `limit` messages), then close source and sink."""
        self._log.info("processor started (on_decode_error=%s)", self.on_decode_error)
        try:
            for raw in source:
                self.process_message(raw)
                if limit is not None and self.stats.consumed >= limit:
                    break
        finally:
            source.close()
            self.sink.close()
        self._log.info("processor finished: %s", self.stats.as_dict())
        return self.stats
