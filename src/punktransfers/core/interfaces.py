from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from punktransfers.core.models import TransferRecord


# ---------------------------------------------------------------------------
# ILogSource
# ---------------------------------------------------------------------------

@runtime_checkable
class ILogSource(Protocol):
    """
    Abstract provider of raw log messages.

    Domain expectations:
    - It yields one JSON text message per blockchain log.
    - Connection handling, partition assignment and offset management are
      the source's own business.
    """

    def __iter__(self) -> Iterator[str | bytes]:
        """
        Yield raw messages until the source is exhausted.

        Implementations:
        - Kafka consumer
        - NDJSON file / stdin reader
        - In-memory list for testing
        """
        ...

    def close(self) -> None:
        """Release any connection or file handle."""
        ...


# ---------------------------------------------------------------------------
# ITransferSink
# ---------------------------------------------------------------------------

@runtime_checkable
class ITransferSink(Protocol):
    """
    Abstract sink for decoded transfers.

    Domain expectations:
    - `write` accepts one record at a time.
    - Its failure semantics are the sink's own concern; the processor does
      not retry.
    """

    def write(self, record: TransferRecord) -> None:
        """
        Accept one decoded record.

        Implementations:
        - Log stream (LoggingSink)
        - JSON lines file (JsonlSink)
        - Parquet file (ParquetSink)
        """
        ...

    def close(self) -> None:
        """Flush and finalize anything buffered."""
        ...
