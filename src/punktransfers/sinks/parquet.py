from __future__ import annotations

import glob
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from punktransfers.core.interfaces import ITransferSink
from punktransfers.core.models import TransferRecord

# === Schema (Arrow) ===

TRANSFER_SCHEMA = pa.schema(
    [
        ("block_number", pa.uint64()),
        ("transaction_index", pa.uint64()),
        ("log_index", pa.uint64()),
        ("transaction_hash", pa.string()),
        ("event", pa.string()),
        ("asset_index", pa.uint64()),
        ("from_address", pa.string()),
        ("to_address", pa.string()),
        ("chain_id", pa.uint64()),
    ]
)


@dataclass(slots=True)
class TransferColumns:
    """Append-only columnar buffer of transfer rows."""

    block_number: list[int] = field(default_factory=list)
    transaction_index: list[int] = field(default_factory=list)
    log_index: list[int] = field(default_factory=list)
    transaction_hash: list[str] = field(default_factory=list)
    event: list[str] = field(default_factory=list)
    asset_index: list[int] = field(default_factory=list)
    from_address: list[str] = field(default_factory=list)
    to_address: list[str] = field(default_factory=list)
    chain_id: list[int] = field(default_factory=list)

    def size(self) -> int:
        return len(self.block_number)

    def append(self, r: TransferRecord) -> None:
        self.block_number.append(r.block_number)
        self.transaction_index.append(r.transaction_index)
        self.log_index.append(r.log_index)
        self.transaction_hash.append(r.transaction_hash)
        self.event.append(r.event)
        self.asset_index.append(r.asset_index)
        self.from_address.append(r.from_address)
        self.to_address.append(r.to_address)
        self.chain_id.append(r.chain_id)

    def to_arrow_table(self) -> pa.Table:
        """Convert to an Arrow table sorted in chain order."""
        arrays = {name: getattr(self, name) for name in TRANSFER_SCHEMA.names}
        return pa.Table.from_pydict(arrays, schema=TRANSFER_SCHEMA).sort_by(
            [("block_number", "ascending"), ("transaction_index", "ascending"), ("log_index", "ascending")]
        )


class ParquetSink(ITransferSink):
    """
    Parquet shard writer for decoded transfers.

    - Rows are buffered and flushed to `shard_{idx:05d}.parquet` every
      `rows_per_shard` rows, and once more on `close()`.
    - Shard indices continue after any shard already present in `out_dir`.
    - Each shard is written atomically (tmp file + replace).
    """

    def __init__(
        self,
        out_dir: str | Path,
        *,
        rows_per_shard: int = 250_000,
        codec: str = "zstd",
        logger: logging.Logger | None = None,
    ) -> None:
        if rows_per_shard <= 0:
            raise ValueError("rows_per_shard must be > 0")
        self.out_dir = Path(out_dir)
        self.out_dir.mkdir(parents=True, exist_ok=True)
        self.rows_per_shard = rows_per_shard
        self.codec = codec
        self._log = logger or logging.getLogger("punktransfers.sinks.parquet")
        self.buf = TransferColumns()
        self.written: list[Path] = []
        self.shard_idx = self._next_index()

    def _next_index(self) -> int:
        existing = sorted(glob.glob((self.out_dir / "shard_*.parquet").as_posix()))
        if not existing:
            return 0
        last = os.path.basename(existing[-1])
        return int(last.split("_")[1].split(".")[0]) + 1

    def shard_path(self, idx: int) -> Path:
        return self.out_dir / f"shard_{idx:05d}.parquet"

    def _flush(self) -> Path | None:
        if self.buf.size() == 0:
            return None
        table = self.buf.to_arrow_table()
        out_path = self.shard_path(self.shard_idx)
        tmp = out_path.with_suffix(".tmp")
        pq.write_table(table, tmp, compression=self.codec)
        os.replace(tmp, out_path)
        self._log.info("wrote %s (rows=%d)", out_path, len(table))
        self.written.append(out_path)
        self.shard_idx += 1
        self.buf = TransferColumns()
        return out_path

    def write(self, record: TransferRecord) -> None:
        self.buf.append(record)
        if self.buf.size() >= self.rows_per_shard:
            self._flush()

    def close(self) -> Path | None:
        return self._flush()
