"""Core data models.

This module defines:
- `LogRecord`: one raw log entry as emitted on the stream (JSON, snake_case).
- `TransferRecord`: the normalized ownership-transfer row handed to sinks.

Design notes
------------
- Both are immutable; nothing here keeps state across records.
- Chain coordinates (block_number, transaction_index, log_index) are copied
  verbatim so consumers can rebuild chain order.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from punktransfers.core.errors import RecordParseError

EventVariant = Literal["transfer", "assign"]

# JSON integers only: no bools, floats or numeric strings
ChainInt = Annotated[int, Field(strict=True, ge=0)]


# === Stream record ===


class LogRecord(BaseModel):
    """Raw log as published by the chain emitter."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    block_number: ChainInt
    transaction_index: ChainInt
    log_index: ChainInt
    transaction_hash: str
    block_hash: str | None = None
    address: str | None = None  # 0x + 40 hex
    topic0: str | None = None  # event signature hash
    topic1: str | None = None
    topic2: str | None = None
    topic3: str | None = None
    data: str | None = None  # "0x..."
    chain_id: ChainInt = 1

    @classmethod
    def from_json(cls, raw: str | bytes) -> LogRecord:
        """Parse one stream message; raise `RecordParseError` on any failure."""
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise RecordParseError(f"invalid log record: {e.error_count()} error(s): {e.errors()[0]['msg']}", raw) from e

    @property
    def topics(self) -> tuple[str, ...]:
        """Non-null topics in slot order."""
        return tuple(t for t in (self.topic0, self.topic1, self.topic2, self.topic3) if t is not None)


# === Decoded record ===


@dataclass(slots=True, frozen=True)
class TransferRecord:
    """One ownership change of an asset, ready for storage or alerting."""

    asset_index: int
    from_address: str  # lowercased 0x...
    to_address: str  # lowercased 0x...
    block_number: int
    transaction_index: int
    log_index: int
    transaction_hash: str
    event: EventVariant = "transfer"
    chain_id: int = 1

    @property
    def is_mint(self) -> bool:
        return int(self.from_address, 16) == 0

    @property
    def sort_key(self) -> tuple[int, int, int]:
        return (self.block_number, self.transaction_index, self.log_index)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_json_line(self) -> str:
        """Serialize as a compact JSON line."""
        return json.dumps(asdict(self), separators=(",", ":")) + "\n"

    def __str__(self) -> str:
        return (
            f"TransferRecord[asset_index={self.asset_index}, from={self.from_address}, to={self.to_address}, "
            f"block_number={self.block_number}, tx_hash={self.transaction_hash}, "
            f"log_index={self.log_index}, tx_index={self.transaction_index}]"
        )
