"""Transfer decoder: matched `LogRecord` → `TransferRecord`.

Two event shapes are supported:

- assign   `Assign(address indexed to, uint256 punkIndex)`
           from = zero address, to = topic1
- transfer `PunkTransfer(address indexed from, address indexed to, uint256 punkIndex)`
           from = topic1, to = topic2

In both cases the asset index is the whole `data` payload read as an
unsigned big-endian integer. Malformed fields never raise out of `decode`;
they come back as a `DecodeResult` carrying a typed `DecodeError`, and the
caller decides whether to skip or halt.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from punktransfers.core.config import IndexerConfig
from punktransfers.core.errors import DecodeError, UnknownEventError
from punktransfers.core.models import LogRecord, TransferRecord
from punktransfers.decoding.utils import address_from_topic, uint_from_data

# ---------- decode result ----------


@dataclass(slots=True, frozen=True)
class DecodeResult:
    """Either a decoded record or the error explaining why there is none."""

    record: TransferRecord | None = None
    error: DecodeError | None = None

    def __post_init__(self) -> None:
        if (self.record is None) == (self.error is None):
            raise ValueError("DecodeResult needs exactly one of record / error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> TransferRecord:
        """Return the record or raise the decode error."""
        if self.error is not None:
            raise self.error
        assert self.record is not None
        return self.record


# ---------- decoder ----------


class TransferDecoder:
    """Stateless decoder bound to one `IndexerConfig`."""

    def __init__(self, config: IndexerConfig, *, logger: logging.Logger | None = None) -> None:
        self.config = config
        self._log = logger or logging.getLogger("punktransfers.decoder")
        self._transfer_t0 = config.transfer_topic0.lower()
        self._assign_t0 = config.assign_topic0.lower()

    def _addresses(self, log: LogRecord) -> tuple[str, str]:
        topic0 = (log.topic0 or "").lower()
        if topic0 == self._assign_t0:
            return self.config.zero_address, address_from_topic(log.topic1, "topic1")
        if topic0 == self._transfer_t0:
            return address_from_topic(log.topic1, "topic1"), address_from_topic(log.topic2, "topic2")
        raise UnknownEventError("topic0", f"not a known event signature: {log.topic0!r}")

    def _decode(self, log: LogRecord) -> TransferRecord:
        from_addr, to_addr = self._addresses(log)
        asset_index = uint_from_data(log.data, "data", max_value=self.config.max_asset_index)
        return TransferRecord(
            asset_index=asset_index,
            from_address=from_addr,
            to_address=to_addr,
            block_number=log.block_number,
            transaction_index=log.transaction_index,
            log_index=log.log_index,
            transaction_hash=log.transaction_hash,
            event="assign" if (log.topic0 or "").lower() == self._assign_t0 else "transfer",
            chain_id=log.chain_id,
        )

    def decode(self, log: LogRecord) -> DecodeResult:
        """Decode one matched log; malformed input yields an error result."""
        try:
            record = self._decode(log)
        except DecodeError as e:
            self._log.debug(
                "decode failed (%s) block=%d tx=%s log_index=%d: %s",
                e.kind,
                log.block_number,
                log.transaction_hash,
                log.log_index,
                e,
            )
            return DecodeResult(error=e)
        return DecodeResult(record=record)

    def decode_or_raise(self, log: LogRecord) -> TransferRecord:
        return self.decode(log).unwrap()
