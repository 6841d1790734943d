"""Admission gate: select the logs emitted by the configured contract.

A log matches when it was emitted after the deployment block, by the
configured contract address, with one of the two known event signatures.
Topic shape is not checked here; the decoder owns that.
"""

from __future__ import annotations

import logging

from punktransfers.core.config import IndexerConfig
from punktransfers.core.models import EventVariant, LogRecord


class EventMatcher:
    """Pure predicate over `LogRecord`. Never raises."""

    def __init__(self, config: IndexerConfig, *, logger: logging.Logger | None = None) -> None:
        self.config = config
        self._log = logger or logging.getLogger("punktransfers.matcher")
        self._address = config.normalize_address(config.contract_address)
        self._variants: dict[str, EventVariant] = {
            config.transfer_topic0.lower(): "transfer",
            config.assign_topic0.lower(): "assign",
        }

    def variant(self, log: LogRecord) -> EventVariant | None:
        """Which event shape `topic0` announces, or None if neither."""
        if log.topic0 is None:
            return None
        return self._variants.get(log.topic0.lower())

    def _is_target_address(self, log: LogRecord) -> bool:
        return log.address is not None and self.config.normalize_address(log.address) == self._address

    def matches(self, log: LogRecord) -> bool:
        if not self._is_target_address(log):
            return False
        if self.variant(log) is None:
            return False
        if log.block_number <= self.config.deployment_block:
            self._log.debug(
                "rejecting log before deployment block: block=%d tx=%s log_index=%d",
                log.block_number,
                log.transaction_hash,
                log.log_index,
            )
            return False
        return True

    __call__ = matches
