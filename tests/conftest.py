import json
from typing import Any, Callable

import pytest

from punktransfers.core.config import IndexerConfig
from punktransfers.core.constants import PUNK_ASSIGN_T0, PUNK_TRANSFER_T0, PUNKS_CONTRACT_ADDRESS
from punktransfers.core.models import LogRecord
from punktransfers.decoding.decoder import TransferDecoder
from punktransfers.decoding.matcher import EventMatcher


def topic_for(address: str) -> str:
    """Left-pad a 20-byte address into a 32-byte topic word."""
    return "0x" + "0" * 24 + address[2:]


ALICE = "0x" + "11" * 20
BOB = "0x" + "22" * 20


@pytest.fixture
def config() -> IndexerConfig:
    return IndexerConfig.punks()


@pytest.fixture
def matcher(config: IndexerConfig) -> EventMatcher:
    return EventMatcher(config)


@pytest.fixture
def decoder(config: IndexerConfig) -> TransferDecoder:
    return TransferDecoder(config)


@pytest.fixture
def raw_log() -> Callable[..., dict[str, Any]]:
    """Build a raw transfer log dict; keyword arguments override fields."""

    def _make(**overrides: Any) -> dict[str, Any]:
        raw: dict[str, Any] = {
            "block_number": 4_000_000,
            "transaction_index": 3,
            "log_index": 7,
            "transaction_hash": "0x" + "ab" * 32,
            "address": PUNKS_CONTRACT_ADDRESS,
            "topic0": PUNK_TRANSFER_T0,
            "topic1": topic_for(ALICE),
            "topic2": topic_for(BOB),
            "topic3": None,
            "data": "0x2a",
            "chain_id": 1,
            "block_hash": "0x" + "cd" * 32,
        }
        raw.update(overrides)
        return raw

    return _make


@pytest.fixture
def make_log(raw_log: Callable[..., dict[str, Any]]) -> Callable[..., LogRecord]:
    def _make(**overrides: Any) -> LogRecord:
        return LogRecord.from_json(json.dumps(raw_log(**overrides)))

    return _make


@pytest.fixture
def assign_log(make_log: Callable[..., LogRecord]) -> LogRecord:
    return make_log(topic0=PUNK_ASSIGN_T0, topic2=None)
