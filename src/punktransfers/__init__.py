from __future__ import annotations

from .core.config import IndexerConfig, StreamConfig
from .core.constants import PUNK_ASSIGN_T0, PUNK_TRANSFER_T0, PUNKS_CONTRACT_ADDRESS, ZERO_ADDRESS
from .core.errors import DecodeError, MalformedDataError, MalformedTopicError, RecordParseError, ValueOutOfRangeError
from .core.models import LogRecord, TransferRecord
from .decoding.decoder import DecodeResult, TransferDecoder
from .decoding.matcher import EventMatcher
from .pipeline.processor import ProcessStats, TransferProcessor

__all__ = [
    "IndexerConfig",
    "StreamConfig",
    "PUNK_ASSIGN_T0",
    "PUNK_TRANSFER_T0",
    "PUNKS_CONTRACT_ADDRESS",
    "ZERO_ADDRESS",
    "DecodeError",
    "MalformedDataError",
    "MalformedTopicError",
    "RecordParseError",
    "ValueOutOfRangeError",
    "LogRecord",
    "TransferRecord",
    "DecodeResult",
    "TransferDecoder",
    "EventMatcher",
    "ProcessStats",
    "TransferProcessor",
]
