"""Core data models, configurations, errors and constants.

This package provides:
- Data models (LogRecord, TransferRecord)
- Configuration classes (IndexerConfig, StreamConfig)
- Error taxonomy (RecordParseError, DecodeError and subtypes)
- Source / sink interfaces
"""

from punktransfers.core.config import IndexerConfig, StreamConfig
from punktransfers.core.errors import (
    ConfigError,
    DecodeError,
    MalformedDataError,
    MalformedTopicError,
    PunkTransfersError,
    RecordParseError,
    UnknownEventError,
    ValueOutOfRangeError,
)
from punktransfers.core.interfaces import ILogSource, ITransferSink
from punktransfers.core.models import LogRecord, TransferRecord

__all__ = [
    "IndexerConfig",
    "StreamConfig",
    "ConfigError",
    "DecodeError",
    "MalformedDataError",
    "MalformedTopicError",
    "PunkTransfersError",
    "RecordParseError",
    "UnknownEventError",
    "ValueOutOfRangeError",
    "ILogSource",
    "ITransferSink",
    "LogRecord",
    "TransferRecord",
]
