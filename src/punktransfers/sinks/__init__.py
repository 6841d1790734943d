"""Sinks for decoded transfers.

This package provides:
- LoggingSink: one log line per transfer
- JsonlSink: JSON lines file / stdout
- ParquetSink: sorted Parquet shards
- MemorySink: in-process list
"""

from punktransfers.sinks.parquet import ParquetSink
from punktransfers.sinks.simple import JsonlSink, LoggingSink, MemorySink

__all__ = [
    "JsonlSink",
    "LoggingSink",
    "MemorySink",
    "ParquetSink",
]
