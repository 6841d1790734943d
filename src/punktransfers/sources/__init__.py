"""Raw log message sources.

This package provides:
- JsonlLogSource: NDJSON file / stdin reader
- KafkaLogSource: confluent-kafka topic consumer
"""

from punktransfers.sources.jsonl import JsonlLogSource
from punktransfers.sources.kafka import KafkaLogSource

__all__ = [
    "JsonlLogSource",
    "KafkaLogSource",
]
