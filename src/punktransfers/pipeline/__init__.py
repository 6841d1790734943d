"""Source → matcher → decoder → sink glue."""

from punktransfers.pipeline.processor import ProcessStats, TransferProcessor

__all__ = [
    "ProcessStats",
    "TransferProcessor",
]
