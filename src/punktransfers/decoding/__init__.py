"""Event matching and transfer decoding.

This package provides:
- EventMatcher: admission gate on contract address, topic0 and block
- TransferDecoder / DecodeResult: typed decoding of the two event shapes
- Signature helpers computing topic0 from canonical event signatures
"""

from punktransfers.decoding.decoder import DecodeResult, TransferDecoder
from punktransfers.decoding.matcher import EventMatcher
from punktransfers.decoding.signatures import config_from_signatures, event_topic0

__all__ = [
    "DecodeResult",
    "TransferDecoder",
    "EventMatcher",
    "config_from_signatures",
    "event_topic0",
]
