"""Error taxonomy.

- `RecordParseError`: a raw message could not be turned into a `LogRecord`.
- `DecodeError` and subclasses: a record passed the matcher but does not
  follow the expected encoding. Each carries the failing `field`, a human
  `reason` and a machine-friendly `kind`.
- `ConfigError`: invalid indexer / stream configuration.
"""

from __future__ import annotations

from typing import Literal

DecodeErrorKind = Literal["malformed_topic", "malformed_data", "out_of_range", "unknown_event"]


class PunkTransfersError(Exception):
    """Root of all library errors."""


class ConfigError(PunkTransfersError, ValueError):
    """Raised when a configuration value has the wrong shape."""


class RecordParseError(PunkTransfersError):
    """Raised when a raw message cannot be deserialized into a LogRecord."""

    def __init__(self, reason: str, raw: str | bytes | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.raw = raw


class DecodeError(PunkTransfersError):
    """A matched record failed to decode into a TransferRecord."""

    kind: DecodeErrorKind = "malformed_data"

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecodeError):
            return NotImplemented
        return (type(self), self.field, self.reason) == (type(other), other.field, other.reason)

    def __hash__(self) -> int:
        return hash((type(self), self.field, self.reason))


class MalformedTopicError(DecodeError):
    kind: DecodeErrorKind = "malformed_topic"


class MalformedDataError(DecodeError):
    kind: DecodeErrorKind = "malformed_data"


class ValueOutOfRangeError(DecodeError):
    kind: DecodeErrorKind = "out_of_range"


class UnknownEventError(DecodeError):
    kind: DecodeErrorKind = "unknown_event"
