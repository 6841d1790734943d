import json
import logging
from unittest.mock import MagicMock

import pytest

from punktransfers.core.constants import PUNK_ASSIGN_T0
from punktransfers.core.errors import MalformedDataError
from punktransfers.pipeline.processor import TransferProcessor
from punktransfers.sinks.simple import MemorySink
from punktransfers.sources.jsonl import JsonlLogSource


class ListSource:
    def __init__(self, messages):
        self.messages = messages
        self.closed = False

    def __iter__(self):
        return iter(self.messages)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def processor(matcher, decoder, sink) -> TransferProcessor:
    return TransferProcessor(matcher, decoder, sink)


def test_process_message_writes_transfer(processor, sink, raw_log) -> None:
    rec = processor.process_message(json.dumps(raw_log()))

    assert rec is not None
    assert sink.records == [rec]
    assert processor.stats.consumed == 1
    assert processor.stats.decoded == 1


def test_run_counts_every_outcome(processor, sink, raw_log) -> None:
    messages = [
        json.dumps(raw_log()),
        json.dumps(raw_log(topic0=PUNK_ASSIGN_T0, topic2=None, log_index=8)),
        json.dumps(raw_log(block_number=1)),  # before deployment
        json.dumps(raw_log(address="0x" + "99" * 20)),  # other contract
        json.dumps(raw_log(data="0xzz")),  # malformed data
        json.dumps(raw_log(topic2="0x12")),  # malformed topic
        "{not json",
    ]
    source = ListSource(messages)

    stats = processor.run(source)

    assert stats.consumed == 7
    assert stats.decoded == 2
    assert stats.skipped == 2
    assert stats.failed == 2
    assert stats.malformed == 1
    assert dict(stats.errors_by_kind) == {"malformed_data": 1, "malformed_topic": 1}
    assert [r.event for r in sink.records] == ["transfer", "assign"]
    assert source.closed
    assert sink.closed


def test_run_respects_limit(processor, sink, raw_log) -> None:
    stats = processor.run(ListSource([json.dumps(raw_log(log_index=i)) for i in range(5)]), limit=2)
    assert stats.consumed == 2
    assert len(sink.records) == 2


def test_halt_on_decode_error(matcher, decoder, sink, raw_log) -> None:
    processor = TransferProcessor(matcher, decoder, sink, on_decode_error="halt")
    source = ListSource([json.dumps(raw_log(data="0xzz")), json.dumps(raw_log())])

    with pytest.raises(MalformedDataError):
        processor.run(source)

    assert processor.stats.failed == 1
    assert sink.records == []
    assert source.closed and sink.closed


def test_decode_errors_are_logged(matcher, decoder, sink, raw_log, caplog) -> None:
    processor = TransferProcessor(matcher, decoder, sink, logger=logging.getLogger("test.pipeline"))
    with caplog.at_level(logging.WARNING, logger="test.pipeline"):
        processor.process_message(json.dumps(raw_log(data="0xzz")))
        processor.process_message("[]")
    assert "malformed_data" in caplog.text
    assert "malformed message" in caplog.text


def test_non_matching_records_never_reach_decoder(matcher, sink, raw_log) -> None:
    decoder = MagicMock()
    processor = TransferProcessor(matcher, decoder, sink)

    processor.process_message(json.dumps(raw_log(block_number=0)))

    decoder.decode.assert_not_called()
    assert processor.stats.skipped == 1


def test_invalid_policy(matcher, decoder, sink) -> None:
    with pytest.raises(ValueError):
        TransferProcessor(matcher, decoder, sink, on_decode_error="retry")  # type: ignore[arg-type]


def test_stats_as_dict(processor, raw_log) -> None:
    processor.process_message(json.dumps(raw_log(data="0x" + "f" * 64)))
    d = processor.stats.as_dict()
    assert d["failed"] == 1
    assert d["failed.out_of_range"] == 1


def test_undecodable_bytes_in_jsonl_file_are_counted(processor, sink, raw_log, tmp_path) -> None:
    src = tmp_path / "logs.jsonl"
    src.write_bytes(
        json.dumps(raw_log()).encode() + b"\n"
        + b"\xff\xfe garbage\n"
        + json.dumps(raw_log(log_index=8)).encode() + b"\n"
    )

    stats = processor.run(JsonlLogSource(src))

    assert stats.consumed == 3
    assert stats.malformed == 1
    assert stats.decoded == 2
    assert [r.log_index for r in sink.records] == [7, 8]
