import pytest

from conftest import ALICE, BOB, topic_for
from punktransfers.core.constants import PUNK_ASSIGN_T0, ZERO_ADDRESS
from punktransfers.core.errors import (
    DecodeError,
    MalformedDataError,
    MalformedTopicError,
    UnknownEventError,
    ValueOutOfRangeError,
)
from punktransfers.decoding.decoder import DecodeResult


def test_decode_assign_example(decoder, make_log) -> None:
    to_addr = "0xaaaa" + "0" * 34 + "0b"
    log = make_log(
        topic0=PUNK_ASSIGN_T0,
        topic1="0x000000000000000000000000" + to_addr[2:],
        topic2=None,
        data="0x000000000000000000000000000000000000000000000000000000000003e8",
    )

    result = decoder.decode(log)

    assert result.ok
    rec = result.unwrap()
    assert rec.from_address == ZERO_ADDRESS
    assert rec.to_address == to_addr
    assert rec.asset_index == 1000
    assert rec.event == "assign"
    assert rec.is_mint


def test_decode_transfer_example(decoder, make_log) -> None:
    rec = decoder.decode(make_log()).unwrap()

    assert rec.from_address == ALICE
    assert rec.to_address == BOB
    assert rec.asset_index == 42
    assert rec.event == "transfer"
    assert not rec.is_mint


def test_coordinates_are_copied(decoder, make_log) -> None:
    log = make_log(block_number=15_000_000, transaction_index=99, log_index=250, chain_id=1)
    rec = decoder.decode_or_raise(log)

    assert (rec.block_number, rec.transaction_index, rec.log_index) == (15_000_000, 99, 250)
    assert rec.transaction_hash == log.transaction_hash
    assert rec.chain_id == 1


def test_decode_is_pure(decoder, make_log) -> None:
    log = make_log()
    assert decoder.decode(log) == decoder.decode(log)
    bad = make_log(data="0xzz")
    assert decoder.decode(bad) == decoder.decode(bad)


def test_addresses_are_lowercased(decoder, make_log) -> None:
    mixed = "0x" + "0" * 24 + "ABCDEF" + "0" * 34
    rec = decoder.decode_or_raise(make_log(topic1=mixed))
    assert rec.from_address == "0xabcdef" + "0" * 34


def test_assign_ignores_topic2(decoder, make_log) -> None:
    rec = decoder.decode_or_raise(make_log(topic0=PUNK_ASSIGN_T0, topic2="0xnonsense"))
    assert rec.to_address == ALICE


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"topic1": None}, "topic1"),
        ({"topic2": None}, "topic2"),
        ({"topic1": "0x" + "0" * 62}, "topic1"),
        ({"topic2": "0x1234"}, "topic2"),
        ({"topic1": "0x" + "z" * 64}, "topic1"),
        ({"topic1": "0x" + "0" * 66}, "topic1"),
        ({"topic2": "0x" + "0" * 24 + "22" * 20 + "00"}, "topic2"),
        ({"topic0": PUNK_ASSIGN_T0, "topic1": None}, "topic1"),
    ],
)
def test_malformed_topics(decoder, make_log, overrides, field: str) -> None:
    result = decoder.decode(make_log(**overrides))

    assert not result.ok
    assert result.record is None
    assert isinstance(result.error, MalformedTopicError)
    assert result.error.kind == "malformed_topic"
    assert result.error.field == field


@pytest.mark.parametrize("data", [None, "0x", "", "0xzz", "0x12 34", "0x-1", "0x1_0"])
def test_malformed_data(decoder, make_log, data) -> None:
    result = decoder.decode(make_log(data=data))

    assert isinstance(result.error, MalformedDataError)
    assert result.error.kind == "malformed_data"
    assert result.error.field == "data"


def test_malformed_hex_message(decoder, make_log) -> None:
    result = decoder.decode(make_log(data="0xzz"))
    assert result.error is not None
    assert result.error.reason == "malformed hex"


def test_out_of_range(decoder, make_log) -> None:
    result = decoder.decode(make_log(data="0x" + "f" * 64))

    assert isinstance(result.error, ValueOutOfRangeError)
    assert result.error.kind == "out_of_range"


def test_max_asset_index_boundary(decoder, make_log, config) -> None:
    at_max = hex(config.max_asset_index)
    assert decoder.decode(make_log(data=at_max)).unwrap().asset_index == config.max_asset_index
    assert not decoder.decode(make_log(data=hex(config.max_asset_index + 1))).ok


def test_data_without_prefix(decoder, make_log) -> None:
    assert decoder.decode_or_raise(make_log(data="2a")).asset_index == 42


def test_unknown_event(decoder, make_log) -> None:
    result = decoder.decode(make_log(topic0="0x" + "1" * 64))
    assert isinstance(result.error, UnknownEventError)


def test_decode_or_raise(decoder, make_log) -> None:
    with pytest.raises(MalformedDataError) as exc:
        decoder.decode_or_raise(make_log(data="0xzz"))
    assert isinstance(exc.value, DecodeError)
    assert str(exc.value) == "data: malformed hex"


def test_decode_result_requires_exactly_one() -> None:
    with pytest.raises(ValueError):
        DecodeResult()
    with pytest.raises(ValueError):
        DecodeResult(record=object(), error=MalformedDataError("data", "x"))  # type: ignore[arg-type]


def test_topic_helper() -> None:
    assert topic_for(ALICE) == "0x" + "0" * 24 + "11" * 20


@pytest.mark.parametrize("prefix", ["0x", "0X", ""])
def test_topic_prefix_variants(decoder, make_log, prefix: str) -> None:
    word = "0" * 24 + "22" * 20
    rec = decoder.decode_or_raise(make_log(topic2=prefix + word))
    assert rec.to_address == BOB
