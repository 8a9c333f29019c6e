from __future__ import annotations

import struct

import pytest

from perp_requests.errors import DecodingError, EncodingError
from perp_requests.schema import (
    AddBudget,
    ChangeK,
    ClosePosition,
    CollectGarbage,
    CreateMarket,
    IncreasePosition,
    OpenPosition,
    PositionSide,
    Rebalance,
    TransferPosition,
    decode_operation,
    encode_operation,
)
from perp_requests.schema.wire import AsciiString


FP32 = 1 << 32


def test_collect_garbage_example_payload() -> None:
    data = encode_operation(CollectGarbage(instance_index=0, max_iterations=5))
    assert data == bytes([8, 0x00, 5, 0, 0, 0, 0, 0, 0, 0])


def test_create_market_layout() -> None:
    op = CreateMarket(
        signer_nonce=254,
        symbol="BTC/USDC",
        initial_quote_amount=1_000_000,
        coin_decimals=6,
        quote_decimals=6,
    )
    expected = (
        bytes([0, 254])
        + struct.pack("<I", 8)
        + b"BTC/USDC"
        + struct.pack("<QBB", 1_000_000, 6, 6)
    )
    assert encode_operation(op) == expected


def test_open_position_layout() -> None:
    op = OpenPosition(
        side=PositionSide.LONG,
        collateral=10_000_000,
        instance_index=2,
        leverage=15 * FP32,
        predicted_entry_price=40_000 * FP32,
        max_slippage=FP32 // 100,
    )
    expected = struct.pack("<BBQBQQQ", 3, 1, 10_000_000, 2, 15 * FP32, 40_000 * FP32, FP32 // 100)
    assert encode_operation(op) == expected


def test_increase_position_layout_follows_field_order() -> None:
    op = IncreasePosition(
        add_collateral=7,
        instance_index=1,
        leverage=3,
        position_index=513,
        predicted_entry_price=11,
        max_slippage=13,
    )
    assert encode_operation(op) == struct.pack("<BQBQHQQ", 6, 7, 1, 3, 513, 11, 13)


def test_close_position_layout() -> None:
    op = ClosePosition(
        position_index=65535,
        closing_collateral=1,
        closing_base_amount=2,
        predicted_entry_price=3,
        max_slippage=4,
    )
    assert encode_operation(op) == struct.pack("<BHQQQQ", 7, 65535, 1, 2, 3, 4)


def test_small_payloads() -> None:
    assert encode_operation(AddBudget(amount=2**64 - 1)) == b"\x04" + b"\xff" * 8
    assert encode_operation(ChangeK(factor=1)) == struct.pack("<BQ", 12, 1)
    assert encode_operation(Rebalance(collateral=9, instance_index=3)) == struct.pack("<BQB", 15, 9, 3)
    assert encode_operation(TransferPosition(position_index=258)) == bytes([17, 2, 1])


def test_encoding_is_deterministic() -> None:
    op = OpenPosition(PositionSide.SHORT, 1, 0, 2, 3, 4)
    assert encode_operation(op) == encode_operation(op)


def test_side_accepts_int_value() -> None:
    a = encode_operation(OpenPosition(1, 1, 0, 2, 3, 4))
    b = encode_operation(OpenPosition(PositionSide.LONG, 1, 0, 2, 3, 4))
    assert a == b


@pytest.mark.parametrize(
    "op,field",
    [
        (AddBudget(amount=-1), "AddBudget.amount"),
        (AddBudget(amount=2**64), "AddBudget.amount"),
        (AddBudget(amount=True), "AddBudget.amount"),
        (AddBudget(amount=1.5), "AddBudget.amount"),
        (CollectGarbage(instance_index=256, max_iterations=1), "CollectGarbage.instance_index"),
        (TransferPosition(position_index=2**16), "TransferPosition.position_index"),
        (OpenPosition(2, 1, 0, 1, 1, 1), "OpenPosition.side"),
        (CreateMarket(0, "BTC-€", 1, 6, 6), "CreateMarket.symbol"),
        (CreateMarket(0, b"BTC", 1, 6, 6), "CreateMarket.symbol"),
    ],
)
def test_unrepresentable_arguments_raise_encoding_error(op, field: str) -> None:
    with pytest.raises(EncodingError) as exc_info:
        encode_operation(op)
    assert exc_info.value.field == field


def test_encoding_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        encode_operation(ChangeK(factor=-5))


def test_string_length_limit() -> None:
    wt = AsciiString(max_len=4)
    assert wt.to_wire("ABCD", field="s") == "ABCD"
    with pytest.raises(EncodingError, match="too long"):
        wt.to_wire("ABCDE", field="s")


def test_decode_known_payload() -> None:
    data = bytes([8, 0x00, 5, 0, 0, 0, 0, 0, 0, 0])
    assert decode_operation(data) == CollectGarbage(instance_index=0, max_iterations=5)


def test_decode_side_is_enum() -> None:
    op = decode_operation(struct.pack("<BBQBQQQ", 3, 0, 1, 0, 2, 3, 4))
    assert op.side is PositionSide.SHORT


@pytest.mark.parametrize(
    "data,match",
    [
        (b"", "empty"),
        (bytes([18]), "unknown discriminant"),
        (bytes([255]), "unknown discriminant"),
        (bytes([8, 0, 5]), "truncated"),
        (bytes([12]), "truncated"),
        (bytes([10, 0]), "trailing"),
        (struct.pack("<BQ", 4, 1) + b"\x00", "trailing"),
        (struct.pack("<BBQBQQQ", 3, 2, 1, 0, 2, 3, 4), "unknown PositionSide"),
        (bytes([0, 1]) + struct.pack("<I", 2) + b"\xc3\xa9" + struct.pack("<QBB", 1, 1, 1), "."),
    ],
)
def test_decode_rejects_malformed_payloads(data: bytes, match: str) -> None:
    with pytest.raises(DecodingError, match=match):
        decode_operation(data)


def test_decode_requires_bytes() -> None:
    with pytest.raises(TypeError):
        decode_operation("0800")  # type: ignore[arg-type]
