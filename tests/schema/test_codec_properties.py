"""Property tests: every operation value survives encode -> decode unchanged."""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given, settings

from perp_requests.errors import DecodingError
from perp_requests.schema import OPERATION_CLASSES, decode_operation, discriminant, encode_operation
from perp_requests.schema.wire import AsciiString, EnumByte, Unsigned, WireType, wire_fields


def _strategy_for(wt: WireType) -> st.SearchStrategy:
    if isinstance(wt, Unsigned):
        return st.integers(min_value=0, max_value=wt.max_value)
    if isinstance(wt, AsciiString):
        return st.text(alphabet=st.characters(min_codepoint=0, max_codepoint=127), max_size=40)
    if isinstance(wt, EnumByte):
        return st.sampled_from(list(wt.enum_cls))
    raise AssertionError(f"no strategy for {wt!r}")


def _operation_strategy(cls) -> st.SearchStrategy:
    return st.builds(cls, **{name: _strategy_for(wt) for name, wt in wire_fields(cls)})


operations = st.one_of(*(_operation_strategy(cls) for cls in OPERATION_CLASSES.values()))


@settings(max_examples=300, deadline=None)
@given(op=operations)
def test_round_trip(op) -> None:
    data = encode_operation(op)
    assert data[0] == discriminant(op)
    assert decode_operation(data) == op


@settings(max_examples=200, deadline=None)
@given(a=operations, b=operations)
def test_distinct_operations_encode_differently(a, b) -> None:
    if a != b:
        assert encode_operation(a) != encode_operation(b)


@settings(max_examples=200, deadline=None)
@given(op=operations, extra=st.binary(min_size=1, max_size=8))
def test_trailing_bytes_never_decode(op, extra: bytes) -> None:
    with pytest.raises(DecodingError):
        decode_operation(encode_operation(op) + extra)
