"""
Binary codec for operation payloads.

Layout: one discriminant byte (`OperationTag`) followed by the argument tuple
of that kind, see `wire.py`. The layout is the wire contract with the
execution engine and must stay bit-for-bit stable.
"""

from __future__ import annotations

import io
from typing import Any, Dict, Type, Union

from construct import ConstructError

from ..errors import DecodingError, EncodingError
from .types import OPERATION_CLASSES, Operation, OperationKind, OperationTag
from .wire import layout_for, wire_fields


def discriminant(op: Union[Operation, Type[Operation]]) -> int:
    """Discriminant byte of an operation value or class."""
    tag = getattr(op, "TAG", None)
    if not isinstance(tag, OperationTag):
        raise TypeError(f"not an operation: {op!r}")
    return int(tag)


def encode_operation(op: OperationKind) -> bytes:
    """
    Encode an operation into its canonical payload.

    Raises:
        EncodingError: if any argument is not representable (wrong type,
            out of range for its width, non-ASCII or oversized string).
    """
    cls = type(op)
    if OPERATION_CLASSES.get(getattr(cls, "TAG", None)) is not cls:
        raise EncodingError(f"unsupported operation type: {cls.__name__}")

    kind = cls.__name__
    values: Dict[str, Any] = {}
    for name, wt in wire_fields(cls):
        values[name] = wt.to_wire(getattr(op, name), field=f"{kind}.{name}")

    try:
        body = layout_for(cls).build(values)
    except ConstructError as exc:
        raise EncodingError(f"{kind}: {exc}") from exc
    return bytes([int(cls.TAG)]) + body


def decode_operation(data: bytes) -> OperationKind:
    """
    Decode a payload produced by `encode_operation`.

    The whole buffer must be consumed; trailing bytes are rejected.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("data must be bytes")
    if not data:
        raise DecodingError("empty payload")

    raw_tag = data[0]
    try:
        tag = OperationTag(raw_tag)
    except ValueError as exc:
        raise DecodingError(f"unknown discriminant {raw_tag}") from exc
    cls = OPERATION_CLASSES[tag]
    kind = cls.__name__

    stream = io.BytesIO(bytes(data[1:]))
    try:
        parsed = layout_for(cls).parse_stream(stream)
    except (ConstructError, UnicodeDecodeError) as exc:
        raise DecodingError(f"{kind}: truncated or malformed payload: {exc}") from exc
    rest = stream.read()
    if rest:
        raise DecodingError(f"{kind}: {len(rest)} trailing byte(s)")

    kwargs = {
        name: wt.from_wire(parsed[name], field=f"{kind}.{name}")
        for name, wt in wire_fields(cls)
    }
    return cls(**kwargs)
