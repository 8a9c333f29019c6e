"""
Scalar wire types and per-kind binary layouts.

Operation dataclasses declare each argument with `arg(<wire type>)`; the
layout of a kind is derived from its fields in declaration order, so the
class body is the single source of truth for the argument tuple.

Encoding rules:
- unsigned integers are fixed-width little-endian (u8 / u16 / u64)
- strings are a u32 little-endian byte length followed by the raw bytes
- enumerated flags are a single byte
"""

from __future__ import annotations

from dataclasses import Field, field, fields
from enum import IntEnum
from functools import lru_cache
from typing import Any, Tuple, Type

from borsh_construct import CStruct, String, U8, U16, U64

from ..errors import DecodingError, EncodingError


WIRE_KEY = "perp_requests.wire"


class WireType:
    """One scalar argument type: its layout plus the checks around it."""

    name: str = ""
    layout: Any = None

    def to_wire(self, value: Any, *, field: str) -> Any:
        raise NotImplementedError

    def from_wire(self, raw: Any, *, field: str) -> Any:
        return raw

    def __repr__(self) -> str:
        return f"<wire {self.name}>"


class Unsigned(WireType):
    def __init__(self, bits: int, layout: Any) -> None:
        self.bits = bits
        self.name = f"u{bits}"
        self.layout = layout
        self.max_value = (1 << bits) - 1

    def to_wire(self, value: Any, *, field: str) -> int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise EncodingError(f"{field} must be an int, got {type(value).__name__}", field=field)
        if value < 0 or value > self.max_value:
            raise EncodingError(f"{field} out of range for {self.name}: {value}", field=field)
        return int(value)


class AsciiString(WireType):
    """Length-prefixed ASCII string (u32 length prefix)."""

    name = "string"
    layout = String

    def __init__(self, max_len: int = 2**32 - 1) -> None:
        self.max_len = max_len

    def to_wire(self, value: Any, *, field: str) -> str:
        if not isinstance(value, str):
            raise EncodingError(f"{field} must be a str, got {type(value).__name__}", field=field)
        try:
            raw = value.encode("ascii")
        except UnicodeEncodeError as exc:
            raise EncodingError(f"{field} must be ASCII", field=field) from exc
        if len(raw) > self.max_len:
            raise EncodingError(
                f"{field} too long: {len(raw)} bytes exceeds the length prefix limit of {self.max_len}",
                field=field,
            )
        return value

    def from_wire(self, raw: Any, *, field: str) -> str:
        if not isinstance(raw, str) or not raw.isascii():
            raise DecodingError(f"{field} is not an ASCII string")
        return raw


class EnumByte(WireType):
    """An `IntEnum` carried as a single byte."""

    layout = U8

    def __init__(self, enum_cls: Type[IntEnum]) -> None:
        self.enum_cls = enum_cls
        self.name = enum_cls.__name__

    def to_wire(self, value: Any, *, field: str) -> int:
        if isinstance(value, bool):
            raise EncodingError(f"{field} must be a {self.name}, got bool", field=field)
        try:
            return int(self.enum_cls(value))
        except ValueError as exc:
            raise EncodingError(f"{field} is not a valid {self.name}: {value!r}", field=field) from exc

    def from_wire(self, raw: Any, *, field: str) -> IntEnum:
        try:
            return self.enum_cls(raw)
        except ValueError as exc:
            raise DecodingError(f"{field}: unknown {self.name} value {raw!r}") from exc


U8_ARG = Unsigned(8, U8)
U16_ARG = Unsigned(16, U16)
U64_ARG = Unsigned(64, U64)
STRING_ARG = AsciiString()


def arg(wire_type: WireType) -> Any:
    """Declare a dataclass field together with its wire type."""
    return field(metadata={WIRE_KEY: wire_type})


def wire_fields(cls: type) -> Tuple[Tuple[str, WireType], ...]:
    """Ordered `(name, wire_type)` pairs for an operation class."""
    out = []
    for f in fields(cls):
        wt = _wire_type_of(f)
        out.append((f.name, wt))
    return tuple(out)


def _wire_type_of(f: Field) -> WireType:
    wt = f.metadata.get(WIRE_KEY)
    if not isinstance(wt, WireType):
        raise TypeError(f"field {f.name!r} has no wire type")
    return wt


@lru_cache(maxsize=None)
def layout_for(cls: type) -> CStruct:
    """Borsh struct layout of the argument tuple of `cls`."""
    return CStruct(*(name / wt.layout for name, wt in wire_fields(cls)))
