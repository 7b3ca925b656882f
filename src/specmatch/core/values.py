"""Runtime event values and the contract event record.

This module defines:
- `ValType`: discriminant of a runtime value (one per ScVal variant).
- `ScVal`: a tagged value; the payload shape depends on `type`.
- `MapEntry`: one key/value pair of a map value.
- `ContractEvent`: contract id + ordered topics + one data value.

Payload shapes
--------------
- BOOL → bool; VOID → None; ERROR → raw error payload (opaque)
- integer kinds (U32 ... I256, TIMEPOINT, DURATION) → int
- ADDRESS / SYMBOL / STRING → str
- BYTES → bytes
- VEC → tuple[ScVal, ...] | None   (None = absent vec)
- MAP → tuple[MapEntry, ...] | None (None = absent map)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ValType(Enum):
    BOOL = "bool"
    VOID = "void"
    ERROR = "error"
    U32 = "u32"
    I32 = "i32"
    U64 = "u64"
    I64 = "i64"
    TIMEPOINT = "timepoint"
    DURATION = "duration"
    U128 = "u128"
    I128 = "i128"
    U256 = "u256"
    I256 = "i256"
    BYTES = "bytes"
    STRING = "string"
    SYMBOL = "symbol"
    VEC = "vec"
    MAP = "map"
    ADDRESS = "address"


INTEGER_VAL_TYPES: frozenset[ValType] = frozenset(
    {
        ValType.U32,
        ValType.I32,
        ValType.U64,
        ValType.I64,
        ValType.TIMEPOINT,
        ValType.DURATION,
        ValType.U128,
        ValType.I128,
        ValType.U256,
        ValType.I256,
    }
)


@dataclass(frozen=True, slots=True)
class ScVal:
    """One runtime value: discriminant + payload."""

    type: ValType
    value: Any = None

    @property
    def is_present(self) -> bool:
        """False only for VEC/MAP values whose payload is absent."""
        if self.type in (ValType.VEC, ValType.MAP):
            return self.value is not None
        return True


@dataclass(frozen=True, slots=True)
class MapEntry:
    key: ScVal
    val: ScVal


@dataclass(frozen=True, slots=True)
class ContractEvent:
    """A contract event as observed at runtime (read-only)."""

    contract_id: str | None
    topics: tuple[ScVal, ...]
    data: ScVal


# ---- constructors ----


def sc_bool(v: bool) -> ScVal:
    return ScVal(ValType.BOOL, bool(v))


def sc_void() -> ScVal:
    return ScVal(ValType.VOID, None)


def sc_int(t: ValType, v: int) -> ScVal:
    if t not in INTEGER_VAL_TYPES:
        raise ValueError(f"{t.value} is not an integer kind")
    return ScVal(t, int(v))


def sc_u32(v: int) -> ScVal:
    return sc_int(ValType.U32, v)


def sc_i64(v: int) -> ScVal:
    return sc_int(ValType.I64, v)


def sc_symbol(s: str) -> ScVal:
    return ScVal(ValType.SYMBOL, s)


def sc_string(s: str) -> ScVal:
    return ScVal(ValType.STRING, s)


def sc_address(s: str) -> ScVal:
    return ScVal(ValType.ADDRESS, s)


def sc_bytes(b: bytes) -> ScVal:
    return ScVal(ValType.BYTES, bytes(b))


def sc_vec(items: Iterable[ScVal] | None) -> ScVal:
    return ScVal(ValType.VEC, None if items is None else tuple(items))


def sc_map(entries: Iterable[MapEntry | tuple[ScVal, ScVal]] | None) -> ScVal:
    if entries is None:
        return ScVal(ValType.MAP, None)
    out: list[MapEntry] = []
    for e in entries:
        out.append(e if isinstance(e, MapEntry) else MapEntry(e[0], e[1]))
    return ScVal(ValType.MAP, tuple(out))
