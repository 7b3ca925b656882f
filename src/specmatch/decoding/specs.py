"""Event specification primitives.

Defines lightweight dataclasses to describe the expected shape of an event:
- `SpecTypeDef`: a declared (abstract) type, possibly wrapping other types
- `SpecParam`: one named, typed param read from the topic list or the data value
- `EventSpec`: prefix topics + params + the layout of the data value
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SpecType(Enum):
    VAL = "val"
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
    ADDRESS = "address"
    MUXED_ADDRESS = "muxed_address"
    OPTION = "option"
    RESULT = "result"
    VEC = "vec"
    MAP = "map"
    TUPLE = "tuple"
    BYTES_N = "bytes_n"
    UDT = "udt"


@dataclass(frozen=True, slots=True)
class SpecTypeDef:
    """A declared type.

    Only the fields relevant to `kind` are set:
    - OPTION: `inner`
    - BYTES_N: `n`
    - VEC: `inner` (element type)
    - MAP: `key`, `inner` (value type)
    - UDT: `udt_name`
    """

    kind: SpecType
    inner: SpecTypeDef | None = None
    key: SpecTypeDef | None = None
    n: int | None = None
    udt_name: str | None = None

    @staticmethod
    def scalar(kind: SpecType) -> SpecTypeDef:
        return SpecTypeDef(kind)

    @staticmethod
    def option(inner: SpecTypeDef) -> SpecTypeDef:
        return SpecTypeDef(SpecType.OPTION, inner=inner)

    @staticmethod
    def bytes_n(n: int) -> SpecTypeDef:
        return SpecTypeDef(SpecType.BYTES_N, n=n)

    @staticmethod
    def vec(elem: SpecTypeDef) -> SpecTypeDef:
        return SpecTypeDef(SpecType.VEC, inner=elem)

    @staticmethod
    def map(key: SpecTypeDef, val: SpecTypeDef) -> SpecTypeDef:
        return SpecTypeDef(SpecType.MAP, key=key, inner=val)

    def describe(self) -> str:
        """Render as a short type expression, e.g. `option<vec<u32>>`."""
        match self.kind:
            case SpecType.OPTION | SpecType.VEC:
                inner = self.inner.describe() if self.inner else "?"
                return f"{self.kind.value}<{inner}>"
            case SpecType.MAP:
                k = self.key.describe() if self.key else "?"
                v = self.inner.describe() if self.inner else "?"
                return f"map<{k}, {v}>"
            case SpecType.BYTES_N:
                return f"bytes_n<{self.n}>"
            case SpecType.UDT:
                return self.udt_name or "udt"
        return self.kind.value


VAL_TYPE = SpecTypeDef(SpecType.VAL)


class ParamLocation(Enum):
    TOPIC_LIST = "topic_list"
    DATA = "data"


class DataFormat(Enum):
    SINGLE_VALUE = "single_value"
    VEC = "vec"
    MAP = "map"


@dataclass(frozen=True)
class SpecParam:
    """One named param; `location` is kept raw when it is not recognized."""

    name: str
    type: SpecTypeDef
    location: ParamLocation | str


@dataclass(frozen=True)
class EventSpec:
    """One event shape: prefix topics, params (declaration order) and data layout."""

    name: str
    prefix_topics: tuple[str, ...]
    params: tuple[SpecParam, ...]
    data_format: DataFormat
    doc: str = field(default="", compare=False)


def get_event_spec_names(specs: list[EventSpec]) -> list[str]:
    return [spec.name for spec in specs]
