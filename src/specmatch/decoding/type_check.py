"""Type compatibility: does a runtime value satisfy a declared type?"""

from __future__ import annotations

from specmatch.core.values import ScVal, ValType
from specmatch.decoding.specs import SpecType, SpecTypeDef

# Declared scalar kind → required runtime discriminant.
# Adding a scalar kind is one line here; anything not listed never matches.
_SCALAR_VAL_TYPES: dict[SpecType, ValType] = {
    SpecType.BOOL: ValType.BOOL,
    SpecType.VOID: ValType.VOID,
    SpecType.ERROR: ValType.ERROR,
    SpecType.U32: ValType.U32,
    SpecType.I32: ValType.I32,
    SpecType.U64: ValType.U64,
    SpecType.I64: ValType.I64,
    SpecType.TIMEPOINT: ValType.TIMEPOINT,
    SpecType.DURATION: ValType.DURATION,
    SpecType.U128: ValType.U128,
    SpecType.I128: ValType.I128,
    SpecType.U256: ValType.U256,
    SpecType.I256: ValType.I256,
    SpecType.BYTES: ValType.BYTES,
    SpecType.STRING: ValType.STRING,
    SpecType.SYMBOL: ValType.SYMBOL,
    SpecType.ADDRESS: ValType.ADDRESS,
}


def type_matches(value: ScVal, decl: SpecTypeDef) -> bool:
    """Return True if `value` satisfies `decl`. Never raises.

    - option<T> is transparent: satisfied whenever T is (absence is the caller's concern)
    - bytes_n<n> needs bytes of exactly n
    - vec<_> / map<_, _> check only the outer shape (present container)
    - val accepts anything
    """
    match decl.kind:
        case SpecType.OPTION:
            return decl.inner is not None and type_matches(value, decl.inner)
        case SpecType.BYTES_N:
            return value.type is ValType.BYTES and len(value.value or b"") == decl.n
        case SpecType.VEC:
            return value.type is ValType.VEC and value.is_present
        case SpecType.MAP:
            return value.type is ValType.MAP and value.is_present
        case SpecType.VAL:
            return True
    expected = _SCALAR_VAL_TYPES.get(decl.kind)
    return expected is not None and value.type is expected
