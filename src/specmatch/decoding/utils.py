"""Decoding utilities: topic text, Symbol-keyed map lookup and value rendering."""

from __future__ import annotations

from specmatch.core.values import MapEntry, ScVal, ValType


def symbol_text(val: ScVal) -> str | None:
    """Return the text of a Symbol/String value, None for any other kind."""
    if val.type in (ValType.SYMBOL, ValType.STRING):
        return val.value
    return None


def symbol_entries(data: ScVal) -> dict[str, ScVal]:
    """Name → value for the Symbol-keyed entries of a map (first key wins).

    Entries with non-Symbol keys are skipped; an absent or non-map value gives {}.
    """
    out: dict[str, ScVal] = {}
    if data.type is not ValType.MAP or data.value is None:
        return out
    for entry in data.value:
        if entry.key.type is ValType.SYMBOL and entry.key.value not in out:
            out[entry.key.value] = entry.val
    return out


def render_value(val: ScVal) -> str:
    """Render a value as stable text (big ints stay exact, bytes as hex)."""
    t = val.type
    if t is ValType.VOID:
        return "void"
    if t is ValType.BOOL:
        return "true" if val.value else "false"
    if t is ValType.BYTES:
        return val.value.hex()
    if t is ValType.VEC:
        if val.value is None:
            return "null"
        return "[" + ", ".join(render_value(v) for v in val.value) + "]"
    if t is ValType.MAP:
        if val.value is None:
            return "null"
        return "{" + ", ".join(_render_entry(e) for e in val.value) + "}"
    return str(val.value)


def _render_entry(entry: MapEntry) -> str:
    return f"{render_value(entry.key)}: {render_value(entry.val)}"
