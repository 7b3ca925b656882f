"""Load contract events and event specs from their stellar-xdr JSON form.

Envelopes are validated with pydantic; the recursive value/type payloads are
converted by hand into `ScVal` / `SpecTypeDef`. Malformed input raises
`ValueError` (pydantic's `ValidationError` is one).
"""

import json
import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from specmatch.core.values import ContractEvent, MapEntry, ScVal, ValType
from specmatch.decoding.specs import DataFormat, EventSpec, ParamLocation, SpecParam, SpecType, SpecTypeDef

logger = logging.getLogger(__name__)

JsonSource = Path | Mapping[str, Any] | list[Any]


class EventBodyV0(BaseModel):
    topics: list[Any]
    data: Any = "void"


class ContractEventJson(BaseModel):
    contract_id: str | None = None
    body: dict[str, EventBodyV0] | None = None
    # flattened form
    topics: list[Any] | None = None
    data: Any = "void"


class SpecParamJson(BaseModel):
    name: str
    type_: Any = Field(validation_alias=AliasChoices("type_", "type"))
    location: str
    doc: str = ""


class EventSpecJson(BaseModel):
    name: str
    prefix_topics: list[str] = []
    params: list[SpecParamJson] = []
    data_format: str
    doc: str = ""
    lib: str = ""


# ---- values ----

_INT_RANGES: dict[ValType, tuple[int, int]] = {
    ValType.U32: (0, 2**32 - 1),
    ValType.I32: (-(2**31), 2**31 - 1),
    ValType.U64: (0, 2**64 - 1),
    ValType.I64: (-(2**63), 2**63 - 1),
    ValType.TIMEPOINT: (0, 2**64 - 1),
    ValType.DURATION: (0, 2**64 - 1),
    ValType.U128: (0, 2**128 - 1),
    ValType.I128: (-(2**127), 2**127 - 1),
    ValType.U256: (0, 2**256 - 1),
    ValType.I256: (-(2**255), 2**255 - 1),
}


def _int_part(t: ValType, payload: Mapping[str, Any], key: str) -> int:
    part = payload[key]
    if isinstance(part, bool) or not isinstance(part, int):
        raise ValueError(f"{t.value}: part {key!r} must be an integer, got {part!r}")
    return part


def _parse_int(t: ValType, payload: Any) -> int:
    """Integer payloads: JSON number, decimal string, or hi/lo parts."""
    if isinstance(payload, bool):
        raise ValueError(f"{t.value}: expected an integer, got a bool")
    if isinstance(payload, int):
        v = payload
    elif isinstance(payload, str):
        v = int(payload, 10)
    elif isinstance(payload, Mapping) and {"hi", "lo"} <= payload.keys():
        v = (_int_part(t, payload, "hi") << 64) + _int_part(t, payload, "lo")
    elif isinstance(payload, Mapping) and {"hi_hi", "hi_lo", "lo_hi", "lo_lo"} <= payload.keys():
        v = (
            (_int_part(t, payload, "hi_hi") << 192)
            + (_int_part(t, payload, "hi_lo") << 128)
            + (_int_part(t, payload, "lo_hi") << 64)
            + _int_part(t, payload, "lo_lo")
        )
    else:
        raise ValueError(f"{t.value}: unsupported integer payload {payload!r}")
    lo, hi = _INT_RANGES[t]
    if not lo <= v <= hi:
        raise ValueError(f"{t.value}: {v} out of range")
    return v


def _expect_str(t: ValType, payload: Any) -> str:
    if not isinstance(payload, str):
        raise ValueError(f"{t.value}: expected a string, got {payload!r}")
    return payload


def parse_sc_val(obj: Any) -> ScVal:
    """Convert one JSON ScVal (e.g. `{"u32": 7}`, `"void"`) into an `ScVal`."""
    if obj == "void":
        return ScVal(ValType.VOID)
    if not isinstance(obj, Mapping) or len(obj) != 1:
        raise ValueError(f"expected a single-key ScVal object, got {obj!r}")
    tag, payload = next(iter(obj.items()))
    try:
        t = ValType(tag)
    except ValueError:
        raise ValueError(f"unsupported ScVal type {tag!r}") from None

    if t in _INT_RANGES:
        return ScVal(t, _parse_int(t, payload))
    match t:
        case ValType.VOID:
            return ScVal(t)
        case ValType.BOOL:
            if not isinstance(payload, bool):
                raise ValueError(f"bool: expected true/false, got {payload!r}")
            return ScVal(t, payload)
        case ValType.ERROR:
            return ScVal(t, payload)
        case ValType.ADDRESS | ValType.SYMBOL | ValType.STRING:
            return ScVal(t, _expect_str(t, payload))
        case ValType.BYTES:
            return ScVal(t, bytes.fromhex(_expect_str(t, payload)))
        case ValType.VEC | ValType.MAP:
            if payload is None:
                return ScVal(t, None)
            if not isinstance(payload, list):
                raise ValueError(f"{t.value}: expected a list or null, got {payload!r}")
            if t is ValType.VEC:
                return ScVal(t, tuple(parse_sc_val(item) for item in payload))
            return ScVal(t, tuple(_parse_map_entry(e) for e in payload))
    raise ValueError(f"unsupported ScVal type {tag!r}")


def _parse_map_entry(obj: Any) -> MapEntry:
    if not isinstance(obj, Mapping) or "key" not in obj or "val" not in obj:
        raise ValueError(f"map entry must have 'key' and 'val', got {obj!r}")
    return MapEntry(parse_sc_val(obj["key"]), parse_sc_val(obj["val"]))


# ---- spec types ----


def _snake(s: str) -> str:
    """`TopicList` / `topicList` / `topic_list` → `topic_list`."""
    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", s).lower()


_COMPOSITE_KINDS = {
    SpecType.OPTION,
    SpecType.RESULT,
    SpecType.VEC,
    SpecType.MAP,
    SpecType.TUPLE,
    SpecType.BYTES_N,
    SpecType.UDT,
}


def _field(payload: Mapping[str, Any], key: str, tag: str) -> Any:
    if key not in payload:
        raise ValueError(f"{tag}: missing {key!r}")
    return payload[key]


def _bytes_n_len(n: Any) -> int:
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise ValueError(f"bytes_n: 'n' must be a non-negative integer, got {n!r}")
    return n


def parse_spec_type(obj: Any) -> SpecTypeDef:
    """Convert one JSON spec type (e.g. `"u32"`, `{"option": {...}}`) into a `SpecTypeDef`."""
    if isinstance(obj, str):
        try:
            kind = SpecType(_snake(obj))
        except ValueError:
            raise ValueError(f"unsupported spec type {obj!r}") from None
        if kind in _COMPOSITE_KINDS:
            raise ValueError(f"spec type {obj!r} needs a payload")
        return SpecTypeDef.scalar(kind)

    if not isinstance(obj, Mapping) or len(obj) != 1:
        raise ValueError(f"expected a spec type name or single-key object, got {obj!r}")
    tag, payload = next(iter(obj.items()))
    try:
        kind = SpecType(_snake(tag))
    except ValueError:
        raise ValueError(f"unsupported spec type {tag!r}") from None
    if not isinstance(payload, Mapping):
        raise ValueError(f"{tag}: expected an object payload, got {payload!r}")

    match kind:
        case SpecType.OPTION:
            return SpecTypeDef.option(parse_spec_type(_field(payload, "value_type", tag)))
        case SpecType.BYTES_N:
            return SpecTypeDef.bytes_n(_bytes_n_len(_field(payload, "n", tag)))
        case SpecType.VEC:
            return SpecTypeDef.vec(parse_spec_type(_field(payload, "element_type", tag)))
        case SpecType.MAP:
            return SpecTypeDef.map(
                parse_spec_type(_field(payload, "key_type", tag)),
                parse_spec_type(_field(payload, "value_type", tag)),
            )
        case SpecType.UDT:
            return SpecTypeDef(SpecType.UDT, udt_name=str(payload.get("name", "")))
        case SpecType.RESULT | SpecType.TUPLE:
            # declared but never satisfied by a runtime value
            return SpecTypeDef(kind)
    raise ValueError(f"spec type {tag!r} takes no payload")


def _parse_location(raw: str) -> ParamLocation | str:
    try:
        return ParamLocation(_snake(raw))
    except ValueError:
        # kept raw: matching treats it as "no match"
        return raw


def _parse_data_format(raw: str) -> DataFormat:
    try:
        return DataFormat(_snake(raw))
    except ValueError:
        raise ValueError(f"unsupported data format {raw!r}") from None


# ---- envelopes ----


def _load_json(source: JsonSource) -> Any:
    if isinstance(source, Path):
        return json.loads(source.read_text())
    return source


def event_from_json(obj: Mapping[str, Any]) -> ContractEvent:
    model = ContractEventJson.model_validate(obj)
    if model.body is not None:
        if "v0" not in model.body:
            raise ValueError(f"unsupported event body version(s) {sorted(model.body)}")
        topics, data = model.body["v0"].topics, model.body["v0"].data
    elif model.topics is not None:
        topics, data = model.topics, model.data
    else:
        raise ValueError("event needs either 'body' or 'topics'")
    return ContractEvent(
        contract_id=model.contract_id,
        topics=tuple(parse_sc_val(t) for t in topics),
        data=parse_sc_val(data),
    )


def event_spec_from_json(obj: Mapping[str, Any]) -> EventSpec:
    model = EventSpecJson.model_validate(obj)
    return EventSpec(
        name=model.name,
        prefix_topics=tuple(model.prefix_topics),
        params=tuple(
            SpecParam(name=p.name, type=parse_spec_type(p.type_), location=_parse_location(p.location))
            for p in model.params
        ),
        data_format=_parse_data_format(model.data_format),
        doc=model.doc,
    )


def _iter_spec_entries(obj: Any) -> Iterable[Mapping[str, Any]]:
    """Yield inner event spec objects; non-event entries are skipped."""
    entries = obj if isinstance(obj, list) else [obj]
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise ValueError(f"expected a spec entry object, got {entry!r}")
        if "event_v0" in entry:
            yield entry["event_v0"]
        elif "prefix_topics" in entry or "data_format" in entry:
            yield entry
        else:
            logger.debug("skipping non-event spec entry %s", list(entry)[:1])


def load_event(source: JsonSource) -> ContractEvent:
    """Load one contract event from a JSON file or an already-decoded object."""
    obj = _load_json(source)
    if not isinstance(obj, Mapping):
        raise ValueError("event JSON must be an object")
    return event_from_json(obj)


def load_specs(source: JsonSource) -> list[EventSpec]:
    """Load the event specs of one JSON spec entry (or list of entries)."""
    return [event_spec_from_json(e) for e in _iter_spec_entries(_load_json(source))]


def load_spec_files(paths: Iterable[Path]) -> list[EventSpec]:
    """Load specs from many files, keeping file order then entry order."""
    specs: list[EventSpec] = []
    for path in paths:
        loaded = load_specs(path)
        logger.debug("loaded %d event spec(s) from %s", len(loaded), path)
        specs.extend(loaded)
    return specs
