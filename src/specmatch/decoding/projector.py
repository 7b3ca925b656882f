"""Event projector: turn a matched (event, spec) pair into named, typed values.

Declared params come out in spec declaration order. For the map data format,
map entries the spec does not name are appended afterwards (event order) with
the catch-all `val` type, so no event field is silently lost.

Projection is best-effort and never raises; on a pair that does not match,
params that cannot be located are simply omitted.
"""

from __future__ import annotations

from dataclasses import dataclass

from specmatch.core.values import ContractEvent, ScVal, ValType
from specmatch.decoding.specs import VAL_TYPE, DataFormat, EventSpec, ParamLocation, SpecTypeDef
from specmatch.decoding.utils import symbol_entries


@dataclass(frozen=True, slots=True)
class ProjectedField:
    type: SpecTypeDef
    value: ScVal


Projection = dict[str, ProjectedField]


def project(event: ContractEvent, spec: EventSpec) -> Projection:
    """Project `event` through `spec` into an ordered name → (type, value) mapping."""
    out: Projection = {}
    topics = event.topics
    data = event.data

    map_lookup = symbol_entries(data) if spec.data_format is DataFormat.MAP else {}
    vec_items: tuple[ScVal, ...] = ()
    if spec.data_format is DataFormat.VEC and data.type is ValType.VEC and data.value is not None:
        vec_items = data.value

    topic_cursor = len(spec.prefix_topics)
    data_cursor = 0

    for p in spec.params:
        if p.location is ParamLocation.TOPIC_LIST:
            if topic_cursor < len(topics):
                out[p.name] = ProjectedField(p.type, topics[topic_cursor])
                topic_cursor += 1
        elif p.location is ParamLocation.DATA:
            if spec.data_format is DataFormat.SINGLE_VALUE:
                out[p.name] = ProjectedField(p.type, data)
            elif spec.data_format is DataFormat.MAP:
                val = map_lookup.get(p.name)
                if val is not None:
                    out[p.name] = ProjectedField(p.type, val)
            elif spec.data_format is DataFormat.VEC:
                if data_cursor < len(vec_items):
                    out[p.name] = ProjectedField(p.type, vec_items[data_cursor])
                    data_cursor += 1

    # Extra fields: map entries the spec did not name
    for name, val in map_lookup.items():
        if name not in out:
            out[name] = ProjectedField(VAL_TYPE, val)

    return out


def projection_values(projection: Projection) -> dict[str, ScVal]:
    """Drop the types: name → value."""
    return {name: f.value for name, f in projection.items()}
