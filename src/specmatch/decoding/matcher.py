"""Spec matcher: does one event have the shape declared by one spec?

Checks run in order and stop at the first failure:

1. prefix topics: leading topics are Symbol/String values equal to the spec's names
2. params are split into topic params and data params (unknown location → no match)
3. topic count is exactly len(prefix) + len(topic params)
4. each topic param's type is satisfied by its topic
5. the data value satisfies the spec's data format (single value, map or vec)

Topics are positional and must line up exactly. Map and vec data are matched
leniently by default (partial overlap is enough, see `MatchConfig`).

Nothing here raises: every anomaly is reported as a failed `MatchOutcome`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from specmatch.core.config import DEFAULT_MATCH_CONFIG, MatchConfig
from specmatch.core.values import ContractEvent, ScVal, ValType
from specmatch.decoding.specs import DataFormat, EventSpec, ParamLocation, SpecParam
from specmatch.decoding.type_check import type_matches
from specmatch.decoding.utils import symbol_entries, symbol_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MatchOutcome:
    """Result of matching one event against one spec."""

    spec_name: str
    matched: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.matched


# ---------- helper functions ----------
# Each returns None when the check passes, else a human-readable reason.


def _kind(val: ScVal) -> str:
    return f"a {val.type.value}" if val.is_present else f"an absent {val.type.value}"


def _check_prefix(topics: tuple[ScVal, ...], prefix: tuple[str, ...]) -> str | None:
    if len(topics) < len(prefix):
        return f"event has {len(topics)} topics, fewer than {len(prefix)} prefix topics"
    for i, expected in enumerate(prefix):
        text = symbol_text(topics[i])
        if text is None:
            return f"prefix topic {i} is a {topics[i].type.value}, expected a symbol"
        if text != expected:
            return f"prefix topic {i} is {text!r}, expected {expected!r}"
    return None


def _partition_params(spec: EventSpec) -> tuple[list[SpecParam], list[SpecParam]] | str:
    topic_params: list[SpecParam] = []
    data_params: list[SpecParam] = []
    for p in spec.params:
        if p.location is ParamLocation.TOPIC_LIST:
            topic_params.append(p)
        elif p.location is ParamLocation.DATA:
            data_params.append(p)
        else:
            return f"param {p.name!r} has unknown location {p.location!r}"
    return topic_params, data_params


def _check_topic_params(
    topics: tuple[ScVal, ...],
    n_prefix: int,
    topic_params: list[SpecParam],
) -> str | None:
    expected = n_prefix + len(topic_params)
    if len(topics) != expected:
        return f"event has {len(topics)} topics, expected exactly {expected}"
    for i, p in enumerate(topic_params):
        topic = topics[n_prefix + i]
        if not type_matches(topic, p.type):
            return f"topic param {p.name!r} is a {topic.type.value}, expected {p.type.describe()}"
    return None


def _check_single_value(data: ScVal, data_params: list[SpecParam]) -> str | None:
    if len(data_params) != 1:
        return f"single_value format needs exactly one data param, spec has {len(data_params)}"
    p = data_params[0]
    if not type_matches(data, p.type):
        return f"data param {p.name!r} is a {data.type.value}, expected {p.type.describe()}"
    return None


def _check_map(data: ScVal, data_params: list[SpecParam], strict: bool) -> str | None:
    if data.type is not ValType.MAP or data.value is None:
        return f"data is {_kind(data)}, expected a map"

    if strict:
        return _check_map_exact(data, data_params)

    lookup = symbol_entries(data)
    found = 0
    for p in data_params:
        val = lookup.get(p.name)
        if val is None:
            continue
        if not type_matches(val, p.type):
            return f"map entry {p.name!r} is a {val.type.value}, expected {p.type.describe()}"
        found += 1
    if found == 0:
        return "no map entry names a data param"
    return None


def _check_map_exact(data: ScVal, data_params: list[SpecParam]) -> str | None:
    entries = data.value
    if len(entries) != len(data_params):
        return f"map has {len(entries)} entries, expected exactly {len(data_params)}"
    by_name = {p.name: p for p in data_params}
    seen: set[str] = set()
    for entry in entries:
        if entry.key.type is not ValType.SYMBOL:
            return f"map key is a {entry.key.type.value}, expected a symbol"
        p = by_name.get(entry.key.value)
        if p is None:
            return f"map entry {entry.key.value!r} is not a data param"
        if not type_matches(entry.val, p.type):
            return f"map entry {p.name!r} is a {entry.val.type.value}, expected {p.type.describe()}"
        seen.add(p.name)
    missing = [name for name in by_name if name not in seen]
    if missing:
        return f"map is missing data params {missing}"
    return None


def _check_vec(data: ScVal, data_params: list[SpecParam], strict: bool) -> str | None:
    if data.type is not ValType.VEC or data.value is None:
        return f"data is {_kind(data)}, expected a vec"
    items = data.value
    if not items:
        return "data vec is empty"
    if not data_params:
        return "vec format spec has no data params"
    if strict and len(items) != len(data_params):
        return f"vec has {len(items)} elements, expected exactly {len(data_params)}"
    for i, (item, p) in enumerate(zip(items, data_params)):
        if not type_matches(item, p.type):
            return f"vec element {i} ({p.name!r}) is a {item.type.value}, expected {p.type.describe()}"
    return None


def _check_data(
    data: ScVal,
    data_format: DataFormat,
    data_params: list[SpecParam],
    config: MatchConfig,
) -> str | None:
    if data_format is DataFormat.SINGLE_VALUE:
        return _check_single_value(data, data_params)
    if data_format is DataFormat.MAP:
        return _check_map(data, data_params, config.strict_data_arity)
    if data_format is DataFormat.VEC:
        return _check_vec(data, data_params, config.strict_data_arity)
    return f"unknown data format {data_format!r}"


# ---------- main entry points ----------


def check_match(
    event: ContractEvent,
    spec: EventSpec,
    config: MatchConfig | None = None,
) -> MatchOutcome:
    """Match `event` against `spec` and report the first failed check, if any."""
    config = config or DEFAULT_MATCH_CONFIG

    reason = _check_prefix(event.topics, spec.prefix_topics)
    if reason is None:
        parts = _partition_params(spec)
        if isinstance(parts, str):
            reason = parts
        else:
            topic_params, data_params = parts
            reason = _check_topic_params(event.topics, len(spec.prefix_topics), topic_params)
            if reason is None:
                reason = _check_data(event.data, spec.data_format, data_params, config)

    if reason is not None:
        logger.debug("spec %r does not match: %s", spec.name, reason)
        return MatchOutcome(spec_name=spec.name, matched=False, reason=reason)
    return MatchOutcome(spec_name=spec.name, matched=True)


def matches(event: ContractEvent, spec: EventSpec, config: MatchConfig | None = None) -> bool:
    """Return True if `event` has the shape declared by `spec`."""
    return check_match(event, spec, config).matched
