from __future__ import annotations

from .core.config import MatchConfig
from .core.values import ContractEvent, MapEntry, ScVal, ValType
from .decoding.matcher import MatchOutcome, check_match, matches
from .decoding.projector import ProjectedField, project
from .decoding.selector import select_spec
from .decoding.specs import DataFormat, EventSpec, ParamLocation, SpecParam, SpecType, SpecTypeDef
from .decoding.type_check import type_matches

__all__ = [
    "MatchConfig",
    "ContractEvent",
    "MapEntry",
    "ScVal",
    "ValType",
    "MatchOutcome",
    "check_match",
    "matches",
    "ProjectedField",
    "project",
    "select_spec",
    "DataFormat",
    "EventSpec",
    "ParamLocation",
    "SpecParam",
    "SpecType",
    "SpecTypeDef",
    "type_matches",
]
