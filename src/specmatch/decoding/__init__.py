"""Event matching and projection.

This package provides:
- Event specification system (EventSpec, SpecParam, SpecTypeDef)
- Type compatibility checks between runtime values and declared types
- Matcher deciding whether an event has a spec's shape (with mismatch reasons)
- Projector turning a matched event into named, typed values
- Selector picking the first matching spec
"""

from specmatch.decoding.matcher import MatchOutcome, check_match, matches
from specmatch.decoding.projector import ProjectedField, Projection, project
from specmatch.decoding.selector import explain_all, first_matching, select_spec
from specmatch.decoding.specs import (
    DataFormat,
    EventSpec,
    ParamLocation,
    SpecParam,
    SpecType,
    SpecTypeDef,
)
from specmatch.decoding.type_check import type_matches

__all__ = [
    "MatchOutcome",
    "check_match",
    "matches",
    "ProjectedField",
    "Projection",
    "project",
    "explain_all",
    "first_matching",
    "select_spec",
    "DataFormat",
    "EventSpec",
    "ParamLocation",
    "SpecParam",
    "SpecType",
    "SpecTypeDef",
    "type_matches",
]
