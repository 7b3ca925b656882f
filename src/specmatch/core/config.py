from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class MatchConfig:
    """Matching policy passed explicitly into the matcher/selector."""

    # False: map/vec data match on partial overlap (>= 1 named key / position).
    # True: map/vec data must line up exactly with the spec's data params.
    strict_data_arity: bool = False


DEFAULT_MATCH_CONFIG = MatchConfig()


@dataclass(frozen=True)
class CliConfig:
    """Configuration for the `match` command (CLI)."""

    event_path: Path
    spec_paths: list[Path] = field(default_factory=list)
    match: MatchConfig = DEFAULT_MATCH_CONFIG
    explain: bool = False
    out_path: Path | None = None
