"""Core data models and configuration.

This package provides:
- Runtime values and the contract event record (ScVal, ValType, MapEntry, ContractEvent)
- Configuration classes (MatchConfig, CliConfig)
- Column buffer for projected events
"""

from specmatch.core.config import CliConfig, MatchConfig
from specmatch.core.values import ContractEvent, MapEntry, ScVal, ValType
from specmatch.core.models import Column

__all__ = [
    "CliConfig",
    "MatchConfig",
    "ContractEvent",
    "MapEntry",
    "ScVal",
    "ValType",
    "Column",
]
