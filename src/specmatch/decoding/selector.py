"""Spec selection: first spec (in input order) that matches an event.

Specs are expected to be mutually exclusive (distinct prefix topics). When
several match, the first one supplied wins and no conflict is reported.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from specmatch.core.config import MatchConfig
from specmatch.core.values import ContractEvent
from specmatch.decoding.matcher import MatchOutcome, check_match, matches
from specmatch.decoding.specs import EventSpec

logger = logging.getLogger(__name__)


def select_spec(
    event: ContractEvent,
    specs: Iterable[EventSpec],
    config: MatchConfig | None = None,
) -> EventSpec | None:
    """Return the first spec matching `event`, or None."""
    for spec in specs:
        if matches(event, spec, config):
            logger.debug("selected spec %r", spec.name)
            return spec
    logger.debug("no spec matches event from %s", event.contract_id)
    return None


def explain_all(
    event: ContractEvent,
    specs: Iterable[EventSpec],
    config: MatchConfig | None = None,
) -> list[MatchOutcome]:
    """Match every spec independently; outcomes keep the input order."""
    return [check_match(event, spec, config) for spec in specs]


def first_matching(outcomes: Iterable[MatchOutcome]) -> MatchOutcome | None:
    """Scan already-computed outcomes in order (e.g. after matching in parallel)."""
    for outcome in outcomes:
        if outcome.matched:
            return outcome
    return None
