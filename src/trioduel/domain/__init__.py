"""Battle domain for trioduel.

This package holds every rule of a match and nothing else.  It exposes:

* Dataclasses for catalog templates and live match state (see :mod:`models`).
* Enumerations for element types and failure classifications.
* Rule configuration objects (see :mod:`rules_config`).
* Pure rule functions: roster building, combat, switching, judging.

All functions take the :class:`~trioduel.domain.models.MatchState` they act
on and return result values instead of raising for rule violations.
"""

from . import (
    battle_log,
    combat,
    enums,
    judge,
    match,
    models,
    results,
    roster,
    rules_config,
    switching,
)

__all__ = [
    "battle_log",
    "combat",
    "enums",
    "judge",
    "match",
    "models",
    "results",
    "roster",
    "rules_config",
    "switching",
]
