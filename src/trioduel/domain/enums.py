"""Enumerations used across the battle domain."""

from __future__ import annotations

from enum import StrEnum


class ElementType(StrEnum):
    """Elemental classification of a character."""

    FIRE = "fire"
    WATER = "water"
    ELECTRIC = "electric"
    GRASS = "grass"
    UNCLASSIFIED = "unclassified"

    @classmethod
    def parse(cls, raw: str | None) -> ElementType:
        """Map a catalog type string onto the closed set, defaulting to unclassified."""

        if raw is None:
            return cls.UNCLASSIFIED
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.UNCLASSIFIED


class BattleError(StrEnum):
    """Stable failure classifications returned by domain operations."""

    INVALID_PLAYER = "InvalidPlayer"
    ROSTER_FULL = "RosterFull"
    INCOMPLETE_ROSTER = "IncompleteRoster"
    INDEX_OUT_OF_RANGE = "IndexOutOfRange"
    NOT_YOUR_TURN = "NotYourTurn"
    INSUFFICIENT_RESOURCE = "InsufficientResource"
    TARGET_FAINTED = "TargetFainted"
    NO_REPLACEMENT_AVAILABLE = "NoReplacementAvailable"
    MATCH_OVER = "MatchOver"
    UNKNOWN_CHARACTER = "UnknownCharacter"
    BATTLE_IN_PROGRESS = "BattleInProgress"
    INVALID_MOVE = "InvalidMove"
