"""Result values returned by every public rule function."""

from __future__ import annotations

from dataclasses import dataclass

from trioduel.domain.battle_log import error_detail
from trioduel.domain.enums import BattleError


@dataclass(slots=True)
class ActionResult:
    """Outcome of a roster, switch or lifecycle operation."""

    success: bool
    error: BattleError | None = None
    detail: str = ""

    @classmethod
    def ok(cls, detail: str = "") -> ActionResult:
        return cls(True, None, detail)

    @classmethod
    def fail(cls, error: BattleError) -> ActionResult:
        return cls(False, error, error_detail(error))


@dataclass(slots=True)
class AttackResult(ActionResult):
    """Outcome of an attack, including the damage roll."""

    damage: int = 0
    defeated: bool = False
    multiplier: float = 1.0
    replacement: str | None = None


@dataclass(slots=True)
class GameOverResult:
    """Verdict of the match judge."""

    is_game_over: bool
    winner: int | None = None

    @property
    def is_draw(self) -> bool:
        return self.is_game_over and self.winner is None
