"""Terminal-condition checks."""

from __future__ import annotations

import logging

from trioduel.domain.models import PLAYER_ONE, PLAYER_TWO, MatchState
from trioduel.domain.results import GameOverResult

logger = logging.getLogger(__name__)


def check_game_over(state: MatchState) -> GameOverResult:
    """Record and return whether either team has been wiped out.

    Safe to call after every action; only ``is_game_over`` and ``winner``
    are written.
    """

    first_wiped = state.team(PLAYER_ONE).is_wiped
    second_wiped = state.team(PLAYER_TWO).is_wiped

    if first_wiped and second_wiped:
        result = GameOverResult(is_game_over=True, winner=None)
    elif first_wiped:
        result = GameOverResult(is_game_over=True, winner=PLAYER_TWO)
    elif second_wiped:
        result = GameOverResult(is_game_over=True, winner=PLAYER_ONE)
    else:
        result = GameOverResult(is_game_over=False, winner=None)

    if result.is_game_over and not state.is_game_over:
        logger.debug("match decided: winner=%s", result.winner)
    state.is_game_over = result.is_game_over
    state.winner = result.winner
    return result
