"""Active-character changes, both forced and voluntary."""

from __future__ import annotations

import logging

from trioduel.domain import battle_log
from trioduel.domain.enums import BattleError
from trioduel.domain.models import MatchState, PlayerID, is_valid_player, opponent_of
from trioduel.domain.results import ActionResult

logger = logging.getLogger(__name__)


def auto_switch(state: MatchState, player: PlayerID) -> ActionResult:
    """Make the lowest-indexed living member active.

    The currently active slot is a candidate like any other. When every
    member has fainted the active index is left where it was.
    """

    if not is_valid_player(player):
        return ActionResult.fail(BattleError.INVALID_PLAYER)

    team = state.team(player)
    index = team.first_living_index()
    if index is None:
        return ActionResult.fail(BattleError.NO_REPLACEMENT_AVAILABLE)

    team.active_index = index
    logger.debug("player %s auto-switched to slot %d", player, index)
    return ActionResult.ok(team.members[index].name)


def switch_character(state: MatchState, player: PlayerID, index: int) -> ActionResult:
    """Swap the player's active character. Consumes the player's turn."""

    if not is_valid_player(player):
        return ActionResult.fail(BattleError.INVALID_PLAYER)
    if state.is_game_over:
        return ActionResult.fail(BattleError.MATCH_OVER)
    if state.current_turn != player:
        return ActionResult.fail(BattleError.NOT_YOUR_TURN)

    team = state.team(player)
    if not 0 <= index < len(team.members):
        return ActionResult.fail(BattleError.INDEX_OUT_OF_RANGE)

    incoming = team.members[index]
    if incoming.is_fainted:
        return ActionResult.fail(BattleError.TARGET_FAINTED)

    team.active_index = index
    battle_log.add_battle_log(state, battle_log.switched_in(incoming.name))
    state.current_turn = opponent_of(player)
    return ActionResult.ok(incoming.name)
