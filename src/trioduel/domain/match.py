"""Match lifecycle and read accessors."""

from __future__ import annotations

from collections.abc import Iterable

from trioduel.domain import battle_log
from trioduel.domain.combat import round_half_up
from trioduel.domain.enums import BattleError
from trioduel.domain.models import (
    PLAYER_ONE,
    PLAYER_TWO,
    PLAYERS,
    BattleCharacter,
    CharacterTemplate,
    MatchState,
    PlayerID,
    Team,
    is_valid_player,
)
from trioduel.domain.results import ActionResult, GameOverResult
from trioduel.domain.roster import is_roster_complete
from trioduel.domain.rules_config import DEFAULT_RULES, RulesConfig


def new_match(catalog: Iterable[CharacterTemplate] = ()) -> MatchState:
    """Create an empty match over ``catalog``."""

    return MatchState(catalog=tuple(catalog))


def start_battle(state: MatchState, *, rules: RulesConfig = DEFAULT_RULES) -> ActionResult:
    """Put two confirmed rosters into battle.

    Player 1 moves first with both teams leading from slot 0. Rosters stay
    locked until :func:`reset_match`.
    """

    if state.battle_started:
        if state.is_game_over:
            return ActionResult.fail(BattleError.MATCH_OVER)
        return ActionResult.fail(BattleError.BATTLE_IN_PROGRESS)
    if not all(is_roster_complete(state, player, rules=rules) for player in PLAYERS):
        return ActionResult.fail(BattleError.INCOMPLETE_ROSTER)

    for player in PLAYERS:
        state.team(player).active_index = 0
    state.current_turn = PLAYER_ONE
    state.is_game_over = False
    state.winner = None
    state.battle_started = True
    state.battle_log.clear()

    first = state.team(PLAYER_ONE).members[0]
    second = state.team(PLAYER_TWO).members[0]
    battle_log.add_battle_log(state, battle_log.BATTLE_START)
    battle_log.add_battle_log(state, battle_log.matchup(first.name, second.name))
    announce_turn(state)
    return ActionResult.ok()


def announce_turn(state: MatchState) -> None:
    battle_log.add_battle_log(state, battle_log.turn_announcement(state.current_turn))


def reset_match(state: MatchState) -> None:
    """Clear rosters, turn, log and flags, unlocking rosters. The catalog is kept."""

    state.teams = {player: Team() for player in PLAYERS}
    state.current_turn = PLAYER_ONE
    state.is_game_over = False
    state.winner = None
    state.battle_started = False
    state.battle_log = []


def active_character(state: MatchState, player: PlayerID) -> BattleCharacter | None:
    if not is_valid_player(player):
        return None
    return state.team(player).active


def roster(state: MatchState, player: PlayerID) -> list[BattleCharacter]:
    """Return a shallow copy of the player's members in slot order."""

    if not is_valid_player(player):
        return []
    return list(state.team(player).members)


def recent_log(state: MatchState, limit: int = battle_log.DEFAULT_RECENT_LIMIT) -> list[str]:
    return battle_log.recent_entries(state, limit)


def outcome(state: MatchState) -> GameOverResult:
    """Report the last recorded verdict without re-judging."""

    return GameOverResult(is_game_over=state.is_game_over, winner=state.winner)


def hp_percentage(current_hp: int, max_hp: int) -> float:
    """Health as a percentage rounded half up to two decimals.

    Returns 0 for a zero maximum. Values above the maximum are not clamped.
    """

    if max_hp == 0:
        return 0.0
    return round_half_up(current_hp / max_hp * 100 * 100) / 100
