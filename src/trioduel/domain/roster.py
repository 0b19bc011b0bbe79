"""Team assembly rules."""

from __future__ import annotations

import logging

from trioduel.domain.enums import BattleError
from trioduel.domain.models import (
    BattleCharacter,
    CharacterTemplate,
    MatchState,
    PlayerID,
    is_valid_player,
)
from trioduel.domain.results import ActionResult
from trioduel.domain.rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


def _locked(state: MatchState) -> BattleError | None:
    if state.is_game_over:
        return BattleError.MATCH_OVER
    if state.battle_started:
        return BattleError.BATTLE_IN_PROGRESS
    return None


def add_character(
    state: MatchState,
    player: PlayerID,
    template: CharacterTemplate,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """Copy ``template`` into a fresh battle character on the player's team.

    The same template may be added more than once; every call produces a
    distinct character with its own move list.
    """

    if not is_valid_player(player):
        return ActionResult.fail(BattleError.INVALID_PLAYER)
    locked = _locked(state)
    if locked is not None:
        return ActionResult.fail(locked)

    team = state.team(player)
    if len(team.members) >= rules.roster.team_size:
        return ActionResult.fail(BattleError.ROSTER_FULL)

    character = BattleCharacter.from_template(template)
    team.members.append(character)
    logger.debug(
        "player %s picked %s (%d/%d)",
        player,
        template.id,
        len(team.members),
        rules.roster.team_size,
    )
    return ActionResult.ok(character.name)


def add_character_by_id(
    state: MatchState,
    player: PlayerID,
    template_id: str,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """Resolve ``template_id`` against the match catalog and add it."""

    if not is_valid_player(player):
        return ActionResult.fail(BattleError.INVALID_PLAYER)
    locked = _locked(state)
    if locked is not None:
        return ActionResult.fail(locked)

    template = state.find_template(template_id)
    if template is None:
        return ActionResult.fail(BattleError.UNKNOWN_CHARACTER)
    return add_character(state, player, template, rules=rules)


def remove_character(state: MatchState, player: PlayerID, index: int) -> ActionResult:
    """Drop the character at ``index``; later slots shift left."""

    if not is_valid_player(player):
        return ActionResult.fail(BattleError.INVALID_PLAYER)
    locked = _locked(state)
    if locked is not None:
        return ActionResult.fail(locked)

    members = state.team(player).members
    if not 0 <= index < len(members):
        return ActionResult.fail(BattleError.INDEX_OUT_OF_RANGE)

    removed = members.pop(index)
    return ActionResult.ok(removed.name)


def confirm_roster(
    state: MatchState,
    player: PlayerID,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """Check that the player's team is complete. Does not mutate state."""

    if not is_valid_player(player):
        return ActionResult.fail(BattleError.INVALID_PLAYER)

    if len(state.team(player).members) != rules.roster.team_size:
        return ActionResult.fail(BattleError.INCOMPLETE_ROSTER)
    return ActionResult.ok()


def is_roster_complete(
    state: MatchState, player: PlayerID, *, rules: RulesConfig = DEFAULT_RULES
) -> bool:
    return len(state.team(player).members) == rules.roster.team_size
