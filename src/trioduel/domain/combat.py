"""Attack resolution rules.

An attack is resolved as one transaction: the only early exits are the
validation failures at the top of :func:`attack`, and none of them touch the
match state.  Once validation passes, resource is paid, damage is rolled
and applied, fainting triggers an automatic replacement, the defending
side recovers resource and the turn passes to the opponent.
"""

from __future__ import annotations

import logging
import math

from trioduel.domain import battle_log
from trioduel.domain.enums import BattleError, ElementType
from trioduel.domain.models import (
    BattleCharacter,
    MatchState,
    Move,
    PlayerID,
    is_valid_player,
    opponent_of,
)
from trioduel.domain.results import AttackResult
from trioduel.domain.roster import is_roster_complete
from trioduel.domain.rules_config import DEFAULT_RULES, RulesConfig
from trioduel.domain.switching import auto_switch
from trioduel.utils.rng import RandomSource, uniform

logger = logging.getLogger(__name__)

SUPER_EFFECTIVE_PAIRS: frozenset[tuple[ElementType, ElementType]] = frozenset(
    {
        (ElementType.FIRE, ElementType.GRASS),
        (ElementType.GRASS, ElementType.WATER),
        (ElementType.WATER, ElementType.FIRE),
        (ElementType.ELECTRIC, ElementType.WATER),
    }
)

NOT_VERY_EFFECTIVE_PAIRS: frozenset[tuple[ElementType, ElementType]] = frozenset(
    {
        (ElementType.FIRE, ElementType.WATER),
        (ElementType.WATER, ElementType.GRASS),
        (ElementType.WATER, ElementType.ELECTRIC),
        (ElementType.GRASS, ElementType.FIRE),
    }
)


def type_multiplier(
    attacker: ElementType,
    defender: ElementType,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> float:
    """Directional effectiveness of ``attacker`` against ``defender``.

    Each ordered pair is looked up on its own; pairs missing from both
    tables, same-type pairs included, are neutral.
    """

    pair = (attacker, defender)
    if pair in SUPER_EFFECTIVE_PAIRS:
        return rules.damage.super_effective
    if pair in NOT_VERY_EFFECTIVE_PAIRS:
        return rules.damage.not_very_effective
    return 1.0


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_random_damage(
    base: float,
    rng: RandomSource,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Apply variance to ``base`` damage.

    Zero base damage stays zero and does not consume a draw. Anything else
    is scaled by a uniform factor in the configured variance band, rounded,
    and floored at the minimum damage.
    """

    if base <= 0:
        return 0

    factor = uniform(rng, rules.damage.variance_low, rules.damage.variance_high)
    damage = round_half_up(base * factor)
    return max(rules.damage.minimum_damage, damage)


def consume_resource(character: BattleCharacter, amount: int) -> bool:
    """Pay ``amount`` from the pool; returns False and changes nothing if short."""

    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {amount}")
    if character.current_resource < amount:
        return False
    character.current_resource -= amount
    return True


def recover_resource(character: BattleCharacter, amount: int) -> int:
    """Restore up to ``amount``, capped at the maximum. Returns the amount restored."""

    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {amount}")
    restored = min(amount, character.max_resource - character.current_resource)
    restored = max(restored, 0)
    character.current_resource += restored
    return restored


def attack(
    state: MatchState,
    player: PlayerID,
    move: Move,
    *,
    rng: RandomSource,
    rules: RulesConfig = DEFAULT_RULES,
) -> AttackResult:
    """Resolve ``player`` attacking the opposing active character with ``move``."""

    if not is_valid_player(player):
        return AttackResult.fail(BattleError.INVALID_PLAYER)
    if state.is_game_over:
        return AttackResult.fail(BattleError.MATCH_OVER)
    if state.current_turn != player:
        return AttackResult.fail(BattleError.NOT_YOUR_TURN)
    defending_player = opponent_of(player)
    if not (
        is_roster_complete(state, player, rules=rules)
        and is_roster_complete(state, defending_player, rules=rules)
    ):
        return AttackResult.fail(BattleError.INCOMPLETE_ROSTER)

    attacker = state.team(player).active
    defending_team = state.team(defending_player)
    defender = defending_team.active
    if attacker is None or defender is None:
        return AttackResult.fail(BattleError.INDEX_OUT_OF_RANGE)
    if attacker.is_fainted:
        return AttackResult.fail(BattleError.TARGET_FAINTED)
    if move.cost < 0:
        return AttackResult.fail(BattleError.INVALID_MOVE)

    if not consume_resource(attacker, move.cost):
        return AttackResult.fail(BattleError.INSUFFICIENT_RESOURCE)

    multiplier = type_multiplier(attacker.element, defender.element, rules=rules)
    damage = calculate_random_damage(move.power * multiplier, rng, rules=rules)
    defender.current_hp = max(0, defender.current_hp - damage)
    logger.debug(
        "%s -> %s: %s power=%d x%.1f damage=%d hp=%d",
        attacker.name,
        defender.name,
        move.name,
        move.power,
        multiplier,
        damage,
        defender.current_hp,
    )

    battle_log.add_battle_log(state, battle_log.move_used(attacker.name, move.name))
    effect = battle_log.effectiveness_line(
        multiplier,
        super_effective=rules.damage.super_effective,
        not_very_effective=rules.damage.not_very_effective,
    )
    if effect is not None:
        battle_log.add_battle_log(state, effect)
    battle_log.add_battle_log(state, battle_log.damage_dealt(defender.name, damage))

    defeated = defender.current_hp == 0
    replacement: str | None = None
    if defeated:
        battle_log.add_battle_log(state, battle_log.fainted(defender.name))
        switched = auto_switch(state, defending_player)
        if switched.success:
            replacement = switched.detail
            battle_log.add_battle_log(state, battle_log.sent_out(replacement))

    # Recovery lands on whoever is active after the replacement step,
    # including a fainted character when no replacement exists.
    current_defender = defending_team.active
    if current_defender is not None:
        recover_resource(current_defender, rules.resource.recovery_on_defend)

    state.current_turn = defending_player
    return AttackResult(
        success=True,
        damage=damage,
        defeated=defeated,
        multiplier=multiplier,
        replacement=replacement,
    )
