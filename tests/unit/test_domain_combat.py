"""Unit tests for attack resolution."""

from __future__ import annotations

import copy

import pytest
from hypothesis import given
from hypothesis import strategies as st

from trioduel.domain import combat
from trioduel.domain import models as dm
from trioduel.domain.battle_log import NOT_VERY_EFFECTIVE, SUPER_EFFECTIVE
from trioduel.domain.enums import BattleError, ElementType
from trioduel.utils.rng import sequence_source

MIDPOINT = sequence_source([0.5])


def _character(
    name: str,
    element: ElementType,
    *,
    hp: int = 100,
    resource: int = 100,
    moves: tuple[dm.Move, ...] = (),
) -> dm.BattleCharacter:
    template = dm.CharacterTemplate(
        id=name, name=name, element=element, max_hp=hp, max_resource=100, moves=moves
    )
    character = dm.BattleCharacter.from_template(template)
    character.current_resource = resource
    return character


def _battle(
    attacker: dm.BattleCharacter,
    defender: dm.BattleCharacter,
    *,
    defender_bench: list[dm.BattleCharacter] | None = None,
) -> dm.MatchState:
    bench = defender_bench or [
        _character("控え1", ElementType.UNCLASSIFIED),
        _character("控え2", ElementType.UNCLASSIFIED),
    ]
    state = dm.MatchState()
    state.team(dm.PLAYER_ONE).members = [
        attacker,
        _character("味方1", ElementType.UNCLASSIFIED),
        _character("味方2", ElementType.UNCLASSIFIED),
    ]
    state.team(dm.PLAYER_TWO).members = [defender, *bench]
    return state


def _never_called() -> float:
    raise AssertionError("random source must not be consulted")


@pytest.mark.parametrize(
    ("attacker", "defender", "expected"),
    [
        (ElementType.FIRE, ElementType.GRASS, 2.0),
        (ElementType.GRASS, ElementType.WATER, 2.0),
        (ElementType.WATER, ElementType.FIRE, 2.0),
        (ElementType.ELECTRIC, ElementType.WATER, 2.0),
        (ElementType.FIRE, ElementType.WATER, 0.5),
        (ElementType.WATER, ElementType.GRASS, 0.5),
        (ElementType.WATER, ElementType.ELECTRIC, 0.5),
        (ElementType.GRASS, ElementType.FIRE, 0.5),
        (ElementType.WATER, ElementType.WATER, 1.0),
        (ElementType.ELECTRIC, ElementType.GRASS, 1.0),
        (ElementType.GRASS, ElementType.ELECTRIC, 1.0),
        (ElementType.FIRE, ElementType.ELECTRIC, 1.0),
        (ElementType.UNCLASSIFIED, ElementType.FIRE, 1.0),
    ],
)
def test_type_multiplier_table(attacker, defender, expected):
    assert combat.type_multiplier(attacker, defender) == expected


def test_type_multiplier_only_lists_eight_pairs():
    non_neutral = [
        (a, d)
        for a in ElementType
        for d in ElementType
        if combat.type_multiplier(a, d) != 1.0
    ]
    assert len(non_neutral) == 8
    assert all(combat.type_multiplier(e, e) == 1.0 for e in ElementType)


def test_zero_base_damage_skips_variance():
    assert combat.calculate_random_damage(0, _never_called) == 0


def test_random_damage_band_edges():
    assert combat.calculate_random_damage(60, sequence_source([0.0])) == 51
    assert combat.calculate_random_damage(60, sequence_source([0.5])) == 60
    assert combat.calculate_random_damage(60, sequence_source([0.9999])) == 69


def test_random_damage_has_floor_of_one():
    assert combat.calculate_random_damage(0.5, sequence_source([0.0])) == 1


@given(
    power=st.integers(min_value=1, max_value=250),
    attacker_type=st.sampled_from(list(ElementType)),
    defender_type=st.sampled_from(list(ElementType)),
    draw=st.floats(min_value=0.0, max_value=1.0, exclude_max=True),
)
def test_damage_stays_in_variance_band(power, attacker_type, defender_type, draw):
    multiplier = combat.type_multiplier(attacker_type, defender_type)
    base = power * multiplier

    damage = combat.calculate_random_damage(base, sequence_source([draw]))

    lower = max(1, combat.round_half_up(base * 0.85 - 1e-9))
    upper = max(1, combat.round_half_up(base * 1.15 + 1e-9))
    assert 1 <= damage
    assert lower <= damage <= upper


@given(
    operations=st.lists(
        st.tuples(st.booleans(), st.integers(min_value=0, max_value=150)), max_size=40
    )
)
def test_resource_pool_stays_within_bounds(operations):
    character = _character("pool", ElementType.FIRE)
    for is_consume, amount in operations:
        before = character.current_resource
        if is_consume:
            paid = combat.consume_resource(character, amount)
            assert paid == (before >= amount)
        else:
            restored = combat.recover_resource(character, amount)
            assert character.current_resource == before + restored
        assert 0 <= character.current_resource <= character.max_resource


def test_negative_resource_amounts_raise():
    character = _character("pool", ElementType.FIRE)
    with pytest.raises(ValueError, match="non-negative"):
        combat.consume_resource(character, -1)
    with pytest.raises(ValueError, match="non-negative"):
        combat.recover_resource(character, -1)


def test_super_effective_attack_scenario():
    move = dm.Move("火炎放射", power=30, cost=15)
    attacker = _character("ゆういちん", ElementType.FIRE, moves=(move,))
    defender = _character("みどりん", ElementType.GRASS)
    state = _battle(attacker, defender)

    result = combat.attack(state, dm.PLAYER_ONE, move, rng=sequence_source([0.3]))

    assert result.success
    assert 51 <= result.damage <= 69
    assert 31 <= defender.current_hp <= 49
    assert defender.current_hp == 100 - result.damage
    assert result.multiplier == 2.0
    assert not result.defeated
    assert attacker.current_resource == 85
    assert state.current_turn == dm.PLAYER_TWO
    assert state.battle_log[0] == "ゆういちんの火炎放射！"
    assert SUPER_EFFECTIVE in state.battle_log
    assert state.battle_log[-1] == f"みどりんに{result.damage}のダメージ！"


def test_not_very_effective_and_neutral_log_lines():
    move = dm.Move("たいあたり", power=20)
    state = _battle(
        _character("ほのか", ElementType.FIRE, moves=(move,)),
        _character("うみん", ElementType.WATER),
    )

    combat.attack(state, dm.PLAYER_ONE, move, rng=MIDPOINT)

    assert state.battle_log == ["ほのかのたいあたり！", NOT_VERY_EFFECTIVE, "うみんに10のダメージ！"]

    state.battle_log.clear()
    state.current_turn = dm.PLAYER_ONE
    state.team(dm.PLAYER_TWO).members[0].element = ElementType.FIRE

    combat.attack(state, dm.PLAYER_ONE, move, rng=MIDPOINT)

    assert state.battle_log == ["ほのかのたいあたり！", "うみんに20のダメージ！"]


def test_zero_power_attack_deals_no_damage_and_draws_nothing():
    move = dm.Move("にらみつける", power=0)
    defender = _character("うみん", ElementType.WATER)
    state = _battle(_character("しゅうじん", ElementType.ELECTRIC), defender)

    result = combat.attack(state, dm.PLAYER_ONE, move, rng=_never_called)

    assert result.success
    assert result.damage == 0
    assert defender.current_hp == 100
    assert "うみんに0のダメージ！" in state.battle_log


def test_out_of_turn_attack_changes_nothing():
    move = dm.Move("火炎放射", power=30, cost=15)
    state = _battle(
        _character("ゆういちん", ElementType.FIRE), _character("みどりん", ElementType.GRASS)
    )
    state.current_turn = dm.PLAYER_TWO
    snapshot = copy.deepcopy(state)

    result = combat.attack(state, dm.PLAYER_ONE, move, rng=_never_called)

    assert not result.success
    assert result.error is BattleError.NOT_YOUR_TURN
    assert result.detail == "あなたのターンではありません"
    assert state == snapshot


def test_insufficient_resource_changes_nothing():
    move = dm.Move("火柱", power=45, cost=30)
    state = _battle(
        _character("ゆういちん", ElementType.FIRE, resource=29),
        _character("みどりん", ElementType.GRASS),
    )
    snapshot = copy.deepcopy(state)

    result = combat.attack(state, dm.PLAYER_ONE, move, rng=_never_called)

    assert result.error is BattleError.INSUFFICIENT_RESOURCE
    assert state == snapshot


def test_attack_requires_full_rosters():
    state = dm.MatchState()
    state.team(dm.PLAYER_ONE).members = [_character("solo", ElementType.FIRE)]

    result = combat.attack(state, dm.PLAYER_ONE, dm.Move("x", 10), rng=_never_called)

    assert result.error is BattleError.INCOMPLETE_ROSTER


def test_attack_rejected_once_match_is_over():
    state = _battle(_character("a", ElementType.FIRE), _character("b", ElementType.GRASS))
    state.is_game_over = True

    result = combat.attack(state, dm.PLAYER_ONE, dm.Move("x", 10), rng=_never_called)

    assert result.error is BattleError.MATCH_OVER


def test_invalid_player_attack():
    state = _battle(_character("a", ElementType.FIRE), _character("b", ElementType.GRASS))

    result = combat.attack(state, dm.PlayerID(0), dm.Move("x", 10), rng=_never_called)

    assert result.error is BattleError.INVALID_PLAYER


def test_faint_switches_to_lowest_living_member():
    move = dm.Move("たいあたり", power=10)
    defender = _character("先鋒", ElementType.UNCLASSIFIED, hp=100)
    defender.current_hp = 1
    fallen = _character("次鋒", ElementType.UNCLASSIFIED)
    fallen.current_hp = 0
    anchor = _character("大将", ElementType.UNCLASSIFIED)
    anchor.current_resource = 50
    state = _battle(
        _character("攻撃役", ElementType.UNCLASSIFIED),
        defender,
        defender_bench=[fallen, anchor],
    )

    result = combat.attack(state, dm.PLAYER_ONE, move, rng=MIDPOINT)

    assert result.success
    assert result.defeated
    assert result.replacement == "大将"
    assert defender.current_hp == 0
    assert state.team(dm.PLAYER_TWO).active_index == 2
    assert state.battle_log[-2:] == ["先鋒は倒れた！", "大将が出てきた！"]
    assert anchor.current_resource == 70
    assert state.current_turn == dm.PLAYER_TWO


def test_faint_without_replacement_leaves_active_on_fainted():
    move = dm.Move("たいあたり", power=10)
    defender = _character("最後", ElementType.UNCLASSIFIED)
    defender.current_hp = 1
    defender.current_resource = 10
    bench = [
        _character("b1", ElementType.UNCLASSIFIED),
        _character("b2", ElementType.UNCLASSIFIED),
    ]
    for member in bench:
        member.current_hp = 0
    state = _battle(_character("攻撃役", ElementType.UNCLASSIFIED), defender, defender_bench=bench)

    result = combat.attack(state, dm.PLAYER_ONE, move, rng=MIDPOINT)

    assert result.defeated
    assert result.replacement is None
    assert state.team(dm.PLAYER_TWO).active_index == 0
    assert state.team(dm.PLAYER_TWO).is_wiped
    assert state.battle_log[-1] == "最後は倒れた！"
    assert defender.current_resource == 30
    assert not state.is_game_over


def test_defender_recovers_resource_without_faint_and_is_capped():
    move = dm.Move("たいあたり", power=10)
    defender = _character("うみん", ElementType.WATER)
    defender.current_resource = 95
    state = _battle(_character("a", ElementType.UNCLASSIFIED), defender)

    combat.attack(state, dm.PLAYER_ONE, move, rng=MIDPOINT)

    assert defender.current_resource == 100


def test_overkill_clamps_health_at_zero():
    move = dm.Move("火柱", power=45)
    defender = _character("しゅうじん", ElementType.UNCLASSIFIED)
    defender.current_hp = 25
    state = _battle(_character("a", ElementType.UNCLASSIFIED), defender)

    result = combat.attack(state, dm.PLAYER_ONE, move, rng=MIDPOINT)

    assert result.damage == 45
    assert defender.current_hp == 0
    assert result.defeated


def test_repeated_attacks_accumulate_and_alternate_turns():
    move = dm.Move("テスト攻撃", power=20)
    first = _character("ゆういちん", ElementType.UNCLASSIFIED, hp=120)
    second = _character("しゅうじん", ElementType.UNCLASSIFIED, hp=110)
    state = _battle(first, second)

    combat.attack(state, dm.PLAYER_ONE, move, rng=MIDPOINT)
    assert second.current_hp == 90
    combat.attack(state, dm.PLAYER_TWO, move, rng=MIDPOINT)
    assert first.current_hp == 100
    combat.attack(state, dm.PLAYER_ONE, move, rng=MIDPOINT)
    assert second.current_hp == 70
    assert state.current_turn == dm.PLAYER_TWO


def test_fainted_attacker_cannot_act():
    attacker = _character("倒れた", ElementType.FIRE)
    state = _battle(attacker, _character("みどりん", ElementType.GRASS))
    for member in state.team(dm.PLAYER_ONE).members:
        member.current_hp = 0
    snapshot = copy.deepcopy(state)

    result = combat.attack(state, dm.PLAYER_ONE, dm.Move("hit", 10), rng=_never_called)

    assert result.error is BattleError.TARGET_FAINTED
    assert state == snapshot


def test_negative_cost_is_reported_not_raised():
    state = _battle(_character("a", ElementType.FIRE), _character("b", ElementType.GRASS))
    snapshot = copy.deepcopy(state)

    result = combat.attack(state, dm.PLAYER_ONE, dm.Move("bad", 10, -5), rng=_never_called)

    assert not result.success
    assert result.error is BattleError.INVALID_MOVE
    assert state == snapshot
