"""Battle log helpers and the player-facing message catalogue.

The log is an append-only list of strings on :class:`MatchState`.  Every
line the engine writes is produced by one of the formatters below so the
wording lives in one place.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from trioduel.domain.enums import BattleError

if TYPE_CHECKING:
    from trioduel.domain.models import MatchState

DEFAULT_RECENT_LIMIT = 15

SUPER_EFFECTIVE = "効果抜群！"
NOT_VERY_EFFECTIVE = "効果いまひとつ..."
BATTLE_START = "バトルスタート！"

ERROR_DETAILS: dict[BattleError, str] = {
    BattleError.INVALID_PLAYER: "プレイヤー番号が不正です",
    BattleError.ROSTER_FULL: "これ以上キャラクターを選べません",
    BattleError.INCOMPLETE_ROSTER: "キャラクターを3体選んでください",
    BattleError.INDEX_OUT_OF_RANGE: "その位置にキャラクターはいません",
    BattleError.NOT_YOUR_TURN: "あなたのターンではありません",
    BattleError.INSUFFICIENT_RESOURCE: "MPが足りません",
    BattleError.TARGET_FAINTED: "そのキャラクターは戦闘不能です",
    BattleError.NO_REPLACEMENT_AVAILABLE: "交代できるキャラクターがいません",
    BattleError.MATCH_OVER: "バトルは終了しています",
    BattleError.UNKNOWN_CHARACTER: "キャラクターが見つかりません",
    BattleError.BATTLE_IN_PROGRESS: "バトル中は編成を変更できません",
    BattleError.INVALID_MOVE: "その技は使えません",
}


def add_battle_log(state: MatchState, message: str) -> None:
    state.battle_log.append(message)


def recent_entries(state: MatchState, limit: int = DEFAULT_RECENT_LIMIT) -> list[str]:
    """Return the newest ``limit`` entries, oldest first."""

    if limit <= 0:
        return []
    return state.battle_log[-limit:]


def error_detail(error: BattleError) -> str:
    return ERROR_DETAILS[error]


def move_used(attacker: str, move: str) -> str:
    return f"{attacker}の{move}！"


def effectiveness_line(
    multiplier: float, *, super_effective: float = 2.0, not_very_effective: float = 0.5
) -> str | None:
    if multiplier == super_effective:
        return SUPER_EFFECTIVE
    if multiplier == not_very_effective:
        return NOT_VERY_EFFECTIVE
    return None


def damage_dealt(defender: str, damage: int) -> str:
    return f"{defender}に{damage}のダメージ！"


def fainted(name: str) -> str:
    return f"{name}は倒れた！"


def sent_out(name: str) -> str:
    return f"{name}が出てきた！"


def switched_in(name: str) -> str:
    return f"{name}に交代！"


def matchup(first: str, second: str) -> str:
    return f"{first} VS {second}！"


def turn_announcement(player: int) -> str:
    return f"プレイヤー{player}のターン！"
