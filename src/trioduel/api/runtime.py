"""Runtime primitives backing the trioduel HTTP API."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from trioduel.config import Settings, get_settings
from trioduel.domain import match as match_rules
from trioduel.domain.combat import attack
from trioduel.domain.enums import BattleError
from trioduel.domain.judge import check_game_over
from trioduel.domain.match import hp_percentage
from trioduel.domain.models import (
    BattleCharacter,
    CharacterTemplate,
    MatchState,
    PlayerID,
    is_valid_player,
)
from trioduel.domain.results import ActionResult, AttackResult
from trioduel.domain.roster import add_character_by_id, confirm_roster, remove_character
from trioduel.domain.rules_config import DEFAULT_RULES, RulesConfig
from trioduel.domain.switching import switch_character
from trioduel.repository import JsonCatalogRepository
from trioduel.utils.rng import RandomSource, generate_seed, seeded_source, system_source

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MatchSession:
    """A match plus the random source its attacks draw from."""

    id: int
    state: MatchState
    rng: RandomSource
    seed: str | None = None


class MatchService:
    """In-memory registry of hot-seat matches sharing one catalog."""

    def __init__(
        self,
        catalog: tuple[CharacterTemplate, ...],
        *,
        base_seed: str | None = None,
        rules: RulesConfig = DEFAULT_RULES,
    ) -> None:
        self.catalog = catalog
        self._base_seed = base_seed
        self._rules = rules
        self._sessions: dict[int, MatchSession] = {}
        self._next_id = 1

    def create_match(self, *, seed: str | None = None) -> MatchSession:
        """Open a new match. An explicit ``seed`` overrides the configured base seed."""

        match_id = self._next_id
        self._next_id += 1

        if seed is None and self._base_seed is not None:
            seed = generate_seed(self._base_seed, match_id)
        rng = seeded_source(seed) if seed is not None else system_source()

        session = MatchSession(
            id=match_id,
            state=match_rules.new_match(self.catalog),
            rng=rng,
            seed=seed,
        )
        self._sessions[match_id] = session
        logger.info("match %d created (seeded=%s)", match_id, seed is not None)
        return session

    def get(self, match_id: int) -> MatchSession:
        """Return a session or raise ``KeyError``."""

        try:
            return self._sessions[match_id]
        except KeyError:
            raise KeyError(f"match {match_id} not found") from None

    def discard(self, match_id: int) -> None:
        self.get(match_id)
        del self._sessions[match_id]

    def clear(self) -> None:
        self._sessions.clear()

    def add_character(self, match_id: int, player: PlayerID, template_id: str) -> ActionResult:
        state = self.get(match_id).state
        return add_character_by_id(state, player, template_id, rules=self._rules)

    def remove_character(self, match_id: int, player: PlayerID, index: int) -> ActionResult:
        return remove_character(self.get(match_id).state, player, index)

    def confirm(self, match_id: int, player: PlayerID) -> ActionResult:
        return confirm_roster(self.get(match_id).state, player, rules=self._rules)

    def start(self, match_id: int) -> ActionResult:
        result = match_rules.start_battle(self.get(match_id).state, rules=self._rules)
        if result.success:
            logger.info("match %d started", match_id)
        return result

    def attack(self, match_id: int, player: PlayerID, move_index: int) -> AttackResult:
        """Attack with the active character's move at ``move_index``."""

        session = self.get(match_id)
        state = session.state
        if not is_valid_player(player):
            return AttackResult.fail(BattleError.INVALID_PLAYER)
        if state.is_game_over:
            return AttackResult.fail(BattleError.MATCH_OVER)
        if state.current_turn != player:
            return AttackResult.fail(BattleError.NOT_YOUR_TURN)
        active = match_rules.active_character(state, player)
        if active is None:
            return AttackResult.fail(BattleError.INCOMPLETE_ROSTER)
        if not 0 <= move_index < len(active.moves):
            return AttackResult.fail(BattleError.INDEX_OUT_OF_RANGE)

        result = attack(
            state,
            player,
            active.moves[move_index],
            rng=session.rng,
            rules=self._rules,
        )
        if result.success:
            self._after_action(session, defeated=result.defeated)
        return result

    def switch(self, match_id: int, player: PlayerID, index: int) -> ActionResult:
        session = self.get(match_id)
        result = switch_character(session.state, player, index)
        if result.success:
            self._after_action(session, defeated=False)
        return result

    def reset(self, match_id: int) -> None:
        match_rules.reset_match(self.get(match_id).state)
        logger.info("match %d reset", match_id)

    def _after_action(self, session: MatchSession, *, defeated: bool) -> None:
        verdict = check_game_over(session.state)
        if verdict.is_game_over:
            logger.info("match %d finished: winner=%s", session.id, verdict.winner)
        elif not defeated:
            match_rules.announce_turn(session.state)

    @staticmethod
    def to_character_dict(character: BattleCharacter) -> dict[str, object]:
        return {
            "template_id": character.template_id,
            "name": character.name,
            "element": str(character.element),
            "image": character.image,
            "current_hp": character.current_hp,
            "max_hp": character.max_hp,
            "hp_percentage": hp_percentage(character.current_hp, character.max_hp),
            "current_resource": character.current_resource,
            "max_resource": character.max_resource,
            "fainted": character.is_fainted,
            "moves": [
                {"name": move.name, "power": move.power, "cost": move.cost}
                for move in character.moves
            ],
        }

    @staticmethod
    def to_template_dict(template: CharacterTemplate) -> dict[str, object]:
        return {
            "id": template.id,
            "name": template.name,
            "element": str(template.element),
            "image": template.image,
            "max_hp": template.max_hp,
            "max_resource": template.max_resource,
            "moves": [
                {"name": move.name, "power": move.power, "cost": move.cost}
                for move in template.moves
            ],
        }

    def to_detail_dict(self, session: MatchSession, *, log_limit: int) -> dict[str, object]:
        """Return a JSON-compatible view of a match for clients."""

        state = session.state
        return {
            "id": session.id,
            "current_turn": int(state.current_turn),
            "is_game_over": state.is_game_over,
            "winner": int(state.winner) if state.winner is not None else None,
            "battle_started": state.battle_started,
            "teams": {
                str(int(player)): {
                    "active_index": team.active_index,
                    "members": [self.to_character_dict(member) for member in team.members],
                }
                for player, team in state.teams.items()
            },
            "log": match_rules.recent_log(state, log_limit),
        }


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self, *, settings: Settings | None = None, rules: RulesConfig = DEFAULT_RULES
    ) -> None:
        self.settings = settings or get_settings()
        self.repository = JsonCatalogRepository(self.settings.catalog_path)
        self.rules = rules
        catalog = self.repository.load()
        if not catalog:
            logger.warning("catalog %s is empty", self.settings.catalog_path)
        self.matches = MatchService(catalog, base_seed=self.settings.rng_seed, rules=rules)

    async def shutdown(self) -> None:
        self.matches.clear()


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
