"""Dataclasses describing catalog templates and live match state.

Templates are immutable catalog entries.  Everything a match mutates
(characters, teams, the battle log) hangs off a single :class:`MatchState`
that the caller constructs and passes into every rule function; nothing in
the domain keeps a module-level match.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import NewType

from .enums import ElementType

PlayerID = NewType("PlayerID", int)

PLAYER_ONE = PlayerID(1)
PLAYER_TWO = PlayerID(2)
PLAYERS: tuple[PlayerID, ...] = (PLAYER_ONE, PLAYER_TWO)


def is_valid_player(player: int) -> bool:
    return player in PLAYERS


def opponent_of(player: PlayerID) -> PlayerID:
    """Return the other player id."""

    return PLAYER_TWO if player == PLAYER_ONE else PLAYER_ONE


@dataclass(slots=True)
class Move:
    """An attack a character can use."""

    name: str
    power: int
    cost: int = 0


@dataclass(frozen=True, slots=True)
class CharacterTemplate:
    """Catalog entry a battle character is copied from."""

    id: str
    name: str
    element: ElementType
    max_hp: int
    max_resource: int = 100
    moves: tuple[Move, ...] = ()
    image: str | None = None


@dataclass(slots=True)
class BattleCharacter:
    """A character instance owned by exactly one team slot."""

    template_id: str
    name: str
    element: ElementType
    max_hp: int
    max_resource: int
    moves: list[Move]
    current_hp: int
    current_resource: int
    image: str | None = None

    @classmethod
    def from_template(cls, template: CharacterTemplate) -> BattleCharacter:
        """Build a fresh character with full pools and its own move list."""

        return cls(
            template_id=template.id,
            name=template.name,
            element=template.element,
            max_hp=template.max_hp,
            max_resource=template.max_resource,
            moves=[replace(move) for move in template.moves],
            current_hp=template.max_hp,
            current_resource=template.max_resource,
            image=template.image,
        )

    @property
    def is_fainted(self) -> bool:
        return self.current_hp <= 0


@dataclass(slots=True)
class Team:
    """A player's roster and the slot currently in combat."""

    members: list[BattleCharacter] = field(default_factory=list)
    active_index: int = 0

    @property
    def active(self) -> BattleCharacter | None:
        if 0 <= self.active_index < len(self.members):
            return self.members[self.active_index]
        return None

    @property
    def is_wiped(self) -> bool:
        """True when the roster is non-empty and every member has fainted."""

        return bool(self.members) and all(member.is_fainted for member in self.members)

    def first_living_index(self) -> int | None:
        for index, member in enumerate(self.members):
            if not member.is_fainted:
                return index
        return None


@dataclass(slots=True)
class MatchState:
    """Everything a single match owns.

    The catalog survives :func:`trioduel.domain.match.reset_match`; teams,
    turn, flags and the log do not. Rosters are locked while
    ``battle_started`` is set.
    """

    catalog: tuple[CharacterTemplate, ...] = ()
    teams: dict[PlayerID, Team] = field(
        default_factory=lambda: {player: Team() for player in PLAYERS}
    )
    current_turn: PlayerID = PLAYER_ONE
    is_game_over: bool = False
    winner: PlayerID | None = None
    battle_started: bool = False
    battle_log: list[str] = field(default_factory=list)

    def team(self, player: PlayerID) -> Team:
        return self.teams[player]

    def find_template(self, template_id: str) -> CharacterTemplate | None:
        for template in self.catalog:
            if template.id == template_id:
                return template
        return None
