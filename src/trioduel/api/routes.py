"""HTTP routes for the trioduel API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, status
from pydantic import BaseModel, Field

from trioduel.api.runtime import ApiState, MatchSession
from trioduel.domain.battle_log import recent_entries
from trioduel.domain.models import PlayerID
from trioduel.domain.results import ActionResult

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]
PlayerParam = Annotated[int, Path(description="Player number (1 or 2)")]


class MoveView(BaseModel):
    name: str
    power: int
    cost: int


class TemplateView(BaseModel):
    id: str
    name: str
    element: str
    image: str | None
    max_hp: int
    max_resource: int
    moves: list[MoveView]


class CharacterView(BaseModel):
    template_id: str
    name: str
    element: str
    image: str | None
    current_hp: int
    max_hp: int
    hp_percentage: float
    current_resource: int
    max_resource: int
    fainted: bool
    moves: list[MoveView]


class TeamView(BaseModel):
    active_index: int
    members: list[CharacterView]


class MatchDetail(BaseModel):
    id: int
    current_turn: int
    is_game_over: bool
    winner: int | None
    battle_started: bool
    teams: dict[str, TeamView]
    log: list[str]


class CreateMatchRequest(BaseModel):
    seed: str | None = Field(default=None, min_length=1)


class AddCharacterRequest(BaseModel):
    template_id: str = Field(min_length=1)


class AttackRequest(BaseModel):
    player: int
    move_index: int = Field(ge=0)


class SwitchRequest(BaseModel):
    player: int
    index: int


class ActionResponse(BaseModel):
    success: bool
    detail: str
    damage: int | None = None
    defeated: bool | None = None
    multiplier: float | None = None
    replacement: str | None = None
    match: MatchDetail


class LogResponse(BaseModel):
    entries: list[str]


def _session(state: ApiState, match_id: int) -> MatchSession:
    try:
        return state.matches.get(match_id)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="match not found"
        ) from exc


def _detail(state: ApiState, session: MatchSession) -> MatchDetail:
    payload = state.matches.to_detail_dict(session, log_limit=state.settings.recent_log_limit)
    return MatchDetail.model_validate(payload)


def _respond(state: ApiState, match_id: int, result: ActionResult) -> ActionResponse:
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": str(result.error), "message": result.detail},
        )
    session = _session(state, match_id)
    return ActionResponse(
        success=True,
        detail=result.detail,
        damage=getattr(result, "damage", None),
        defeated=getattr(result, "defeated", None),
        multiplier=getattr(result, "multiplier", None),
        replacement=getattr(result, "replacement", None),
        match=_detail(state, session),
    )


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "catalog_size": len(state.matches.catalog),
        "seeded": state.settings.rng_seed is not None,
    }


@router.get("/catalog", response_model=list[TemplateView])
async def list_catalog(state: ApiStateDep) -> list[TemplateView]:
    return [
        TemplateView.model_validate(state.matches.to_template_dict(template))
        for template in state.matches.catalog
    ]


@router.post("/matches", response_model=MatchDetail, status_code=status.HTTP_201_CREATED)
async def create_match(request: CreateMatchRequest, state: ApiStateDep) -> MatchDetail:
    session = state.matches.create_match(seed=request.seed)
    return _detail(state, session)


@router.get("/matches/{match_id}", response_model=MatchDetail)
async def get_match(match_id: int, state: ApiStateDep) -> MatchDetail:
    return _detail(state, _session(state, match_id))


@router.delete("/matches/{match_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_match(match_id: int, state: ApiStateDep) -> None:
    _session(state, match_id)
    state.matches.discard(match_id)


@router.post("/matches/{match_id}/players/{player}/roster", response_model=ActionResponse)
async def add_character(
    match_id: int,
    player: PlayerParam,
    request: AddCharacterRequest,
    state: ApiStateDep,
) -> ActionResponse:
    _session(state, match_id)
    result = state.matches.add_character(match_id, PlayerID(player), request.template_id)
    return _respond(state, match_id, result)


@router.delete(
    "/matches/{match_id}/players/{player}/roster/{index}", response_model=ActionResponse
)
async def remove_character(
    match_id: int,
    player: PlayerParam,
    index: int,
    state: ApiStateDep,
) -> ActionResponse:
    _session(state, match_id)
    result = state.matches.remove_character(match_id, PlayerID(player), index)
    return _respond(state, match_id, result)


@router.post("/matches/{match_id}/players/{player}/confirm", response_model=ActionResponse)
async def confirm_roster(match_id: int, player: PlayerParam, state: ApiStateDep) -> ActionResponse:
    _session(state, match_id)
    result = state.matches.confirm(match_id, PlayerID(player))
    return _respond(state, match_id, result)


@router.post("/matches/{match_id}/start", response_model=ActionResponse)
async def start_battle(match_id: int, state: ApiStateDep) -> ActionResponse:
    _session(state, match_id)
    return _respond(state, match_id, state.matches.start(match_id))


@router.post("/matches/{match_id}/attack", response_model=ActionResponse)
async def attack(match_id: int, request: AttackRequest, state: ApiStateDep) -> ActionResponse:
    _session(state, match_id)
    result = state.matches.attack(match_id, PlayerID(request.player), request.move_index)
    return _respond(state, match_id, result)


@router.post("/matches/{match_id}/switch", response_model=ActionResponse)
async def switch(match_id: int, request: SwitchRequest, state: ApiStateDep) -> ActionResponse:
    _session(state, match_id)
    result = state.matches.switch(match_id, PlayerID(request.player), request.index)
    return _respond(state, match_id, result)


@router.post("/matches/{match_id}/reset", response_model=MatchDetail)
async def reset_match(match_id: int, state: ApiStateDep) -> MatchDetail:
    session = _session(state, match_id)
    state.matches.reset(match_id)
    return _detail(state, session)


@router.get("/matches/{match_id}/log", response_model=LogResponse)
async def recent_log(
    match_id: int,
    state: ApiStateDep,
    limit: Annotated[int | None, Query(ge=1, le=200)] = None,
) -> LogResponse:
    session = _session(state, match_id)
    count = limit if limit is not None else state.settings.recent_log_limit
    return LogResponse(entries=recent_entries(session.state, count))
