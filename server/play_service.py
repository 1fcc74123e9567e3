"""REST service exposing trick tables to browser clients."""

from __future__ import annotations

import logging
import os
import uuid
from dataclasses import asdict
from typing import Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from engine.registry import DEFAULT_REGISTRY, RuleSetRegistry, UnknownRuleSetError
from engine.service import TableService
from engine.state import RuleSetLocked
from engine.trick import TrickError

log = logging.getLogger(__name__)

RULESETS_ENV = "TRICK_TABLE_RULESETS"
SEATS_ENV = "TRICK_TABLE_SEATS"
DEFAULT_SEATS = ["N", "E", "S", "W"]


class CardPayload(BaseModel):
    rank: Union[str, int]
    suit: str


class StartRequest(BaseModel):
    hands: Dict[str, List[CardPayload]]
    rule_set_id: str = "highest-card"
    turn_order: Optional[List[str]] = None
    lead_policy: str = "winner"


class PlayRequest(BaseModel):
    seat: str
    card: CardPayload


class RuleSetRequest(BaseModel):
    rule_set_id: Optional[str] = None
    index: Optional[int] = Field(None, ge=0)


class TrickPlayPayload(BaseModel):
    seat: str
    card: CardPayload


class ResolveRequest(BaseModel):
    rule_set_id: str
    plays: List[TrickPlayPayload]


def load_registry() -> RuleSetRegistry:
    path = os.environ.get(RULESETS_ENV)
    if not path:
        return DEFAULT_REGISTRY
    try:
        registry = RuleSetRegistry.from_file(path)
    except (OSError, ValueError, ValidationError):
        log.exception("Failed to load rule sets from %s", path)
        raise
    log.info("Loaded %d rule sets from %s", len(registry), path)
    return registry


def default_seats() -> List[str]:
    raw = os.environ.get(SEATS_ENV, "")
    seats = [seat.strip() for seat in raw.split(",") if seat.strip()]
    return seats or list(DEFAULT_SEATS)


registry = load_registry()
tables: Dict[str, TableService] = {}


app = FastAPI(title="Trick Table Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_table(table_id: str) -> TableService:
    try:
        return tables[table_id]
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Table {table_id} not found") from None


@app.get("/rule-sets")
def list_rule_sets() -> List[Dict[str, str]]:
    return registry.summaries()


@app.get("/rule-sets/{rule_set_id}")
def get_rule_set(rule_set_id: str) -> dict:
    try:
        return registry.resolve(rule_set_id).model_dump(mode="json")
    except UnknownRuleSetError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.post("/tables")
def start_table(request: StartRequest) -> dict:
    service = TableService(registry)
    turn_order = request.turn_order
    seats = default_seats()
    if turn_order is None and set(request.hands) <= set(seats):
        turn_order = [seat for seat in seats if seat in request.hands]
    try:
        view = service.start_table(
            {seat: [card.model_dump() for card in cards] for seat, cards in request.hands.items()},
            rule_set_id=request.rule_set_id,
            turn_order=turn_order,
            lead_policy=request.lead_policy,
        )
    except UnknownRuleSetError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (ValueError, RuntimeError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    table_id = uuid.uuid4().hex
    tables[table_id] = service
    log.info("Created table %s", table_id)
    return {"table_id": table_id, "view": asdict(view)}


@app.get("/tables/{table_id}")
def get_table_view(table_id: str, seat: Optional[str] = None) -> dict:
    service = get_table(table_id)
    return asdict(service.get_table_view(seat))


@app.post("/tables/{table_id}/plays")
def play_card(table_id: str, request: PlayRequest) -> dict:
    service = get_table(table_id)
    try:
        result = service.play_card(request.seat, request.card.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if result.status == "rejected":
        log.info("Table %s rejected play by %s: %s", table_id, request.seat, result.reason)
    return {"result": asdict(result), "view": asdict(service.get_table_view())}


@app.put("/tables/{table_id}/rule-set")
def change_rule_set(table_id: str, request: RuleSetRequest) -> dict:
    service = get_table(table_id)
    if (request.rule_set_id is None) == (request.index is None):
        raise HTTPException(status_code=422, detail="Provide exactly one of rule_set_id or index.")
    try:
        if request.rule_set_id is not None:
            view = service.select_rule_set(request.rule_set_id)
        else:
            view = service.select_rule_set_index(request.index)
    except UnknownRuleSetError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except RuleSetLocked as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return asdict(view)


@app.delete("/tables/{table_id}")
def close_table(table_id: str) -> dict:
    get_table(table_id)
    del tables[table_id]
    return {"closed": table_id}


@app.post("/resolve")
def resolve(request: ResolveRequest) -> dict:
    service = TableService(registry)
    try:
        winner = service.resolve(
            [{"seat": play.seat, "card": play.card.model_dump()} for play in request.plays],
            request.rule_set_id,
        )
    except UnknownRuleSetError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (TrickError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return {"winner": winner}
