"""
SquadLab API
FastAPI wrapper around the squadlab stat engine
"""

import logging
import os
import sys
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
from squadlab import (
    FORMATIONS,
    PASSIVE_CONDITION_OPTIONS,
    SLOT_RARITY_OPTIONS,
    Catalog,
    CatalogError,
    EquipmentCategory,
    PassiveOptions,
    PassiveType,
    SquadState,
    UnknownFormationError,
    compute_squad,
    get_formation,
    load_catalog,
)
from squadlab.rarity import RARITY_TABLE

_log = logging.getLogger("squadlab.api")

app = FastAPI(title="SquadLab API", version="1.0.0")

_catalog: Optional[Catalog] = None


def get_catalog() -> Catalog:
    """Catalog loaded once per process; overridable in tests."""
    global _catalog
    if _catalog is None:
        try:
            _catalog = load_catalog()
        except CatalogError as e:
            _log.error("Could not load catalog: %s", e)
            raise HTTPException(status_code=500, detail=str(e))
    return _catalog


class BeanRequest(BaseModel):
    attribute: Optional[str] = None
    value: float = 80


class SlotPassiveRequest(BaseModel):
    passive_id: Optional[str] = None
    value: float = 0


class SlotPassivesRequest(BaseModel):
    presets: List[SlotPassiveRequest] = []
    custom: Optional[SlotPassiveRequest] = None


class SlotConfigRequest(BaseModel):
    rarity: str = "normal"
    equipments: Dict[str, Optional[str]] = {}
    beans: List[BeanRequest] = []
    passives: Optional[SlotPassivesRequest] = None


class PassiveOptionsRequest(BaseModel):
    enabled: bool = False
    active_conditions: List[str] = []


class ComputeSquadRequest(BaseModel):
    formation_id: str = FORMATIONS[0].id
    assignments: Dict[str, Optional[int]] = {}
    slot_configs: Dict[str, SlotConfigRequest] = {}
    passive_options: PassiveOptionsRequest = PassiveOptionsRequest()


def _slot_config_payload(req: SlotConfigRequest) -> dict:
    passives = None
    if req.passives is not None:
        passives = {
            "presets": [p.model_dump() for p in req.passives.presets],
            "custom": req.passives.custom.model_dump() if req.passives.custom else None,
        }
    return {
        "rarity": req.rarity,
        "equipments": dict(req.equipments),
        "beans": [b.model_dump() for b in req.beans],
        "passives": passives,
    }


@app.get("/api/health")
def health_check(catalog: Catalog = Depends(get_catalog)):
    return {"status": "ok", **catalog.counts()}


@app.get("/players")
def list_players(catalog: Catalog = Depends(get_catalog)):
    return {"players": [p.to_dict() for p in catalog.players]}


@app.get("/players/{player_id}")
def get_player(player_id: int, catalog: Catalog = Depends(get_catalog)):
    player = catalog.get_player(player_id)
    if player is None:
        raise HTTPException(status_code=404, detail=f"Player {player_id} not found")
    return player.to_dict()


@app.get("/equipments")
def list_equipments(
    category: Optional[str] = Query(None, description="boots, bracelets, pendants or misc"),
    catalog: Catalog = Depends(get_catalog),
):
    if category is None:
        equipments = catalog.equipments
    else:
        try:
            equipments = catalog.equipments_by_category(EquipmentCategory(category))
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Unknown equipment category '{category}'")
    return {"equipments": [e.to_dict() for e in equipments]}


@app.get("/passives")
def list_passives(
    passive_type: Optional[str] = Query(None, alias="type", description="player, manager, coordinator or custom"),
    catalog: Catalog = Depends(get_catalog),
):
    if passive_type is None:
        passives = catalog.passives
    else:
        try:
            passives = catalog.passives_by_type(PassiveType(passive_type))
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Unknown passive type '{passive_type}'")
    return {"passives": [p.to_dict() for p in passives]}


@app.get("/formations")
def list_formations():
    return {"formations": [f.to_dict() for f in FORMATIONS]}


@app.get("/formations/{formation_id}")
def formation_detail(formation_id: str):
    try:
        return get_formation(formation_id).to_dict()
    except UnknownFormationError:
        raise HTTPException(status_code=404, detail=f"Formation '{formation_id}' not found")


@app.get("/conditions")
def list_conditions():
    return {"conditions": [
        {"type": opt.type.value, "label": opt.label, "helper": opt.helper}
        for opt in PASSIVE_CONDITION_OPTIONS
    ]}


@app.get("/rarities")
def list_rarities():
    rarities = []
    for tier, label in SLOT_RARITY_OPTIONS:
        definition = RARITY_TABLE[tier]
        rarities.append({"key": tier.value, "label": label,
                         "percent": definition.percent, "flat": definition.flat})
    return {"rarities": rarities}


@app.post("/squad/compute")
def compute_squad_endpoint(req: ComputeSquadRequest, catalog: Catalog = Depends(get_catalog)):
    state = SquadState(
        formation_id=req.formation_id,
        assignments=dict(req.assignments),
        slot_configs={slot_id: _slot_config_payload(cfg) for slot_id, cfg in req.slot_configs.items()},
        passive_options=PassiveOptions(
            enabled=req.passive_options.enabled,
            active_conditions=frozenset(req.passive_options.active_conditions),
        ),
    )
    try:
        result = compute_squad(state, catalog)
    except UnknownFormationError:
        raise HTTPException(status_code=404, detail=f"Formation '{req.formation_id}' not found")
    return result.to_dict()
