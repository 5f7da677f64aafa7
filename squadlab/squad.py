"""
SquadLab Squad Builder

Turns a squad description (formation, who sits in which slot, per-slot
configuration, passive options) into fully computed slot assignments:

  for every slot:      catalog player × normalised config → aggregator
  if passives enabled: compute_passive_impacts → apply_passive_impacts

The result is a pure function of its inputs; callers decide when to rebuild
and whether to cache.  A ``SquadBook`` keeps up to six named squads in memory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from squadlab.aggregator import compute_slot_computed_stats
from squadlab.catalog import Catalog
from squadlab.config import SQUAD_CONFIG, SquadLimitError
from squadlab.formations import DEFAULT_FORMATION_ID, all_slots, get_formation
from squadlab.passives import (
    DEFAULT_PASSIVE_OPTIONS,
    PassiveOptions,
    apply_passive_impacts,
    compute_passive_impacts,
)
from squadlab.slots import SlotAssignment, normalize_slot_config
from squadlab.team_summary import CombinedPassiveEntry, combine_team_passives

_log = logging.getLogger("squadlab.squad")

MAX_SQUADS = SQUAD_CONFIG["max_squads"]


@dataclass
class SquadState:
    """Caller-owned squad description.  Slot configs may be partial dicts."""
    formation_id: str = DEFAULT_FORMATION_ID
    assignments: Dict[str, Optional[int]] = field(default_factory=dict)
    slot_configs: Dict[str, object] = field(default_factory=dict)
    passive_options: PassiveOptions = DEFAULT_PASSIVE_OPTIONS


@dataclass
class SquadResult:
    assignments: List[SlotAssignment]
    team_passives: List[CombinedPassiveEntry]

    def to_dict(self) -> dict:
        return {
            "slots": [
                {
                    "slot": a.slot.to_dict(),
                    "player": a.player.to_dict() if a.player else None,
                    "config": a.config.to_dict(),
                    "computed": a.computed.to_dict() if a.computed else None,
                }
                for a in self.assignments
            ],
            "team_passives": [e.to_dict() for e in self.team_passives],
        }


def build_squad_assignments(state: SquadState, catalog: Catalog) -> List[SlotAssignment]:
    formation = get_formation(state.formation_id)

    assignments = []
    for slot in all_slots(formation):
        config = normalize_slot_config(state.slot_configs.get(slot.id))
        player_id = state.assignments.get(slot.id)
        player = catalog.get_player(player_id)
        if player_id is not None and player is None:
            _log.debug("Slot %s references unknown player %r", slot.id, player_id)
        computed = compute_slot_computed_stats(player, config, catalog) if player else None
        assignments.append(SlotAssignment(slot=slot, config=config, player=player, computed=computed))

    if not state.passive_options.enabled:
        return assignments

    impacts = compute_passive_impacts(assignments, state.passive_options, catalog)
    if not impacts:
        return assignments
    return apply_passive_impacts(assignments, impacts)


def compute_squad(state: SquadState, catalog: Catalog) -> SquadResult:
    assignments = build_squad_assignments(state, catalog)
    return SquadResult(
        assignments=assignments,
        team_passives=combine_team_passives(assignments, catalog),
    )


def count_assigned_players(assignments: Dict[str, Optional[int]]) -> int:
    return sum(1 for value in (assignments or {}).values() if isinstance(value, int))


class SquadBook:
    """Up to MAX_SQUADS named squads, kept in insertion order."""

    def __init__(self, limit: int = MAX_SQUADS):
        self.limit = limit
        self._squads: Dict[str, SquadState] = {}

    def __len__(self) -> int:
        return len(self._squads)

    def __contains__(self, name: str) -> bool:
        return name in self._squads

    def names(self) -> List[str]:
        return list(self._squads)

    def get(self, name: str) -> SquadState:
        return self._squads[name]

    def add(self, name: str, state: Optional[SquadState] = None) -> SquadState:
        if name not in self._squads and len(self._squads) >= self.limit:
            raise SquadLimitError(self.limit)
        self._squads[name] = state if state is not None else SquadState()
        return self._squads[name]

    def remove(self, name: str) -> None:
        self._squads.pop(name, None)
