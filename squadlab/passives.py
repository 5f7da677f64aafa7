"""
SquadLab Passive Effect Resolver
================================

Team-wide resolution of configured passives into per-slot power deltas.

For every non-reserve slot that has a player and computed stats, each of its
six passive entries (five presets + custom) is resolved against the catalog.
Each effect of the passive is then:

  1. dropped if its stat group has no power-stat meaning,
  2. dropped unless every one of its conditions is currently active,
  3. expanded to a list of target slots according to its scope,
  4. turned into a delta per target: flat amounts as-is, percentages of the
     target's pre-passive ``power`` (never of an already-boosted value),
  5. summed into the delta map under the target's slot id.

Because every percentage is taken against pre-passive power and all deltas
are plain sums, the result does not depend on slot or passive order.

Usage:
    from squadlab.passives import PassiveOptions, compute_passive_impacts

    options = PassiveOptions(enabled=True, active_conditions={"tensionAtLeast50"})
    impacts = compute_passive_impacts(assignments, options, catalog)
    # → {"player-1": PowerStats(...), ...}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Iterable, List, Optional

from squadlab.catalog import Catalog, PlayerRecord, map_to_team_position, normalize_element
from squadlab.effects import (
    ConditionType,
    EffectDirection,
    EffectMode,
    EffectScope,
    PassiveCondition,
    PassiveEffect,
    PassiveStat,
    parse_condition_type,
)
from squadlab.slots import SlotAssignment, SlotComputedStats, SlotKind
from squadlab.stats import PowerStats

_log = logging.getLogger("squadlab.passives")

ATTACK_POWER_KEYS = ["shootAT", "focusAT", "scrambleAT"]
DEFENSE_POWER_KEYS = ["focusDF", "scrambleDF", "wallDF"]

# Stat groups the resolver understands; anything else is ignored.
PASSIVE_STAT_KEYS: Dict[PassiveStat, List[str]] = {
    PassiveStat.SHOT_AT: ["shootAT"],
    PassiveStat.FOCUS: ["focusAT", "focusDF"],
    PassiveStat.SCRAMBLE: ["scrambleAT", "scrambleDF"],
    PassiveStat.WALL_DF: ["wallDF"],
    PassiveStat.AT: ATTACK_POWER_KEYS,
    PassiveStat.DF: DEFENSE_POWER_KEYS,
    PassiveStat.KP: ["kp"],
    PassiveStat.ALL: [*ATTACK_POWER_KEYS, *DEFENSE_POWER_KEYS, "kp"],
}

# Fixed-position scopes: every entry in that position, source included.
_POSITION_SCOPES = {
    EffectScope.ALLIED_MF: "MD",
    EffectScope.ALLIED_DF: "DF",
    EffectScope.ALLIED_GK: "GK",
}


@dataclass(frozen=True)
class PassiveOptions:
    enabled: bool = False
    active_conditions: FrozenSet[ConditionType] = field(default_factory=frozenset)

    def __post_init__(self):
        parsed = frozenset(
            c for c in (parse_condition_type(raw) for raw in self.active_conditions)
            if c is not None
        )
        object.__setattr__(self, "active_conditions", parsed)

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "active_conditions": sorted(c.value for c in self.active_conditions),
        }


DEFAULT_PASSIVE_OPTIONS = PassiveOptions()


@dataclass(frozen=True)
class ActiveEntry:
    """A slot that can source or receive passive effects."""
    slot_id: str
    player: PlayerRecord
    computed: SlotComputedStats
    assignment: SlotAssignment
    element: str
    position: str


# ═══════════════════════════════════════════════════════════════
# RESOLUTION
# ═══════════════════════════════════════════════════════════════

def collect_active_entries(assignments: Iterable[SlotAssignment]) -> List[ActiveEntry]:
    entries = []
    for assignment in assignments:
        if assignment.slot.kind is SlotKind.RESERVE:
            continue
        if assignment.player is None or assignment.computed is None:
            continue
        entries.append(ActiveEntry(
            slot_id=assignment.slot.id,
            player=assignment.player,
            computed=assignment.computed,
            assignment=assignment,
            element=normalize_element(assignment.player.element),
            position=map_to_team_position(assignment.player.position),
        ))
    return entries


def resolve_targets(scope: Optional[EffectScope], source: ActiveEntry,
                    entries: List[ActiveEntry]) -> List[ActiveEntry]:
    others = [e for e in entries if e.slot_id != source.slot_id]

    if scope is EffectScope.SELF:
        return [source]
    if scope is EffectScope.TEAM:
        return list(entries)
    if scope is EffectScope.ALLIES_SAME_ELEMENT:
        return [e for e in others if e.element and e.element == source.element]
    if scope is EffectScope.ALLIES_DIFFERENT_ELEMENT:
        return [e for e in others if e.element != source.element]
    if scope is EffectScope.ALLIES_SAME_POSITION:
        return [e for e in others if e.position == source.position]
    if scope is EffectScope.ALLIES_DIFFERENT_POSITION:
        return [e for e in others if e.position != source.position]
    if scope in _POSITION_SCOPES:
        wanted = _POSITION_SCOPES[scope]
        return [e for e in entries if e.position == wanted]
    if scope is EffectScope.SUBBED_ON_PLAYER:
        # In-match substitutions are not modelled.
        return []
    # NEARBY_ALLIES and unrecognised scopes
    return others


def conditions_satisfied(conditions: Iterable[PassiveCondition],
                         active_conditions: FrozenSet[ConditionType]) -> bool:
    return all(c.type in active_conditions for c in conditions)


def compute_effect_delta(effect: PassiveEffect, value: float,
                         target_power: PowerStats) -> Optional[PowerStats]:
    """Delta for one effect on one target, or None when it contributes nothing."""
    stat_keys = PASSIVE_STAT_KEYS.get(effect.stat)
    if not stat_keys:
        return None
    signed_value = value * (-1 if effect.direction is EffectDirection.DECREASE else 1)
    if signed_value == 0:
        return None

    delta = PowerStats.empty().to_dict()
    for key in stat_keys:
        if effect.mode is EffectMode.PERCENT:
            delta[key] += target_power.get(key) * signed_value / 100
        else:
            delta[key] += signed_value
    return PowerStats(**delta)


def compute_passive_impacts(assignments: Iterable[SlotAssignment], options: PassiveOptions,
                            catalog: Catalog) -> Dict[str, PowerStats]:
    """Resolve every configured passive across the squad into a delta map."""
    if not options.enabled:
        return {}

    entries = collect_active_entries(assignments)
    if not entries:
        return {}

    impacts: Dict[str, PowerStats] = {}

    for source in entries:
        for slot_passive in source.assignment.config.passives.all_entries():
            if not slot_passive.passive_id or slot_passive.value == 0:
                continue
            passive = catalog.get_passive(slot_passive.passive_id)
            if passive is None:
                _log.debug("Slot %s references unknown passive %r",
                           source.slot_id, slot_passive.passive_id)
                continue
            if not passive.effects:
                continue

            for effect in passive.effects:
                if effect.stat not in PASSIVE_STAT_KEYS:
                    continue
                if not conditions_satisfied(effect.conditions, options.active_conditions):
                    continue

                for target in resolve_targets(effect.scope, source, entries):
                    delta = compute_effect_delta(effect, slot_passive.value, target.computed.power)
                    if delta is None:
                        continue
                    impacts[target.slot_id] = impacts.get(target.slot_id, PowerStats.empty()) + delta

    return impacts


def apply_passive_impacts(assignments: Iterable[SlotAssignment],
                          impacts: Dict[str, PowerStats]) -> List[SlotAssignment]:
    """Return assignments whose computed stats carry the resolved passive deltas."""
    result = []
    for assignment in assignments:
        if assignment.player is None or assignment.computed is None:
            result.append(assignment)
            continue
        # Slots without a delta drop any bonus left over from an earlier pass.
        bonuses = impacts.get(assignment.slot.id, PowerStats.empty())
        computed = replace(
            assignment.computed,
            passive_bonuses=bonuses.copy(),
            final_power=assignment.computed.power + bonuses,
        )
        result.append(replace(assignment, computed=computed))
    return result
