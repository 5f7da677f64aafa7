"""
SquadLab Report Tables

pandas views over computed squads, for the CLI report and any notebook or
dashboard that wants a DataFrame instead of dataclasses.

Available tables:
    squad_stats_frame(assignments)
        - One row per slot holding a player: final base attributes and,
          per power stat, the pre-passive value, passive bonus and final value

    team_passives_frame(entries)
        - One row per combined team passive

    attribute_breakdown_frame(computed)
        - One row per base attribute: boosted base, equipment, beans, final
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from squadlab.slots import SlotAssignment, SlotComputedStats
from squadlab.stats import BASE_ATTRIBUTE_KEYS, POWER_STAT_KEYS
from squadlab.team_summary import CombinedPassiveEntry


def squad_stats_frame(assignments: Iterable[SlotAssignment]) -> pd.DataFrame:
    rows = []
    for a in assignments:
        if a.player is None or a.computed is None:
            continue
        row = {
            "slot": a.slot.id,
            "kind": a.slot.kind.value,
            "player": a.player.name,
            "position": a.player.position,
            "element": a.player.element,
            "rarity": a.config.rarity.value,
        }
        base = a.computed.base.to_dict()
        for key in BASE_ATTRIBUTE_KEYS:
            row[key] = base[key]
        row["total"] = base["total"]
        for key in POWER_STAT_KEYS:
            row[key] = a.computed.power.get(key)
            row[f"{key}_passive"] = a.computed.passive_bonuses.get(key)
            row[f"{key}_final"] = a.computed.final_power.get(key)
        rows.append(row)
    columns = (["slot", "kind", "player", "position", "element", "rarity"]
               + BASE_ATTRIBUTE_KEYS + ["total"]
               + [c for key in POWER_STAT_KEYS for c in (key, f"{key}_passive", f"{key}_final")])
    return pd.DataFrame(rows, columns=columns)


def team_passives_frame(entries: Iterable[CombinedPassiveEntry]) -> pd.DataFrame:
    rows = [
        {
            "Passive": e.rendered_description or e.description,
            "Total": e.total_value,
            "Sources": e.count,
        }
        for e in entries
    ]
    return pd.DataFrame(rows, columns=["Passive", "Total", "Sources"])


def attribute_breakdown_frame(computed: SlotComputedStats) -> pd.DataFrame:
    rows = []
    for key in BASE_ATTRIBUTE_KEYS:
        final = computed.base.get(key)
        equipment = computed.equipment_bonuses[key]
        beans = computed.bean_bonuses[key]
        rows.append({
            "attribute": key,
            "base": final - equipment - beans,
            "equipment": equipment,
            "beans": beans,
            "final": final,
        })
    return pd.DataFrame(rows, columns=["attribute", "base", "equipment", "beans", "final"]).set_index("attribute")
