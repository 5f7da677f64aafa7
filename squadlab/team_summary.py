"""
SquadLab Team Passive Summary

Display-oriented roll-up of every passive configured across a squad.  Unlike
the resolver this ignores conditions, the enabled switch and zero values: it
reports what is configured, not what is currently firing.

Entries are merged by description text, since distinct passive ids (strong
and weak variants of one ability) often share the same wording.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List

from squadlab.catalog import Catalog
from squadlab.slots import SlotAssignment, SlotKind

_PLACEHOLDER_RE = re.compile(r"\+%|-%")


@dataclass
class CombinedPassiveEntry:
    description: str
    total_value: float
    count: int
    rendered_description: str = ""

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "total_value": self.total_value,
            "count": self.count,
            "rendered_description": self.rendered_description,
        }


def format_number(value: float) -> str:
    """Integers without decimals, anything else with at most two."""
    rounded = round(value, 2)
    if float(rounded).is_integer():
        return str(int(rounded))
    return f"{rounded:.2f}".rstrip("0").rstrip(".")


def format_signed_percent(value: float) -> str:
    prefix = "+" if value >= 0 else "-"
    return f"{prefix}{format_number(abs(value))}%"


def format_opposite_percent(value: float) -> str:
    prefix = "-" if value >= 0 else "+"
    return f"{prefix}{format_number(abs(value))}%"


def replace_passive_placeholders(description: str, total_value: float) -> str:
    """Fill ``+%`` with the signed total and ``-%`` with its inverse."""
    if not description:
        return ""
    return _PLACEHOLDER_RE.sub(
        lambda m: format_signed_percent(total_value) if m.group(0) == "+%"
        else format_opposite_percent(total_value),
        description,
    )


def combine_team_passives(assignments: Iterable[SlotAssignment],
                          catalog: Catalog) -> List[CombinedPassiveEntry]:
    combined: Dict[str, CombinedPassiveEntry] = {}

    for assignment in assignments:
        if assignment.slot.kind is SlotKind.RESERVE:
            continue
        for slot_passive in assignment.config.passives.all_entries():
            if not slot_passive.passive_id:
                continue
            passive = catalog.get_passive(slot_passive.passive_id)
            if passive is None or not passive.description:
                continue
            entry = combined.get(passive.description)
            if entry is None:
                combined[passive.description] = CombinedPassiveEntry(
                    description=passive.description,
                    total_value=slot_passive.value,
                    count=1,
                )
            else:
                entry.total_value += slot_passive.value
                entry.count += 1

    entries = sorted(combined.values(), key=lambda e: (-abs(e.total_value), e.description))
    for entry in entries:
        entry.rendered_description = replace_passive_placeholders(entry.description, entry.total_value)
    return entries
