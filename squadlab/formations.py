"""
SquadLab Formations

Formation definitions as ordered slot lists (slot id + position label).
Pitch geometry belongs to whatever draws the formation and is not kept here.

Every formation exposes eleven starter slots ``player-1`` … ``player-11``;
``EXTRA_TEAM_SLOTS`` adds the reserve bench and the staff slots shared by all
formations.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from squadlab.config import UnknownFormationError
from squadlab.slots import Slot, SlotKind


@dataclass(frozen=True)
class Formation:
    id: str
    name: str
    summary: str
    slots: Tuple[Slot, ...]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "summary": self.summary,
            "slots": [s.to_dict() for s in self.slots],
        }


# formation_id: (name, summary, position labels for player-1 … player-11)
_FORMATION_DATA: Dict[str, Tuple[str, str, str]] = {
    "433-delta": ("4-3-3 Delta",
                  "Aggressive trident up front with staggered mids supporting.",
                  "FW FW FW MF MF MF DF DF DF DF GK"),
    "451-balanced": ("4-5-1 Balanced",
                     "Crowded midfield for possession with lone striker.",
                     "FW MF MF MF MF MF DF DF DF DF GK"),
    "541-double-volante": ("5-4-1 Double Volante",
                           "Five at the back with two holding midfielders.",
                           "FW MF MF MF MF DF DF DF DF DF GK"),
    "361-hexa": ("3-6-1 Hexa",
                 "Six midfielders smother the middle of the pitch.",
                 "FW MF MF MF MF MF MF DF DF DF GK"),
    "352-freedom": ("3-5-2 Freedom",
                    "Two strikers fed by a wide five-man midfield.",
                    "FW FW MF MF MF MF MF DF DF DF GK"),
    "433-triangle": ("4-3-3 Triangle",
                     "Midfield triangle pointing forward behind three attackers.",
                     "FW FW FW MF MF MF DF DF DF DF GK"),
    "442-diamond": ("4-4-2 Diamond",
                    "Diamond midfield linking a strike pair.",
                    "FW MF FW MF MF MF DF DF DF DF GK"),
    "442-box": ("4-4-2 Box",
                "Flat lines of four with a classic strike partnership.",
                "FW FW MF MF MF MF DF DF DF DF GK"),
}


def _build_formation(formation_id: str, name: str, summary: str, labels: str) -> Formation:
    slots = tuple(
        Slot(id=f"player-{index}", label=label, kind=SlotKind.STARTER, display_label=label)
        for index, label in enumerate(labels.split(), start=1)
    )
    return Formation(id=formation_id, name=name, summary=summary, slots=slots)


FORMATIONS: List[Formation] = [
    _build_formation(fid, *data) for fid, data in _FORMATION_DATA.items()
]

FORMATIONS_BY_ID: Dict[str, Formation] = {f.id: f for f in FORMATIONS}

DEFAULT_FORMATION_ID = FORMATIONS[0].id

EXTRA_TEAM_SLOTS: Tuple[Slot, ...] = (
    *(Slot(id=f"reserve-{i}", label="RESERVE", kind=SlotKind.RESERVE,
           display_label=f"Reserve {i}") for i in range(1, 6)),
    Slot(id="manager", label="MANAGER", kind=SlotKind.MANAGER,
         display_label="Manager", config_scope="rarity-only"),
    Slot(id="coordinator-1", label="COORDINATOR", kind=SlotKind.COORDINATOR,
         display_label="Coordinator 1", config_scope="rarity-only"),
    Slot(id="coordinator-2", label="COORDINATOR", kind=SlotKind.COORDINATOR,
         display_label="Coordinator 2", config_scope="rarity-only"),
)

EXTRA_SLOT_IDS: List[str] = [s.id for s in EXTRA_TEAM_SLOTS]


def get_formation(formation_id: str) -> Formation:
    try:
        return FORMATIONS_BY_ID[formation_id]
    except KeyError:
        raise UnknownFormationError(formation_id) from None


def all_slots(formation: Formation) -> List[Slot]:
    """Starter slots followed by the bench and staff."""
    return [*formation.slots, *EXTRA_TEAM_SLOTS]
