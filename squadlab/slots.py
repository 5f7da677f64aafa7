"""
SquadLab Slot Configuration

Per-slot state a user edits in the team builder (rarity tier, equipment,
stat beans, passive assignments) plus the ephemeral assignment/computed
records the engine produces from it.

Every helper here returns fresh objects; configurations handed to the engine
are only ever read.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

from squadlab.catalog import Catalog, EquipmentCategory, PassiveRecord, PassiveType, PlayerRecord
from squadlab.config import SQUAD_CONFIG
from squadlab.rarity import SlotRarity, parse_rarity
from squadlab.stats import BASE_ATTRIBUTE_KEYS, BaseStats, PowerStats

MAX_BEAN_POINTS = SQUAD_CONFIG["max_bean_points"]
BEAN_SLOTS_COUNT = SQUAD_CONFIG["bean_slots"]
PRESET_PASSIVE_SLOTS = SQUAD_CONFIG["preset_passive_slots"]


class SlotKind(Enum):
    STARTER = "starter"
    RESERVE = "reserve"
    MANAGER = "manager"
    COORDINATOR = "coordinator"


@dataclass(frozen=True)
class Slot:
    id: str
    label: str
    kind: SlotKind = SlotKind.STARTER
    display_label: Optional[str] = None
    config_scope: str = "full"   # "full" | "rarity-only"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "kind": self.kind.value,
            "display_label": self.display_label or self.label,
            "config_scope": self.config_scope,
        }


# ──────────────────────────────────────────────
# BEANS
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class SlotBean:
    attribute: Optional[str] = None
    value: int = SQUAD_CONFIG["default_bean_value"]


def clamp_bean_value(value) -> int:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(numeric):
        return 0
    # Half-up rounding, matching how the value is typed in.
    rounded = math.floor(numeric + 0.5)
    return min(MAX_BEAN_POINTS, max(0, rounded))


def create_empty_slot_beans() -> Tuple[SlotBean, ...]:
    return tuple(SlotBean() for _ in range(BEAN_SLOTS_COUNT))


def normalize_slot_beans(beans=None) -> Tuple[SlotBean, ...]:
    """Pad/trim to exactly three beans and clamp each value."""
    base = list(create_empty_slot_beans())
    if not beans:
        return tuple(base)
    for index in range(BEAN_SLOTS_COUNT):
        if index >= len(beans) or beans[index] is None:
            continue
        source = beans[index]
        if isinstance(source, SlotBean):
            attribute, value = source.attribute, source.value
        else:
            attribute, value = source.get("attribute"), source.get("value", 0)
        if attribute not in BASE_ATTRIBUTE_KEYS:
            attribute = None
        base[index] = SlotBean(attribute=attribute, value=clamp_bean_value(value if value is not None else 0))
    return tuple(base)


# ──────────────────────────────────────────────
# PASSIVES
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class SlotPassive:
    passive_id: Optional[str] = None
    value: float = 0


@dataclass(frozen=True)
class SlotPassives:
    presets: Tuple[SlotPassive, ...] = field(
        default_factory=lambda: tuple(SlotPassive() for _ in range(PRESET_PASSIVE_SLOTS)))
    custom: SlotPassive = field(default_factory=SlotPassive)

    def all_entries(self) -> List[SlotPassive]:
        """The five presets followed by the custom slot."""
        return [*self.presets, self.custom]


def create_empty_slot_passives() -> SlotPassives:
    return SlotPassives()


def _normalize_slot_passive(source) -> SlotPassive:
    if source is None:
        return SlotPassive()
    if isinstance(source, SlotPassive):
        passive_id, value = source.passive_id, source.value
    else:
        passive_id = source.get("passive_id", source.get("passiveId"))
        value = source.get("value", 0)
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        numeric = 0
    if not math.isfinite(numeric):
        numeric = 0
    numeric = int(numeric) if numeric.is_integer() else numeric
    return SlotPassive(passive_id=passive_id or None, value=numeric)


def normalize_slot_passives(passives=None) -> SlotPassives:
    if passives is None:
        return create_empty_slot_passives()
    if isinstance(passives, SlotPassives):
        presets, custom = list(passives.presets), passives.custom
    else:
        presets, custom = list(passives.get("presets") or []), passives.get("custom")
    normalized = [
        _normalize_slot_passive(presets[i] if i < len(presets) else None)
        for i in range(PRESET_PASSIVE_SLOTS)
    ]
    return SlotPassives(presets=tuple(normalized), custom=_normalize_slot_passive(custom))


def passive_pool_for_slot(kind: SlotKind, catalog: Catalog) -> List[PassiveRecord]:
    """Candidate passives for the preset slots of a given slot kind."""
    if kind is SlotKind.MANAGER:
        return catalog.passives_by_type(PassiveType.MANAGER)
    if kind is SlotKind.COORDINATOR:
        return catalog.passives_by_type(PassiveType.COORDINATOR)
    return catalog.passives_by_type(PassiveType.PLAYER)


def custom_passive_pool(catalog: Catalog) -> List[PassiveRecord]:
    return catalog.passives_by_type(PassiveType.CUSTOM)


# ──────────────────────────────────────────────
# SLOT CONFIG
# ──────────────────────────────────────────────

def create_empty_slot_equipments() -> Dict[EquipmentCategory, Optional[str]]:
    return {category: None for category in EquipmentCategory}


def normalize_slot_equipments_patch(patch=None) -> Dict[EquipmentCategory, Optional[str]]:
    """Keep only recognised categories; keys may be enum members or strings."""
    result = {}
    for key, equipment_id in (patch or {}).items():
        try:
            category = EquipmentCategory(key.value if isinstance(key, EquipmentCategory) else key)
        except ValueError:
            continue
        result[category] = equipment_id or None
    return result


def normalize_slot_equipments(equipments=None) -> Dict[EquipmentCategory, Optional[str]]:
    result = create_empty_slot_equipments()
    result.update(normalize_slot_equipments_patch(equipments))
    return result


@dataclass(frozen=True)
class SlotConfig:
    rarity: SlotRarity = SlotRarity.NORMAL
    equipments: Dict[EquipmentCategory, Optional[str]] = field(default_factory=create_empty_slot_equipments)
    beans: Tuple[SlotBean, ...] = field(default_factory=create_empty_slot_beans)
    passives: SlotPassives = field(default_factory=create_empty_slot_passives)

    def __hash__(self):
        # equipments is a dict, so hash its items in category order
        equipments = tuple(sorted((c.value, eid) for c, eid in self.equipments.items()))
        return hash((self.rarity, equipments, self.beans, self.passives))

    def to_dict(self) -> dict:
        return {
            "rarity": self.rarity.value,
            "equipments": {c.value: eid for c, eid in self.equipments.items()},
            "beans": [{"attribute": b.attribute, "value": b.value} for b in self.beans],
            "passives": {
                "presets": [{"passive_id": p.passive_id, "value": p.value} for p in self.passives.presets],
                "custom": {"passive_id": self.passives.custom.passive_id,
                           "value": self.passives.custom.value},
            },
        }


def normalize_slot_config(config=None) -> SlotConfig:
    """Build a complete SlotConfig from a SlotConfig, a partial dict or None."""
    if config is None:
        return SlotConfig()
    if isinstance(config, SlotConfig):
        return SlotConfig(
            rarity=config.rarity,
            equipments=normalize_slot_equipments(config.equipments),
            beans=normalize_slot_beans(config.beans),
            passives=normalize_slot_passives(config.passives),
        )
    return SlotConfig(
        rarity=parse_rarity(config.get("rarity")),
        equipments=normalize_slot_equipments(config.get("equipments")),
        beans=normalize_slot_beans(config.get("beans")),
        passives=normalize_slot_passives(config.get("passives")),
    )


def merge_slot_config(base: SlotConfig, patch: dict) -> SlotConfig:
    """Apply a partial update; equipment patches merge per category."""
    equipments = dict(base.equipments)
    equipments.update(normalize_slot_equipments_patch(patch.get("equipments")))
    return replace(
        base,
        rarity=parse_rarity(patch["rarity"]) if patch.get("rarity") is not None else base.rarity,
        equipments=equipments,
        beans=normalize_slot_beans(patch["beans"]) if patch.get("beans") is not None else base.beans,
        passives=(normalize_slot_passives(patch["passives"])
                  if patch.get("passives") is not None else base.passives),
    )


# ──────────────────────────────────────────────
# COMPUTED STATS / ASSIGNMENTS
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class SlotComputedStats:
    base: BaseStats
    power: PowerStats
    final_power: PowerStats
    equipment_bonuses: Dict[str, float]
    bean_bonuses: Dict[str, float]
    passive_bonuses: PowerStats

    def to_dict(self) -> dict:
        return {
            "base": self.base.to_dict(),
            "power": self.power.to_dict(),
            "final_power": self.final_power.to_dict(),
            "equipment_bonuses": dict(self.equipment_bonuses),
            "bean_bonuses": dict(self.bean_bonuses),
            "passive_bonuses": self.passive_bonuses.to_dict(),
        }


@dataclass(frozen=True)
class SlotAssignment:
    slot: Slot
    config: SlotConfig
    player: Optional[PlayerRecord] = None
    computed: Optional[SlotComputedStats] = None
