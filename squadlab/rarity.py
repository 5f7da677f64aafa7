"""
SquadLab Slot Rarity

Each formation slot carries a rarity tier.  The tier boosts every base
attribute independently before the total is re-summed and power re-derived.

Ladder (lowest to highest):
  normal → growing → advanced → top → legendary → hero

``normal`` is the identity; each step up adds a percentage of the raw value
plus a flat amount, so the boost never shrinks as the tier climbs.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple, Union


class SlotRarity(Enum):
    NORMAL = "normal"
    GROWING = "growing"
    ADVANCED = "advanced"
    TOP = "top"
    LEGENDARY = "legendary"
    HERO = "hero"


RARITY_ORDER: List[SlotRarity] = [
    SlotRarity.NORMAL,
    SlotRarity.GROWING,
    SlotRarity.ADVANCED,
    SlotRarity.TOP,
    SlotRarity.LEGENDARY,
    SlotRarity.HERO,
]


@dataclass(frozen=True)
class RarityDefinition:
    label: str
    percent: float   # % of the raw attribute added on top
    flat: float      # flat points added after the percentage


RARITY_TABLE: Dict[SlotRarity, RarityDefinition] = {
    SlotRarity.NORMAL:    RarityDefinition("Normal", 0, 0),
    SlotRarity.GROWING:   RarityDefinition("Growing", 5, 2),
    SlotRarity.ADVANCED:  RarityDefinition("Advanced", 10, 4),
    SlotRarity.TOP:       RarityDefinition("Top", 15, 6),
    SlotRarity.LEGENDARY: RarityDefinition("Legendary", 20, 8),
    SlotRarity.HERO:      RarityDefinition("Hero", 25, 10),
}

SLOT_RARITY_OPTIONS: List[Tuple[SlotRarity, str]] = [
    (tier, RARITY_TABLE[tier].label) for tier in RARITY_ORDER
]


def parse_rarity(tier: Union[SlotRarity, str, None]) -> SlotRarity:
    """Coerce a tier or its string value; unknown values fall back to normal."""
    if isinstance(tier, SlotRarity):
        return tier
    try:
        return SlotRarity(tier)
    except ValueError:
        return SlotRarity.NORMAL


def get_rarity_definition(tier: Union[SlotRarity, str, None]) -> RarityDefinition:
    return RARITY_TABLE[parse_rarity(tier)]


def apply_rarity_bonus(value: float, tier: Union[SlotRarity, str, None]) -> float:
    rarity = parse_rarity(tier)
    if rarity is SlotRarity.NORMAL:
        return value
    definition = RARITY_TABLE[rarity]
    return value + value * definition.percent / 100 + definition.flat
