"""
SquadLab Stat Vectors and Power Formula

Every character carries seven base attributes.  Seven "power" statistics are
derived from them through one fixed weighting table; nothing else in the
package is allowed to derive power on its own.

Usage:
    from squadlab.stats import BaseStats, compute_power

    base = BaseStats(kick=90, control=70, technique=60, pressure=55,
                     physical=65, agility=80, intelligence=50)
    power = compute_power(base)
    # → PowerStats(shootAT=125.0, focusAT=95.0, ...)
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, List, Mapping


BASE_ATTRIBUTE_KEYS: List[str] = [
    "kick",
    "control",
    "technique",
    "pressure",
    "physical",
    "agility",
    "intelligence",
]

POWER_STAT_KEYS: List[str] = [
    "shootAT",
    "focusAT",
    "focusDF",
    "wallDF",
    "scrambleAT",
    "scrambleDF",
    "kp",
]

# ═══════════════════════════════════════════════════════════════
# POWER FORMULA: game balance constants
# power_stat: {base_attribute: weight}
# ═══════════════════════════════════════════════════════════════

POWER_COEFFICIENTS: Dict[str, Dict[str, float]] = {
    "shootAT":    {"kick": 1.0, "control": 0.5},
    "focusAT":    {"technique": 1.0, "control": 0.5},
    "focusDF":    {"intelligence": 1.0, "technique": 0.5},
    "wallDF":     {"physical": 1.0, "pressure": 0.5},
    "scrambleAT": {"agility": 1.0, "physical": 0.5},
    "scrambleDF": {"pressure": 1.0, "agility": 0.5},
    "kp":         {"physical": 1.0, "pressure": 1.0, "agility": 0.5},
}


# ──────────────────────────────────────────────
# BASE ATTRIBUTES
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class BaseStats:
    """The seven base attributes.  ``total`` is always their sum."""
    kick: float = 0
    control: float = 0
    technique: float = 0
    pressure: float = 0
    physical: float = 0
    agility: float = 0
    intelligence: float = 0

    @property
    def total(self) -> float:
        return sum(getattr(self, key) for key in BASE_ATTRIBUTE_KEYS)

    def get(self, key: str) -> float:
        return getattr(self, key)

    def to_dict(self) -> dict:
        d = {key: getattr(self, key) for key in BASE_ATTRIBUTE_KEYS}
        d["total"] = self.total
        return d

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "BaseStats":
        # "total" is re-derived, never read.
        return cls(**{key: values.get(key, 0) for key in BASE_ATTRIBUTE_KEYS})


# ──────────────────────────────────────────────
# POWER STATS
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class PowerStats:
    """Derived battle statistics.  Never edited directly."""
    shootAT: float = 0
    focusAT: float = 0
    focusDF: float = 0
    wallDF: float = 0
    scrambleAT: float = 0
    scrambleDF: float = 0
    kp: float = 0

    @classmethod
    def empty(cls) -> "PowerStats":
        return cls()

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "PowerStats":
        return cls(**{key: values.get(key, 0) for key in POWER_STAT_KEYS})

    def copy(self) -> "PowerStats":
        return PowerStats(**self.to_dict())

    def get(self, key: str) -> float:
        return getattr(self, key)

    def __add__(self, other: "PowerStats") -> "PowerStats":
        if not isinstance(other, PowerStats):
            return NotImplemented
        return PowerStats(**{
            f.name: getattr(self, f.name) + getattr(other, f.name)
            for f in fields(self)
        })

    def to_dict(self) -> dict:
        return {key: getattr(self, key) for key in POWER_STAT_KEYS}


def compute_power(base: BaseStats) -> PowerStats:
    """Map base attributes to power stats.

    Total over finite inputs: zero or negative attributes simply produce
    zero or negative power.
    """
    power = {}
    for stat_key, weights in POWER_COEFFICIENTS.items():
        power[stat_key] = sum(base.get(attr) * weight for attr, weight in weights.items())
    return PowerStats(**power)


def empty_attribute_vector() -> Dict[str, float]:
    return {key: 0 for key in BASE_ATTRIBUTE_KEYS}
