"""
SquadLab Catalog - Base Dataset Loader
======================================

Reads the bundled static dataset (players, equipment, passives) into
immutable records and indexes them by id.

Layout under the data directory:
  players.json
  equipments.json
  passives/player.json
  passives/manager.json
  passives/coordinator.json
  passives/custom.json

A ``Catalog`` is built once at startup and handed to every engine call that
needs to resolve an id.  Nothing here is module-global.

Usage:
    from squadlab.catalog import load_catalog

    catalog = load_catalog()
    player = catalog.get_player(12)
    passive = catalog.get_passive("player-3")
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from squadlab.config import DATA_DIR, CatalogError
from squadlab.effects import PassiveEffect
from squadlab.stats import BASE_ATTRIBUTE_KEYS, BaseStats, PowerStats, compute_power

_log = logging.getLogger("squadlab.catalog")

PASSIVE_FILES = ("player", "manager", "coordinator", "custom")

BUILD_TYPES = ("roughplay", "bond", "justice", "tension", "counter", "breach")

# Raw player JSON column → BaseStats field
_PLAYER_STAT_COLUMNS = {
    "Kick": "kick",
    "Control": "control",
    "Technique": "technique",
    "Pressure": "pressure",
    "Physical": "physical",
    "Agility": "agility",
    "Intelligence": "intelligence",
}


class EquipmentCategory(Enum):
    BOOTS = "boots"
    BRACELETS = "bracelets"
    PENDANTS = "pendants"
    MISC = "misc"


class PassiveType(Enum):
    PLAYER = "player"
    MANAGER = "manager"
    COORDINATOR = "coordinator"
    CUSTOM = "custom"


# ═══════════════════════════════════════════════════════════════
# NORMALISATION HELPERS
# ═══════════════════════════════════════════════════════════════

def sanitize_attribute(value) -> str:
    if value is None:
        return "Unknown"
    text = str(value).strip()
    return text or "Unknown"


def normalize_stat(value) -> float:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(numeric):
        return 0
    return int(numeric) if numeric.is_integer() else numeric


def normalize_optional_number(value) -> Optional[float]:
    if value is None:
        return None
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(numeric):
        return None
    return int(numeric) if numeric.is_integer() else numeric


def normalize_element(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def normalize_build_type(value: Optional[str]) -> str:
    if not value or not isinstance(value, str):
        return "unknown"
    cleaned = value.strip().lower()
    return cleaned if cleaned in BUILD_TYPES else "unknown"


def map_to_team_position(position: Optional[str]) -> str:
    """Collapse a raw position label to GK / DF / MD / FW (or a staff bucket)."""
    normalized = (position or "").strip().upper()
    if normalized.startswith("RESERVE"):
        return "RESERVE"
    if normalized == "MANAGER":
        return "MANAGER"
    if normalized.startswith("COORDINATOR"):
        return "COORDINATOR"
    return {
        "GK": "GK",
        "DF": "DF",
        "FW": "FW",
        "MF": "MD",
        "MD": "MD",
    }.get(normalized, "MD")


# ═══════════════════════════════════════════════════════════════
# RECORDS
# ═══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PlayerRecord:
    id: int
    name: str
    stats: BaseStats
    power: PowerStats
    nickname: str = ""
    game: str = ""
    position: str = ""
    element: str = ""
    role: str = ""
    gender: str = ""
    age_group: str = ""
    year: str = ""
    image: str = ""
    how_to_obtain: str = ""
    affinity: str = "unknown"

    @classmethod
    def from_raw(cls, raw: dict) -> "PlayerRecord":
        stats = BaseStats.from_mapping({
            field_name: normalize_stat(raw.get(column))
            for column, field_name in _PLAYER_STAT_COLUMNS.items()
        })
        return cls(
            id=int(raw["id"]),
            name=sanitize_attribute(raw.get("Name")),
            nickname=sanitize_attribute(raw.get("Nickname")),
            game=sanitize_attribute(raw.get("Game")),
            position=sanitize_attribute(raw.get("Position")),
            element=sanitize_attribute(raw.get("Element")),
            role=sanitize_attribute(raw.get("Role")),
            gender=sanitize_attribute(raw.get("Gender")),
            age_group=sanitize_attribute(raw.get("Age group")),
            year=sanitize_attribute(raw.get("Year")),
            image=raw.get("Image") or "",
            how_to_obtain=(raw.get("HowToObtainMarkdown") or "").strip(),
            affinity=normalize_build_type(raw.get("Affinity")),
            stats=stats,
            power=compute_power(stats),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "nickname": self.nickname,
            "game": self.game,
            "position": self.position,
            "element": self.element,
            "role": self.role,
            "gender": self.gender,
            "age_group": self.age_group,
            "year": self.year,
            "image": self.image,
            "how_to_obtain": self.how_to_obtain,
            "affinity": self.affinity,
            "stats": self.stats.to_dict(),
            "power": self.power.to_dict(),
        }


@dataclass(frozen=True)
class EquipmentRecord:
    id: str
    name: str
    category: EquipmentCategory
    stats: BaseStats
    shop: str = ""

    @classmethod
    def from_raw(cls, raw: dict) -> "EquipmentRecord":
        stats_raw = raw.get("stats") or {}
        return cls(
            id=str(raw["id"]),
            name=sanitize_attribute(raw.get("name")),
            category=EquipmentCategory(raw["category"]),
            shop=(raw.get("shop") or "").strip(),
            stats=BaseStats.from_mapping({key: normalize_stat(stats_raw.get(key, 0))
                                          for key in BASE_ATTRIBUTE_KEYS}),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "shop": self.shop,
            "stats": self.stats.to_dict(),
        }


@dataclass(frozen=True)
class PassiveRecord:
    id: str
    number: int
    type: PassiveType
    description: str
    build_type: Optional[str] = None
    strong_value: Optional[float] = None
    weak_value: Optional[float] = None
    effects: Tuple[PassiveEffect, ...] = field(default_factory=tuple)

    @classmethod
    def from_raw(cls, raw: dict) -> Optional["PassiveRecord"]:
        """Parse one raw passive; None when it has no description or an unknown type."""
        if raw.get("description") is None:
            return None
        number = raw.get("number")
        if not isinstance(number, int) or isinstance(number, bool):
            return None
        try:
            passive_type = PassiveType(raw.get("type"))
        except ValueError:
            return None
        return cls(
            id=f"{passive_type.value}-{number}",
            number=number,
            type=passive_type,
            build_type=raw.get("buildType"),
            description=sanitize_attribute(raw.get("description")),
            strong_value=normalize_optional_number(raw.get("strongValue")),
            weak_value=normalize_optional_number(raw.get("weakValue")),
            effects=tuple(PassiveEffect.from_dict(e) for e in (raw.get("effects") or [])),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "number": self.number,
            "type": self.type.value,
            "build_type": self.build_type,
            "description": self.description,
            "strong_value": self.strong_value,
            "weak_value": self.weak_value,
            "effects": [
                {
                    "scope": e.scope.value if e.scope else None,
                    "stat": e.stat.value if e.stat else None,
                    "mode": e.mode.value,
                    "direction": e.direction.value,
                    "conditions": [c.raw_type for c in e.conditions],
                }
                for e in self.effects
            ],
        }


# ═══════════════════════════════════════════════════════════════
# CATALOG
# ═══════════════════════════════════════════════════════════════

class Catalog:
    """Read-only lookup over the three datasets."""

    def __init__(self, players: Iterable[PlayerRecord],
                 equipments: Iterable[EquipmentRecord],
                 passives: Iterable[PassiveRecord]):
        self._players: Tuple[PlayerRecord, ...] = tuple(players)
        self._equipments: Tuple[EquipmentRecord, ...] = tuple(equipments)
        self._passives: Tuple[PassiveRecord, ...] = tuple(
            sorted(passives, key=lambda p: (p.type.value, p.description))
        )
        self._players_by_id = {p.id: p for p in self._players}
        self._equipments_by_id = {e.id: e for e in self._equipments}
        self._passives_by_id = {p.id: p for p in self._passives}

    @classmethod
    def from_records(cls, players=(), equipments=(), passives=()) -> "Catalog":
        return cls(players, equipments, passives)

    @property
    def players(self) -> Tuple[PlayerRecord, ...]:
        return self._players

    @property
    def equipments(self) -> Tuple[EquipmentRecord, ...]:
        return self._equipments

    @property
    def passives(self) -> Tuple[PassiveRecord, ...]:
        return self._passives

    def get_player(self, player_id) -> Optional[PlayerRecord]:
        if player_id is None:
            return None
        return self._players_by_id.get(player_id)

    def get_equipment(self, equipment_id) -> Optional[EquipmentRecord]:
        if not equipment_id:
            return None
        return self._equipments_by_id.get(equipment_id)

    def get_passive(self, passive_id) -> Optional[PassiveRecord]:
        if not passive_id:
            return None
        return self._passives_by_id.get(passive_id)

    def passives_by_type(self, passive_type: Union[PassiveType, str]) -> List[PassiveRecord]:
        wanted = PassiveType(passive_type)
        return [p for p in self._passives if p.type is wanted]

    def equipments_by_category(self, category: Union[EquipmentCategory, str]) -> List[EquipmentRecord]:
        wanted = EquipmentCategory(category)
        return [e for e in self._equipments if e.category is wanted]

    def player_general_passives(self) -> List[PassiveRecord]:
        return [p for p in self.passives_by_type(PassiveType.PLAYER) if p.build_type is None]

    def player_build_passives(self) -> List[PassiveRecord]:
        return [p for p in self.passives_by_type(PassiveType.PLAYER) if p.build_type is not None]

    def counts(self) -> Dict[str, int]:
        return {
            "players": len(self._players),
            "equipments": len(self._equipments),
            "passives": len(self._passives),
        }


# ──────────────────────────────────────────────
# LOADING
# ──────────────────────────────────────────────

def _read_json(path: Path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise CatalogError(f"Data file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Malformed JSON in {path}: {e}") from e


def parse_players(raw_players: Iterable[dict]) -> List[PlayerRecord]:
    players = []
    for raw in raw_players:
        if raw.get("Name") == "???":
            _log.debug("Skipping placeholder player %s", raw.get("id"))
            continue
        players.append(PlayerRecord.from_raw(raw))
    return players


def parse_equipments(raw_equipments: Iterable[dict]) -> List[EquipmentRecord]:
    equipments = []
    for raw in raw_equipments:
        try:
            equipments.append(EquipmentRecord.from_raw(raw))
        except (KeyError, ValueError):
            _log.debug("Skipping equipment with bad id/category: %r", raw.get("id"))
    return equipments


def parse_passives(raw_passives: Iterable[dict]) -> List[PassiveRecord]:
    passives = []
    for raw in raw_passives:
        record = PassiveRecord.from_raw(raw)
        if record is None:
            _log.debug("Skipping passive %s-%s", raw.get("type"), raw.get("number"))
            continue
        passives.append(record)
    return passives


def load_catalog(data_dir: Optional[Union[str, Path]] = None) -> Catalog:
    """Load every bundled dataset from ``data_dir`` (defaults to DATA_DIR)."""
    root = Path(data_dir) if data_dir is not None else DATA_DIR

    players = parse_players(_read_json(root / "players.json"))
    equipments = parse_equipments(_read_json(root / "equipments.json"))

    raw_passives: List[dict] = []
    for name in PASSIVE_FILES:
        raw_passives.extend(_read_json(root / "passives" / f"{name}.json"))
    passives = parse_passives(raw_passives)

    catalog = Catalog(players, equipments, passives)
    _log.info("Loaded catalog from %s: %d players, %d equipments, %d passives",
              root, len(players), len(equipments), len(passives))
    return catalog
