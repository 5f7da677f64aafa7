"""
SquadLab - squad planner stat engine

Computes battle statistics for squads of game characters: base attributes
boosted by slot rarity, equipment and stat beans, derived power stats, and
team-wide passive abilities resolved under a set of match conditions.
"""

from .stats import (
    BASE_ATTRIBUTE_KEYS,
    POWER_STAT_KEYS,
    POWER_COEFFICIENTS,
    BaseStats,
    PowerStats,
    compute_power,
)
from .rarity import SlotRarity, RARITY_ORDER, SLOT_RARITY_OPTIONS, apply_rarity_bonus, get_rarity_definition
from .effects import (
    ConditionType,
    EffectDirection,
    EffectMode,
    EffectScope,
    PassiveStat,
    PassiveEffect,
    PassiveCondition,
    PASSIVE_CONDITION_OPTIONS,
)
from .catalog import (
    Catalog,
    PlayerRecord,
    EquipmentRecord,
    PassiveRecord,
    EquipmentCategory,
    PassiveType,
    load_catalog,
    map_to_team_position,
)
from .slots import (
    Slot,
    SlotKind,
    SlotBean,
    SlotPassive,
    SlotPassives,
    SlotConfig,
    SlotAssignment,
    SlotComputedStats,
    MAX_BEAN_POINTS,
    clamp_bean_value,
    normalize_slot_config,
    merge_slot_config,
    passive_pool_for_slot,
    custom_passive_pool,
)
from .aggregator import compute_slot_computed_stats
from .passives import (
    PassiveOptions,
    DEFAULT_PASSIVE_OPTIONS,
    compute_passive_impacts,
    apply_passive_impacts,
    resolve_targets,
)
from .team_summary import CombinedPassiveEntry, combine_team_passives, replace_passive_placeholders
from .formations import FORMATIONS, EXTRA_TEAM_SLOTS, get_formation
from .squad import SquadState, SquadResult, SquadBook, MAX_SQUADS, build_squad_assignments, compute_squad
from .config import SQUAD_CONFIG, SquadLabError, CatalogError, UnknownFormationError, SquadLimitError

__version__ = "1.0.0"

__all__ = [
    "BASE_ATTRIBUTE_KEYS",
    "POWER_STAT_KEYS",
    "POWER_COEFFICIENTS",
    "BaseStats",
    "PowerStats",
    "compute_power",
    "SlotRarity",
    "RARITY_ORDER",
    "SLOT_RARITY_OPTIONS",
    "apply_rarity_bonus",
    "get_rarity_definition",
    "ConditionType",
    "EffectDirection",
    "EffectMode",
    "EffectScope",
    "PassiveStat",
    "PassiveEffect",
    "PassiveCondition",
    "PASSIVE_CONDITION_OPTIONS",
    "Catalog",
    "PlayerRecord",
    "EquipmentRecord",
    "PassiveRecord",
    "EquipmentCategory",
    "PassiveType",
    "load_catalog",
    "map_to_team_position",
    "Slot",
    "SlotKind",
    "SlotBean",
    "SlotPassive",
    "SlotPassives",
    "SlotConfig",
    "SlotAssignment",
    "SlotComputedStats",
    "MAX_BEAN_POINTS",
    "clamp_bean_value",
    "normalize_slot_config",
    "merge_slot_config",
    "passive_pool_for_slot",
    "custom_passive_pool",
    "compute_slot_computed_stats",
    "PassiveOptions",
    "DEFAULT_PASSIVE_OPTIONS",
    "compute_passive_impacts",
    "apply_passive_impacts",
    "resolve_targets",
    "CombinedPassiveEntry",
    "combine_team_passives",
    "replace_passive_placeholders",
    "FORMATIONS",
    "EXTRA_TEAM_SLOTS",
    "get_formation",
    "SquadState",
    "SquadResult",
    "SquadBook",
    "MAX_SQUADS",
    "build_squad_assignments",
    "compute_squad",
    "SQUAD_CONFIG",
    "SquadLabError",
    "CatalogError",
    "UnknownFormationError",
    "SquadLimitError",
]
