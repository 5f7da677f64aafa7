"""
SquadLab Slot Stat Aggregator

Per-slot computation: rarity boost, equipment bonuses and stat beans are
folded into the player's base attributes, then power is re-derived through
the shared Power Formula.

Pipeline for each of the seven attributes:
  raw → apply_rarity_bonus → + equipment bonus → + bean bonus = final

``final_power`` starts as a copy of ``power`` and ``passive_bonuses`` at zero;
team-wide passive resolution fills them in afterwards.
"""

import logging

from squadlab.catalog import Catalog, PlayerRecord
from squadlab.rarity import apply_rarity_bonus
from squadlab.slots import SlotComputedStats, SlotConfig, clamp_bean_value
from squadlab.stats import (
    BASE_ATTRIBUTE_KEYS,
    BaseStats,
    PowerStats,
    compute_power,
    empty_attribute_vector,
)

_log = logging.getLogger("squadlab.aggregator")


def compute_slot_computed_stats(player: PlayerRecord, config: SlotConfig,
                                catalog: Catalog) -> SlotComputedStats:
    """Combine a player's raw stats with one slot's configuration.

    Callers must not pass an empty slot.  An unresolvable equipment id is
    skipped exactly like an empty category.
    """
    base_with_rarity = {
        key: apply_rarity_bonus(player.stats.get(key), config.rarity)
        for key in BASE_ATTRIBUTE_KEYS
    }

    equipment_bonuses = empty_attribute_vector()
    for category, equipment_id in config.equipments.items():
        if not equipment_id:
            continue
        equipment = catalog.get_equipment(equipment_id)
        if equipment is None:
            _log.debug("Unknown equipment %r in %s slot ignored", equipment_id, category.value)
            continue
        for key in BASE_ATTRIBUTE_KEYS:
            equipment_bonuses[key] += equipment.stats.get(key)

    bean_bonuses = empty_attribute_vector()
    for bean in config.beans:
        if bean is None or not bean.attribute:
            continue
        bean_bonuses[bean.attribute] += clamp_bean_value(bean.value)

    final_base = BaseStats(**{
        key: base_with_rarity[key] + equipment_bonuses[key] + bean_bonuses[key]
        for key in BASE_ATTRIBUTE_KEYS
    })
    power = compute_power(final_base)

    return SlotComputedStats(
        base=final_base,
        power=power,
        final_power=power.copy(),
        equipment_bonuses=equipment_bonuses,
        bean_bonuses=bean_bonuses,
        passive_bonuses=PowerStats.empty(),
    )
