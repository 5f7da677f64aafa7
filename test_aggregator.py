"""
Slot Stat Aggregator Tests
==========================

Per-slot rarity, equipment and stat bean folding, plus slot config
normalisation.
"""

import pytest

from squadlab.aggregator import compute_slot_computed_stats
from squadlab.catalog import Catalog, EquipmentCategory, EquipmentRecord, PlayerRecord
from squadlab.rarity import SlotRarity, apply_rarity_bonus
from squadlab.slots import (
    MAX_BEAN_POINTS,
    SlotBean,
    SlotConfig,
    clamp_bean_value,
    merge_slot_config,
    normalize_slot_beans,
    normalize_slot_config,
    normalize_slot_passives,
)
from squadlab.stats import BASE_ATTRIBUTE_KEYS, BaseStats, compute_power


def make_player(player_id=1, **stats) -> PlayerRecord:
    base = BaseStats(**{key: stats.get(key, 50) for key in BASE_ATTRIBUTE_KEYS})
    return PlayerRecord(id=player_id, name=f"Player {player_id}", stats=base,
                        power=compute_power(base), position="FW", element="Fire")


BOOTS = EquipmentRecord(id="boots-1", name="Spikes", category=EquipmentCategory.BOOTS,
                        stats=BaseStats(kick=12, agility=6))
WEIGHTS = EquipmentRecord(id="misc-1", name="Weights", category=EquipmentCategory.MISC,
                          stats=BaseStats(physical=10, agility=-4))

CATALOG = Catalog.from_records(players=[make_player()], equipments=[BOOTS, WEIGHTS])


# ═══════════════════════════════════════════════════════════════
# AGGREGATION
# ═══════════════════════════════════════════════════════════════

class TestSlotAggregation:
    def test_empty_config_matches_raw(self):
        player = make_player(kick=90, control=70)
        computed = compute_slot_computed_stats(player, SlotConfig(), CATALOG)
        assert computed.base == player.stats
        assert computed.power == player.power
        assert computed.final_power == computed.power
        assert all(v == 0 for v in computed.passive_bonuses.to_dict().values())
        assert all(v == 0 for v in computed.equipment_bonuses.values())
        assert all(v == 0 for v in computed.bean_bonuses.values())

    def test_idempotent(self):
        player = make_player()
        config = normalize_slot_config({
            "rarity": "top",
            "equipments": {"boots": "boots-1"},
            "beans": [{"attribute": "kick", "value": 40}],
        })
        assert compute_slot_computed_stats(player, config, CATALOG) == \
            compute_slot_computed_stats(player, config, CATALOG)

    def test_rarity_applies_per_attribute(self):
        player = make_player(kick=80)
        config = normalize_slot_config({"rarity": "hero"})
        computed = compute_slot_computed_stats(player, config, CATALOG)
        assert computed.base.kick == pytest.approx(apply_rarity_bonus(80, SlotRarity.HERO))
        assert computed.base.total == pytest.approx(
            sum(apply_rarity_bonus(player.stats.get(k), SlotRarity.HERO) for k in BASE_ATTRIBUTE_KEYS))

    def test_equipment_bonuses_sum(self):
        player = make_player()
        config = normalize_slot_config({"equipments": {"boots": "boots-1", "misc": "misc-1"}})
        computed = compute_slot_computed_stats(player, config, CATALOG)
        assert computed.equipment_bonuses["kick"] == 12
        assert computed.equipment_bonuses["agility"] == 2
        assert computed.equipment_bonuses["physical"] == 10
        assert computed.base.kick == 62
        assert computed.base.agility == 52

    def test_unknown_equipment_ignored(self):
        player = make_player()
        config = normalize_slot_config({"equipments": {"boots": "boots-404"}})
        computed = compute_slot_computed_stats(player, config, CATALOG)
        assert computed.base == player.stats

    def test_beans_stack_on_same_attribute(self):
        player = make_player()
        config = normalize_slot_config({"beans": [
            {"attribute": "kick", "value": 30},
            {"attribute": "kick", "value": 20},
            {"attribute": None, "value": 80},
        ]})
        computed = compute_slot_computed_stats(player, config, CATALOG)
        assert computed.bean_bonuses["kick"] == 50
        assert computed.base.kick == 100
        assert sum(computed.bean_bonuses.values()) == 50

    def test_power_follows_final_base(self):
        player = make_player()
        config = normalize_slot_config({"rarity": "advanced", "equipments": {"boots": "boots-1"},
                                        "beans": [{"attribute": "control", "value": 10}]})
        computed = compute_slot_computed_stats(player, config, CATALOG)
        assert computed.power == compute_power(computed.base)

    def test_order_rarity_before_equipment(self):
        player = make_player(kick=100)
        config = normalize_slot_config({"rarity": "growing", "equipments": {"boots": "boots-1"}})
        computed = compute_slot_computed_stats(player, config, CATALOG)
        # 100 * 1.05 + 2, then +12 from the boots (which are not boosted)
        assert computed.base.kick == pytest.approx(119)


# ═══════════════════════════════════════════════════════════════
# BEANS
# ═══════════════════════════════════════════════════════════════

class TestBeans:
    @pytest.mark.parametrize("raw, expected", [
        (-5, 0),
        (0, 0),
        (10.4, 10),
        (10.5, 11),
        (198, 198),
        (250, MAX_BEAN_POINTS),
        (float("nan"), 0),
        (float("inf"), 0),
        ("abc", 0),
        (None, 0),
    ])
    def test_clamp(self, raw, expected):
        assert clamp_bean_value(raw) == expected

    def test_normalize_pads_to_three(self):
        beans = normalize_slot_beans([{"attribute": "kick", "value": 12}])
        assert len(beans) == 3
        assert beans[0] == SlotBean("kick", 12)
        assert beans[1] == SlotBean()

    def test_normalize_drops_bad_attribute(self):
        beans = normalize_slot_beans([{"attribute": "speed", "value": 12}])
        assert beans[0].attribute is None
        assert beans[0].value == 12


# ═══════════════════════════════════════════════════════════════
# SLOT CONFIG
# ═══════════════════════════════════════════════════════════════

class TestSlotConfig:
    def test_defaults(self):
        config = normalize_slot_config(None)
        assert config.rarity is SlotRarity.NORMAL
        assert set(config.equipments) == set(EquipmentCategory)
        assert all(v is None for v in config.equipments.values())
        assert len(config.passives.presets) == 5

    def test_unknown_rarity_and_category_dropped(self):
        config = normalize_slot_config({"rarity": "mythic", "equipments": {"hats": "hat-1"}})
        assert config.rarity is SlotRarity.NORMAL
        assert "hats" not in {c.value for c in config.equipments}

    def test_passives_accept_camel_case_ids(self):
        passives = normalize_slot_passives({"presets": [{"passiveId": "player-1", "value": "7"}]})
        assert passives.presets[0].passive_id == "player-1"
        assert passives.presets[0].value == 7
        assert passives.custom.passive_id is None

    def test_merge_keeps_other_categories(self):
        base = normalize_slot_config({"equipments": {"boots": "boots-1"}})
        merged = merge_slot_config(base, {"equipments": {"misc": "misc-1"}, "rarity": "hero"})
        assert merged.equipments[EquipmentCategory.BOOTS] == "boots-1"
        assert merged.equipments[EquipmentCategory.MISC] == "misc-1"
        assert merged.rarity is SlotRarity.HERO
        assert base.rarity is SlotRarity.NORMAL

    def test_to_dict_uses_plain_values(self):
        d = normalize_slot_config({"rarity": "top"}).to_dict()
        assert d["rarity"] == "top"
        assert set(d["equipments"]) == {"boots", "bracelets", "pendants", "misc"}
        assert len(d["beans"]) == 3

    def test_configs_usable_as_cache_keys(self):
        raw = {"rarity": "top", "equipments": {"boots": "boots-1"},
               "beans": [{"attribute": "kick", "value": 40}],
               "passives": {"presets": [{"passive_id": "player-1", "value": 10}]}}
        first = normalize_slot_config(raw)
        second = normalize_slot_config(raw)
        assert hash(first) == hash(second)
        cache = {first: "cached"}
        assert cache[second] == "cached"
        assert normalize_slot_config({**raw, "rarity": "hero"}) not in cache
        assert hash(SlotConfig()) == hash(normalize_slot_config(None))
