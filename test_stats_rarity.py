"""
Stat Vector, Power Formula and Rarity Tests
===========================================
"""

import math

import pytest

from squadlab.rarity import (
    RARITY_ORDER,
    RARITY_TABLE,
    SLOT_RARITY_OPTIONS,
    SlotRarity,
    apply_rarity_bonus,
    get_rarity_definition,
    parse_rarity,
)
from squadlab.stats import (
    BASE_ATTRIBUTE_KEYS,
    POWER_COEFFICIENTS,
    POWER_STAT_KEYS,
    BaseStats,
    PowerStats,
    compute_power,
)


SAMPLE = BaseStats(kick=10, control=20, technique=30, pressure=40,
                   physical=50, agility=60, intelligence=70)


# ═══════════════════════════════════════════════════════════════
# BASE STATS
# ═══════════════════════════════════════════════════════════════

class TestBaseStats:
    def test_total_is_sum(self):
        assert SAMPLE.total == 280

    def test_to_dict_carries_total(self):
        d = SAMPLE.to_dict()
        assert d["total"] == sum(d[key] for key in BASE_ATTRIBUTE_KEYS)

    def test_from_mapping_ignores_total(self):
        stats = BaseStats.from_mapping({"kick": 5, "total": 999})
        assert stats.kick == 5
        assert stats.total == 5

    def test_missing_keys_default_to_zero(self):
        assert BaseStats.from_mapping({}).total == 0


# ═══════════════════════════════════════════════════════════════
# POWER FORMULA
# ═══════════════════════════════════════════════════════════════

class TestPowerFormula:
    def test_every_power_key_has_coefficients(self):
        assert set(POWER_COEFFICIENTS) == set(POWER_STAT_KEYS)
        for weights in POWER_COEFFICIENTS.values():
            assert set(weights) <= set(BASE_ATTRIBUTE_KEYS)

    def test_known_values(self):
        power = compute_power(SAMPLE)
        assert power.shootAT == 20
        assert power.focusAT == 40
        assert power.focusDF == 85
        assert power.wallDF == 70
        assert power.scrambleAT == 85
        assert power.scrambleDF == 70
        assert power.kp == 120

    def test_deterministic(self):
        assert compute_power(SAMPLE) == compute_power(SAMPLE)

    def test_zero_attributes_give_zero_power(self):
        power = compute_power(BaseStats())
        assert all(value == 0 for value in power.to_dict().values())

    def test_negative_attributes_allowed(self):
        power = compute_power(BaseStats(kick=-10))
        assert power.shootAT == -10

    @pytest.mark.parametrize("attribute", BASE_ATTRIBUTE_KEYS)
    def test_monotonic_in_each_attribute(self, attribute):
        before = compute_power(SAMPLE)
        raised = BaseStats.from_mapping({**SAMPLE.to_dict(), attribute: SAMPLE.get(attribute) + 15})
        after = compute_power(raised)
        for key in POWER_STAT_KEYS:
            assert after.get(key) >= before.get(key)


class TestPowerStats:
    def test_addition_is_per_key(self):
        a = PowerStats(shootAT=1, kp=2)
        b = PowerStats(shootAT=3, wallDF=4)
        total = a + b
        assert total.shootAT == 4
        assert total.kp == 2
        assert total.wallDF == 4

    def test_copy_is_equal(self):
        power = compute_power(SAMPLE)
        assert power.copy() == power

    def test_empty_has_every_key(self):
        assert list(PowerStats.empty().to_dict()) == POWER_STAT_KEYS


# ═══════════════════════════════════════════════════════════════
# RARITY
# ═══════════════════════════════════════════════════════════════

class TestRarity:
    def test_order_and_options(self):
        assert RARITY_ORDER[0] is SlotRarity.NORMAL
        assert RARITY_ORDER[-1] is SlotRarity.HERO
        assert [tier for tier, _ in SLOT_RARITY_OPTIONS] == RARITY_ORDER

    @pytest.mark.parametrize("value", [0, 1, 55.5, 120, -8])
    def test_normal_is_identity(self, value):
        assert apply_rarity_bonus(value, SlotRarity.NORMAL) == value

    def test_known_values(self):
        assert apply_rarity_bonus(100, SlotRarity.GROWING) == pytest.approx(107)
        assert apply_rarity_bonus(100, SlotRarity.HERO) == pytest.approx(135)

    def test_accepts_string_tiers(self):
        assert apply_rarity_bonus(100, "legendary") == apply_rarity_bonus(100, SlotRarity.LEGENDARY)

    def test_unknown_tier_falls_back_to_normal(self):
        assert parse_rarity("mythic") is SlotRarity.NORMAL
        assert parse_rarity(None) is SlotRarity.NORMAL
        assert apply_rarity_bonus(50, "mythic") == 50
        assert get_rarity_definition("mythic") == RARITY_TABLE[SlotRarity.NORMAL]

    @pytest.mark.parametrize("value", [0, 10, 64, 99, 150])
    def test_monotonic_across_ladder(self, value):
        boosted = [apply_rarity_bonus(value, tier) for tier in RARITY_ORDER]
        assert boosted == sorted(boosted)

    def test_never_below_raw_for_non_negative(self):
        for tier in RARITY_ORDER:
            assert apply_rarity_bonus(42, tier) >= 42

    def test_results_finite(self):
        for tier in RARITY_ORDER:
            assert math.isfinite(apply_rarity_bonus(1e6, tier))
