"""
Squad Builder and Formation Tests
=================================
"""

import pytest

from squadlab.catalog import load_catalog
from squadlab.config import SquadLimitError, UnknownFormationError
from squadlab.formations import (
    DEFAULT_FORMATION_ID,
    EXTRA_SLOT_IDS,
    FORMATIONS,
    all_slots,
    get_formation,
)
from squadlab.passives import PassiveOptions
from squadlab.report import attribute_breakdown_frame, squad_stats_frame, team_passives_frame
from squadlab.slots import SlotKind
from squadlab.squad import (
    MAX_SQUADS,
    SquadBook,
    SquadState,
    build_squad_assignments,
    compute_squad,
    count_assigned_players,
)
from squadlab.stats import POWER_STAT_KEYS


@pytest.fixture(scope="module")
def catalog():
    return load_catalog()


def make_state(**kwargs) -> SquadState:
    defaults = dict(
        formation_id="433-delta",
        assignments={"player-1": 2, "player-2": 5, "player-7": 4, "player-11": 1,
                     "reserve-1": 9, "manager": 12},
        slot_configs={
            "player-1": {"rarity": "hero",
                         "equipments": {"boots": "boots-1"},
                         "passives": {"presets": [{"passive_id": "player-1", "value": 10}]}},
            "player-7": {"passives": {"presets": [{"passive_id": "player-6", "value": 20}]}},
            "reserve-1": {"passives": {"presets": [{"passive_id": "player-1", "value": 50}]}},
            "manager": {"passives": {"presets": [{"passive_id": "manager-1", "value": 4}]}},
        },
    )
    defaults.update(kwargs)
    return SquadState(**defaults)


# ═══════════════════════════════════════════════════════════════
# FORMATIONS
# ═══════════════════════════════════════════════════════════════

class TestFormations:
    def test_every_formation_has_eleven_starters(self):
        for formation in FORMATIONS:
            assert [s.id for s in formation.slots] == [f"player-{i}" for i in range(1, 12)]
            assert sum(1 for s in formation.slots if s.label == "GK") == 1

    def test_unique_ids(self):
        ids = [f.id for f in FORMATIONS]
        assert len(ids) == len(set(ids))
        assert DEFAULT_FORMATION_ID == ids[0]

    def test_extra_slots(self):
        assert EXTRA_SLOT_IDS == ["reserve-1", "reserve-2", "reserve-3", "reserve-4", "reserve-5",
                                  "manager", "coordinator-1", "coordinator-2"]
        slots = all_slots(get_formation("442-box"))
        assert len(slots) == 19
        staff = [s for s in slots if s.kind in (SlotKind.MANAGER, SlotKind.COORDINATOR)]
        assert all(s.config_scope == "rarity-only" for s in staff)

    def test_unknown_formation(self):
        with pytest.raises(UnknownFormationError) as exc:
            get_formation("1-1-8")
        assert exc.value.formation_id == "1-1-8"


# ═══════════════════════════════════════════════════════════════
# SQUAD BUILD
# ═══════════════════════════════════════════════════════════════

class TestBuildSquad:
    def test_every_slot_present(self, catalog):
        assignments = build_squad_assignments(make_state(), catalog)
        assert len(assignments) == 19
        filled = [a for a in assignments if a.player is not None]
        assert {a.slot.id for a in filled} == {"player-1", "player-2", "player-7", "player-11",
                                                "reserve-1", "manager"}
        assert all(a.computed is not None for a in filled)

    def test_unknown_player_leaves_slot_empty(self, catalog):
        assignments = build_squad_assignments(make_state(assignments={"player-1": 999}), catalog)
        assert assignments[0].player is None
        assert assignments[0].computed is None

    def test_passives_off_by_default(self, catalog):
        for a in build_squad_assignments(make_state(), catalog):
            if a.computed:
                assert a.computed.final_power == a.computed.power

    def test_passives_applied_when_enabled(self, catalog):
        state = make_state(passive_options=PassiveOptions(enabled=True))
        by_slot = {a.slot.id: a for a in build_squad_assignments(state, catalog)}

        striker = by_slot["player-1"].computed
        # Own +10% Shoot AT and the manager's +4% on everything
        assert striker.passive_bonuses.shootAT == pytest.approx(striker.power.shootAT * 0.14)

        defender = by_slot["player-7"].computed
        assert defender.passive_bonuses.wallDF == pytest.approx(20 + defender.power.wallDF * 0.04)

        reserve = by_slot["reserve-1"].computed
        assert reserve.final_power == reserve.power

        for a in by_slot.values():
            if a.computed:
                for key in POWER_STAT_KEYS:
                    assert a.computed.final_power.get(key) == pytest.approx(
                        a.computed.power.get(key) + a.computed.passive_bonuses.get(key))

    def test_unknown_formation_raises(self, catalog):
        with pytest.raises(UnknownFormationError):
            build_squad_assignments(make_state(formation_id="nope"), catalog)

    def test_compute_squad_summary(self, catalog):
        result = compute_squad(make_state(), catalog)
        descriptions = {e.description: e for e in result.team_passives}
        # The reserve's 50 is not counted
        assert descriptions["Shoot AT +% for this player"].total_value == 10
        assert "Wall DF + for defenders" in descriptions
        d = result.to_dict()
        assert len(d["slots"]) == 19
        assert d["slots"][0]["computed"]["base"]["total"] > 0

    def test_count_assigned_players(self):
        assert count_assigned_players({"player-1": 2, "player-2": None, "manager": 12}) == 2
        assert count_assigned_players({}) == 0


# ═══════════════════════════════════════════════════════════════
# REPORT TABLES
# ═══════════════════════════════════════════════════════════════

class TestReport:
    def test_stats_frame(self, catalog):
        result = compute_squad(make_state(passive_options=PassiveOptions(enabled=True)), catalog)
        frame = squad_stats_frame(result.assignments)
        assert len(frame) == 6
        row = frame[frame["slot"] == "player-1"].iloc[0]
        assert row["player"] == "Axel Blaze"
        assert row["rarity"] == "hero"
        assert row["shootAT_final"] == pytest.approx(row["shootAT"] + row["shootAT_passive"])

    def test_passives_frame(self, catalog):
        result = compute_squad(make_state(), catalog)
        frame = team_passives_frame(result.team_passives)
        assert list(frame.columns) == ["Passive", "Total", "Sources"]
        assert len(frame) == len(result.team_passives)

    def test_attribute_breakdown(self, catalog):
        result = compute_squad(make_state(), catalog)
        frame = attribute_breakdown_frame(result.assignments[0].computed)
        assert frame.loc["kick", "equipment"] == 12
        assert frame.loc["kick", "final"] == pytest.approx(frame.loc["kick", "base"] + 12)


# ═══════════════════════════════════════════════════════════════
# SQUAD BOOK
# ═══════════════════════════════════════════════════════════════

class TestSquadBook:
    def test_limit(self):
        book = SquadBook()
        for i in range(MAX_SQUADS):
            book.add(f"squad-{i}")
        assert len(book) == MAX_SQUADS
        with pytest.raises(SquadLimitError):
            book.add("one-too-many")

    def test_replacing_existing_squad_allowed_when_full(self):
        book = SquadBook(limit=1)
        book.add("main")
        replacement = SquadState(formation_id="442-box")
        book.add("main", replacement)
        assert book.get("main") is replacement

    def test_remove_and_names(self):
        book = SquadBook()
        book.add("a")
        book.add("b")
        book.remove("a")
        book.remove("missing")
        assert book.names() == ["b"]
        assert "a" not in book
