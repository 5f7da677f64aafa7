#!/usr/bin/env python3
"""
Print the computed stats of a squad described in a JSON file

Usage:
    python squad_report.py <squad.json> [--passives] [--condition NAME ...]

Example:
    python squad_report.py data/squads/example.json --passives --condition tensionAtLeast50

Squad file layout:
    {
      "formation_id": "433-delta",
      "assignments": {"player-1": 2, "player-11": 1, "manager": 12},
      "slot_configs": {"player-1": {"rarity": "hero", "equipments": {"boots": "boots-1"}}},
      "passive_options": {"enabled": true, "active_conditions": ["tensionAtLeast50"]}
    }
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import pandas as pd

sys.path.insert(0, str(Path(__file__).parent))

from squadlab import (
    CatalogError,
    PassiveOptions,
    SquadState,
    UnknownFormationError,
    compute_squad,
    load_catalog,
)
from squadlab.formations import DEFAULT_FORMATION_ID
from squadlab.report import squad_stats_frame, team_passives_frame

_log = logging.getLogger("squadlab.report")


def load_squad_state(path: str, force_passives: bool = False, conditions=None) -> SquadState:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    options_raw = raw.get("passive_options") or {}
    active = set(options_raw.get("active_conditions") or [])
    active.update(conditions or [])

    return SquadState(
        formation_id=raw.get("formation_id", DEFAULT_FORMATION_ID),
        assignments={slot_id: player_id for slot_id, player_id in (raw.get("assignments") or {}).items()},
        slot_configs=raw.get("slot_configs") or {},
        passive_options=PassiveOptions(
            enabled=force_passives or bool(options_raw.get("enabled")),
            active_conditions=frozenset(active),
        ),
    )


def select_stat_columns(stats: pd.DataFrame, columns) -> pd.DataFrame:
    unknown = [c for c in columns if c not in stats.columns]
    if unknown:
        raise ValueError(f"unknown stat column(s): {', '.join(unknown)}")
    return stats[["slot", "player", *columns]]


def print_report(state: SquadState, data_dir=None, stat_columns=None):
    catalog = load_catalog(data_dir)
    result = compute_squad(state, catalog)
    stats = squad_stats_frame(result.assignments)
    if stat_columns:
        stats = select_stat_columns(stats, stat_columns)

    print("=" * 60)
    print(f"SQUAD REPORT - {state.formation_id}")
    print("=" * 60)
    print()

    with pd.option_context("display.max_columns", None, "display.width", 200):
        if stats.empty:
            print("No players assigned.")
        else:
            print(stats.to_string(index=False))
        print()

        print("TEAM PASSIVES")
        print("-" * 60)
        passives = team_passives_frame(result.team_passives)
        if passives.empty:
            print("No passives configured.")
        else:
            print(passives.to_string(index=False))
    print()


def main():
    parser = argparse.ArgumentParser(description="Print the computed stats of a squad")
    parser.add_argument("squad", help="Path to a squad JSON file")
    parser.add_argument("--data-dir", help="Alternate dataset directory")
    parser.add_argument("--passives", action="store_true", help="Resolve passives even if the file disables them")
    parser.add_argument("--condition", action="append", default=[], help="Mark a match condition as active")
    parser.add_argument("--columns", help="Comma-separated stat columns to show (e.g. shootAT,shootAT_final)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not Path(args.squad).exists():
        print(f"Error: squad file not found: {args.squad}")
        sys.exit(1)

    state = load_squad_state(args.squad, force_passives=args.passives, conditions=args.condition)
    columns = [c.strip() for c in args.columns.split(",")] if args.columns else None

    try:
        print_report(state, data_dir=args.data_dir, stat_columns=columns)
    except (CatalogError, UnknownFormationError) as e:
        _log.error("%s", e)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
