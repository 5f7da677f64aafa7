"""
SquadLab Configuration
======================

Engine-wide constants and the location of the bundled dataset.

The data directory defaults to ``data/`` next to the package and can be
pointed elsewhere with the ``SQUADLAB_DATA_DIR`` environment variable.
"""

import os
from pathlib import Path


SQUAD_CONFIG = {
    # Independent squads a user can keep side by side
    "max_squads": 6,
    # Stat beans per slot
    "bean_slots": 3,
    # Upper clamp for a single bean
    "max_bean_points": 198,
    # Value a fresh bean slot starts with (no attribute chosen yet)
    "default_bean_value": 80,
    # Preset passive slots (the custom slot comes on top)
    "preset_passive_slots": 5,
}

_DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"

DATA_DIR = Path(os.environ.get("SQUADLAB_DATA_DIR", str(_DEFAULT_DATA_DIR)))


class SquadLabError(Exception):
    """Base class for errors raised outside the numeric engine."""


class CatalogError(SquadLabError):
    """Bundled data could not be read or parsed."""


class UnknownFormationError(SquadLabError, KeyError):
    def __init__(self, formation_id: str):
        self.formation_id = formation_id
        super().__init__(f"Unknown formation: {formation_id}")


class SquadLimitError(SquadLabError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"A squad book holds at most {limit} squads")
