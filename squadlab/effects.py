"""
SquadLab Passive Effect Vocabulary

Closed enumerations for everything a passive effect can say: who it reaches
(scope), what it touches (stat group), how it is applied (mode, direction)
and when it is allowed to fire (conditions).

Raw dataset strings are parsed once at load time.  Values outside the known
sets parse to ``None``; the resolver treats a ``None`` scope like
``nearbyAllies`` and ignores a ``None`` stat group.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class EffectScope(Enum):
    SELF = "self"
    TEAM = "team"
    NEARBY_ALLIES = "nearbyAllies"
    ALLIES_SAME_ELEMENT = "alliesSameElement"
    ALLIES_DIFFERENT_ELEMENT = "alliesDifferentElement"
    ALLIES_SAME_POSITION = "alliesSamePosition"
    ALLIES_DIFFERENT_POSITION = "alliesDifferentPosition"
    ALLIED_MF = "alliedMF"
    ALLIED_DF = "alliedDF"
    ALLIED_GK = "alliedGK"
    SUBBED_ON_PLAYER = "subbedOnPlayer"


class PassiveStat(Enum):
    SHOT_AT = "shotAT"
    FOCUS = "focus"
    SCRAMBLE = "scramble"
    WALL_DF = "wallDF"
    AT = "AT"
    DF = "DF"
    KP = "KP"
    ALL = "all"
    # Known to the dataset but carry no power-stat meaning
    ROUGH_ATTACK = "roughAttack"
    BOND_GAIN = "bondGain"
    BOND_LOSS = "bondLoss"
    TACTIC_COOLDOWN = "tacticCooldown"
    BREACH_RATE = "breachRate"
    BREACH_TENSION_REQUIREMENT = "breachTensionRequirement"
    WALL_PIERCE = "wallPierce"
    DIRECT_SHOT_AT = "directShotAT"
    FOUL_RATE = "foulRate"
    COMMON_DROP_RATE = "commonDropRate"
    RARE_DROP_RATE = "rareDropRate"


class EffectMode(Enum):
    PERCENT = "percent"
    FLAT = "flat"


class EffectDirection(Enum):
    INCREASE = "increase"
    DECREASE = "decrease"


class ConditionType(Enum):
    # Score / foul state
    SCORE_NOT_LEADING = "scoreNotLeading"
    NO_FOUL_COMMITTED_YET = "noFoulCommittedYet"
    # Pitch zone and match time
    FIELD_ZONE_OWN_HALF = "fieldZoneOwnHalf"
    FIELD_ZONE_OPPONENT_HALF = "fieldZoneOpponentHalf"
    OUTSIDE_ZONE_AREA = "outsideZoneArea"
    MATCH_TIME_HALF_FIRST = "matchTimeHalfFirst"
    MATCH_TIME_HALF_SECOND = "matchTimeHalfSecond"
    # Proximity
    DISTANCE_WITHIN_RADIUS = "distanceWithinRadius"
    SAME_ELEMENT_ALLY_NEARBY = "sameElementAllyNearby"
    DIFFERENT_ELEMENT_ALLY_NEARBY = "differentElementAllyNearby"
    NEARBY_ALLY_SAME_ELEMENT = "nearbyAllySameElement"
    NEARBY_ALLY_DIFFERENT_ELEMENT = "nearbyAllyDifferentElement"
    # Breach / tension / bond
    TEAM_BREACH_RATE_AT_LEAST_15 = "teamBreachRateAtLeast15"
    TENSION_AT_LEAST_50 = "tensionAtLeast50"
    TENSION_AT_100 = "tensionAt100"
    BOND_POWER_AT_LEAST_20 = "bondPowerAtLeast20"
    # Event triggers
    AFTER_BALL_RECOVERY_NO_DIRECT_CATCH = "afterBallRecoveryNoDirectCatch"
    WHILE_DASHING = "whileDashing"
    ON_MARKED_OR_BLOCKED_WHILE_DASHING = "onMarkedOrBlockedWhileDashing"
    NEXT_ROUGH_ATTACK_ONLY = "nextRoughAttackOnly"
    ON_OPPONENT_FOUL = "onOpponentFoul"
    AFTER_SUBSTITUTION = "afterSubstitution"


# type: (label, helper)
CONDITION_LABELS: Dict[ConditionType, Tuple[str, str]] = {
    ConditionType.SCORE_NOT_LEADING: ("Not Leading", "Team is trailing or tied"),
    ConditionType.NO_FOUL_COMMITTED_YET: ("Clean Match", "No fouls committed yet"),
    ConditionType.FIELD_ZONE_OWN_HALF: ("Own Half", "Player positioned on our half"),
    ConditionType.FIELD_ZONE_OPPONENT_HALF: ("Opponent Half", "Player positioned on opponent half"),
    ConditionType.OUTSIDE_ZONE_AREA: ("Outside Area", "Player outside the area"),
    ConditionType.MATCH_TIME_HALF_FIRST: ("First Half", "Effect active in first half"),
    ConditionType.MATCH_TIME_HALF_SECOND: ("Second Half", "Effect active in second half"),
    ConditionType.DISTANCE_WITHIN_RADIUS: ("Within Radius", "Nearby allies within range"),
    ConditionType.SAME_ELEMENT_ALLY_NEARBY: ("Same Element Nearby", "Needs an ally of same element nearby"),
    ConditionType.DIFFERENT_ELEMENT_ALLY_NEARBY: ("Different Element Nearby", "Needs an ally of different element nearby"),
    ConditionType.NEARBY_ALLY_SAME_ELEMENT: ("Same Element Close", "Close ally shares element"),
    ConditionType.NEARBY_ALLY_DIFFERENT_ELEMENT: ("Different Element Close", "Close ally with different element"),
    ConditionType.TEAM_BREACH_RATE_AT_LEAST_15: ("Breach ≥ 15%", "Team breach rate boosted"),
    ConditionType.TENSION_AT_LEAST_50: ("Tension ≥ 50", "Tension meter at least 50"),
    ConditionType.TENSION_AT_100: ("Tension Max", "Tension meter full"),
    ConditionType.BOND_POWER_AT_LEAST_20: ("Bond ≥ 20", "Bond power at least 20"),
    ConditionType.AFTER_BALL_RECOVERY_NO_DIRECT_CATCH: ("After Recovery", "Immediately after recovering the ball"),
    ConditionType.WHILE_DASHING: ("While Dashing", "Player currently dashing"),
    ConditionType.ON_MARKED_OR_BLOCKED_WHILE_DASHING: ("Blocked While Dashing", "Marked or blocked mid dash"),
    ConditionType.NEXT_ROUGH_ATTACK_ONLY: ("Next Rough Attack", "Applies to the next rough attack"),
    ConditionType.ON_OPPONENT_FOUL: ("After Opponent Foul", "Triggered by an opponent foul"),
    ConditionType.AFTER_SUBSTITUTION: ("After Substitution", "Player just entered the pitch"),
}


@dataclass(frozen=True)
class PassiveConditionOption:
    type: ConditionType
    label: str
    helper: str


PASSIVE_CONDITION_OPTIONS: List[PassiveConditionOption] = [
    PassiveConditionOption(cond, label, helper)
    for cond, (label, helper) in CONDITION_LABELS.items()
]


# ──────────────────────────────────────────────
# PARSING
# ──────────────────────────────────────────────

def _parse_enum(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


def parse_scope(value) -> Optional[EffectScope]:
    return _parse_enum(EffectScope, value)


def parse_stat(value) -> Optional[PassiveStat]:
    return _parse_enum(PassiveStat, value)


def parse_condition_type(value) -> Optional[ConditionType]:
    return _parse_enum(ConditionType, value)


def parse_mode(value) -> EffectMode:
    # Anything that is not "percent" is applied as a flat amount.
    return _parse_enum(EffectMode, value) or EffectMode.FLAT


def parse_direction(value) -> EffectDirection:
    parsed = _parse_enum(EffectDirection, value)
    return parsed or EffectDirection.INCREASE


# ──────────────────────────────────────────────
# RECORDS
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class PassiveCondition:
    """A named predicate.  ``type`` is None when the dataset used an unknown name."""
    type: Optional[ConditionType]
    raw_type: str = ""
    value: Optional[object] = None

    @classmethod
    def from_dict(cls, d: dict) -> "PassiveCondition":
        raw = str(d.get("type", ""))
        return cls(type=parse_condition_type(raw), raw_type=raw, value=d.get("value"))


@dataclass(frozen=True)
class PassiveEffect:
    scope: Optional[EffectScope]
    stat: Optional[PassiveStat]
    mode: EffectMode = EffectMode.PERCENT
    direction: EffectDirection = EffectDirection.INCREASE
    conditions: Tuple[PassiveCondition, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, d: dict) -> "PassiveEffect":
        return cls(
            scope=parse_scope(d.get("scope")),
            stat=parse_stat(d.get("stat")),
            mode=parse_mode(d.get("mode")),
            direction=parse_direction(d.get("direction")),
            conditions=tuple(PassiveCondition.from_dict(c) for c in (d.get("conditions") or [])),
        )
