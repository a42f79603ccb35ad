"""
Game tables for the lounge event, shared by the optimizer, Streamlit and the CLI.
Keep every number here so the entrypoints cannot drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from lounge.errors import InvalidInputError

# Event calendar (week 1 starts on a Thursday).
EVENT_START = date(2025, 9, 18)
EVENT_END = date(2025, 11, 19)
TOTAL_WEEKS = 9
WEEKLY_MAX_POINTS = 20

MAX_LEVEL = 8

# Skill order inside every level vector: (long, dynamic, snack).
SKILL_KEYS = ("long", "dynamic", "snack")
SKILL_NAMES = {
    "long": "Long Rest",
    "dynamic": "Dynamic Rest",
    "snack": "Snack Recharge",
}
TIME_SKILL = 0

# Points needed to reach level N from level 0.
CUMULATIVE_COST = (0, 15, 30, 45, 65, 85, 105, 125, 150)

# Session hours: base + extra hours from the Long Rest level.
BASE_HOURS = 2.0
HOURS_INCREASE = (0, 1, 2, 4, 6, 10, 18, 34, 58)

# Experience rate factor per level. Long Rest trades rate for time.
LONG_MULT = (1.00, 0.72, 0.58, 0.44, 0.35, 0.26, 0.17, 0.11, 0.07)
DYNAMIC_MULT = (1.000, 1.085, 1.165, 1.250, 1.330, 1.470, 1.615, 1.785, 2.000)
SNACK_MULT = (1.00, 1.08, 1.16, 1.25, 1.33, 1.47, 1.61, 1.79, 2.00)

# One lounge hour is worth this many sauna hours.
SAUNA_RATIO = 0.8


@dataclass(frozen=True)
class BoostEffect:
    """Set bonus unlocked by a combination of skill levels (boosts do not stack)."""

    name: str
    multiplier: float
    description: str
    # Receives the levels sorted in descending order.
    applies: Callable[[tuple[int, ...]], bool] = field(compare=False, repr=False)


BOOST_EFFECTS = (
    BoostEffect(
        name="Lounge Combo Routine",
        multiplier=1.68,
        description="two skills at level 5+",
        applies=lambda s: s[0] >= 5 and s[1] >= 5,
    ),
    BoostEffect(
        name="Rest Trio Set",
        multiplier=1.59,
        description="all three skills at level 3+",
        applies=lambda s: s[2] >= 3,
    ),
    BoostEffect(
        name="Rest Specialist",
        multiplier=1.58,
        description="one skill at level 7+",
        applies=lambda s: s[0] >= 7,
    ),
    BoostEffect(
        name="Lounge Beginner",
        multiplier=1.56,
        description="one skill at level 5+ and another at level 3+",
        applies=lambda s: s[0] >= 5 and s[1] >= 3,
    ),
)


@dataclass(frozen=True)
class LoungeRules:
    """
    Every constant the optimizer reads, bundled so comparison runs and tests
    can swap tables without touching module globals.
    """

    cumulative_cost: tuple[int, ...] = CUMULATIVE_COST
    base_hours: float = BASE_HOURS
    hours_increase: tuple[float, ...] = HOURS_INCREASE
    skill_multipliers: tuple[tuple[float, ...], ...] = (LONG_MULT, DYNAMIC_MULT, SNACK_MULT)
    boosts: tuple[BoostEffect, ...] = BOOST_EFFECTS
    total_weeks: int = TOTAL_WEEKS
    weekly_points: int = WEEKLY_MAX_POINTS
    max_level: int = MAX_LEVEL
    time_skill: int = TIME_SKILL

    def __post_init__(self) -> None:
        size = self.max_level + 1
        if self.max_level < 0:
            raise InvalidInputError(f"max_level must be >= 0, got {self.max_level}")
        if len(self.cumulative_cost) != size or len(self.hours_increase) != size:
            raise InvalidInputError(f"cost and hour tables need {size} entries")
        if len(self.skill_multipliers) != len(SKILL_KEYS):
            raise InvalidInputError(f"expected {len(SKILL_KEYS)} multiplier tables")
        for table in self.skill_multipliers:
            if len(table) != size:
                raise InvalidInputError(f"multiplier tables need {size} entries")
            if any(value <= 0 for value in table):
                raise InvalidInputError("multipliers must be positive")
        if self.cumulative_cost[0] != 0 or any(
            b < a for a, b in zip(self.cumulative_cost, self.cumulative_cost[1:])
        ):
            raise InvalidInputError("cumulative_cost must start at 0 and never decrease")
        if any(h < 0 for h in self.hours_increase) or self.base_hours < 0:
            raise InvalidInputError("session hours must be non-negative")
        if self.total_weeks < 1:
            raise InvalidInputError(f"total_weeks must be >= 1, got {self.total_weeks}")
        if self.weekly_points < 0:
            raise InvalidInputError("weekly_points must be non-negative")
        if not 0 <= self.time_skill < len(SKILL_KEYS):
            raise InvalidInputError(f"time_skill must index a skill, got {self.time_skill}")


DEFAULT_RULES = LoungeRules()
