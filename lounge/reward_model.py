"""
Reward-rate model: session length, experience multiplier and boost tier for a
level vector. Pure functions; keep formulas consistent across all entrypoints.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from lounge.constants import DEFAULT_RULES, SKILL_KEYS, BoostEffect, LoungeRules
from lounge.errors import InvalidInputError

Levels = tuple[int, int, int]


def validate_levels(levels: Sequence[int], rules: LoungeRules = DEFAULT_RULES) -> Levels:
    """Return `levels` as a tuple, rejecting anything outside [0, max_level]."""
    if len(levels) != len(SKILL_KEYS):
        raise InvalidInputError(f"expected {len(SKILL_KEYS)} skill levels, got {len(levels)}")
    for key, level in zip(SKILL_KEYS, levels):
        if isinstance(level, bool) or not isinstance(level, (int, np.integer)):
            raise InvalidInputError(f"{key} level must be an integer, got {level!r}")
        if not 0 <= level <= rules.max_level:
            raise InvalidInputError(f"{key} level must be in [0, {rules.max_level}], got {level}")
    return tuple(int(level) for level in levels)


def active_boost(levels: Sequence[int], rules: LoungeRules = DEFAULT_RULES) -> BoostEffect | None:
    """First boost (in priority order) whose threshold the levels satisfy."""
    ordered = tuple(sorted(levels, reverse=True))
    for boost in rules.boosts:
        if boost.applies(ordered):
            return boost
    return None


def boost_multiplier(levels: Sequence[int], rules: LoungeRules = DEFAULT_RULES) -> float:
    boost = active_boost(levels, rules)
    return 1.0 if boost is None else boost.multiplier


def total_multiplier(levels: Sequence[int], rules: LoungeRules = DEFAULT_RULES) -> float:
    """
    Experience per lounge hour: product of the three skill factors and the boost.
    """
    rate = 1.0
    for table, level in zip(rules.skill_multipliers, levels):
        rate *= table[level]
    return rate * boost_multiplier(levels, rules)


def session_length(time_level: int, rules: LoungeRules = DEFAULT_RULES) -> float:
    """Weekly lounge hours granted at a given Long Rest level."""
    return rules.base_hours + rules.hours_increase[time_level]


def multiplier_grid(rules: LoungeRules = DEFAULT_RULES) -> np.ndarray:
    """
    Precompute total_multiplier for every level vector.
    grid[l0, l1, l2] == total_multiplier((l0, l1, l2)).
    """
    size = rules.max_level + 1
    long_mult, dynamic_mult, snack_mult = (np.asarray(t, dtype=float) for t in rules.skill_multipliers)
    # Same multiplication order as total_multiplier so values match bit for bit.
    base = long_mult[:, None, None] * dynamic_mult[None, :, None] * snack_mult[None, None, :]
    boosts = np.ones((size, size, size))
    for index in np.ndindex(size, size, size):
        boosts[index] = boost_multiplier(index, rules)
    return base * boosts
