"""
Intra-week timing for the time skill (Long Rest).

Dynamic Rest and Snack Recharge apply to the whole week retroactively, so
they are always evaluated at their end-of-week levels. Long Rest only
affects hours spent after it is levelled, and each level both adds hours
and lowers the rate. For every Long Rest level-up we choose whether to
exhaust the accumulated hours first or to level up first; the best order
depends on the tables, so all 2^steps orders are scored.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from functools import partial
from typing import Callable, Iterator, Sequence

from lounge.constants import DEFAULT_RULES, LoungeRules
from lounge.errors import InvariantError
from lounge.reward_model import Levels, total_multiplier

RateFn = Callable[[Levels], float]


@dataclass(frozen=True)
class TimingPlan:
    """Best ordering for one week and the experience it earns."""

    # exhaust_first[i] is True when the hours are spent before the i-th level-up.
    exhaust_first: tuple[bool, ...]
    reward: float

    @property
    def steps(self) -> int:
        return len(self.exhaust_first)


def _at_time_level(levels: Levels, time_skill: int, level: int) -> Levels:
    as_list = list(levels)
    as_list[time_skill] = level
    return tuple(as_list)


def iter_timing_sequences(steps: int) -> Iterator[tuple[bool, ...]]:
    """Every exhaust/upgrade ordering for `steps` level-ups, all-upgrade-first first."""
    return itertools.product((False, True), repeat=steps)


def simulate_timing(
    start_time_level: int,
    end_levels: Levels,
    available_time: float,
    exhaust_first: Sequence[bool],
    rules: LoungeRules = DEFAULT_RULES,
    rate: RateFn | None = None,
) -> float:
    """Experience earned in one week when the level-ups follow `exhaust_first`."""
    rate = rate or partial(total_multiplier, rules=rules)
    time_skill = rules.time_skill
    if start_time_level + len(exhaust_first) != end_levels[time_skill]:
        raise InvariantError(
            f"{len(exhaust_first)} timing steps cannot take the time skill "
            f"from {start_time_level} to {end_levels[time_skill]}"
        )

    reward = 0.0
    pool = available_time
    level = start_time_level
    for spend_now in exhaust_first:
        added = rules.hours_increase[level + 1] - rules.hours_increase[level]
        if spend_now:
            reward += pool * rate(_at_time_level(end_levels, time_skill, level))
            pool = added
        else:
            pool += added
        level += 1
    return reward + pool * rate(end_levels)


def optimize_timing(
    start_levels: Levels,
    end_levels: Levels,
    available_time: float,
    rules: LoungeRules = DEFAULT_RULES,
    rate: RateFn | None = None,
) -> TimingPlan:
    """Return the highest-reward ordering; ties keep the first ordering found."""
    rate = rate or partial(total_multiplier, rules=rules)
    start_time_level = start_levels[rules.time_skill]
    steps = end_levels[rules.time_skill] - start_time_level
    if steps < 0:
        raise InvariantError(
            f"time skill cannot go from {start_time_level} down to {end_levels[rules.time_skill]}"
        )
    if steps == 0:
        return TimingPlan(exhaust_first=(), reward=available_time * rate(end_levels))

    best: TimingPlan | None = None
    for sequence in iter_timing_sequences(steps):
        reward = simulate_timing(start_time_level, end_levels, available_time, sequence, rules, rate)
        if best is None or reward > best.reward:
            best = TimingPlan(exhaust_first=sequence, reward=reward)
    return best
