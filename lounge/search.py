"""Single-week decision: which level vector to end the week on."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator

from loguru import logger

from lounge.constants import DEFAULT_RULES, LoungeRules
from lounge.errors import InvalidInputError, OptimizationAborted
from lounge.reward_model import Levels
from lounge.timing import TimingPlan

# (start levels, end levels, available hours) -> best timing for the week
TimingFn = Callable[[Levels, Levels, float], TimingPlan]
# (end levels, points left after this week) -> best reward over the later weeks
ContinuationFn = Callable[[Levels, int], float]


@dataclass(frozen=True)
class WeeklyDecision:
    end_levels: Levels
    cost: int
    timing: TimingPlan
    total_reward: float  # this week plus every later week

    @property
    def week_reward(self) -> float:
        return self.timing.reward


def iter_candidate_levels(
    levels: Levels,
    points: int,
    rules: LoungeRules = DEFAULT_RULES,
    max_time_level: int | None = None,
) -> Iterator[Levels]:
    """
    Lazily yield every non-decreasing level vector affordable with `points`.
    The unchanged vector comes first; costs only grow along each skill, so the
    loop for a skill stops at the first level that no longer fits.
    """
    if points < 0:
        raise InvalidInputError(f"points must be non-negative, got {points}")
    caps = [rules.max_level] * len(levels)
    if max_time_level is not None:
        caps[rules.time_skill] = min(max_time_level, rules.max_level)
    cumulative = rules.cumulative_cost

    def extend(index: int, prefix: Levels, budget: int) -> Iterator[Levels]:
        if index == len(levels):
            yield prefix
            return
        start = levels[index]
        for new in range(start, max(caps[index], start) + 1):
            cost = cumulative[new] - cumulative[start]
            if cost > budget:
                break
            yield from extend(index + 1, prefix + (new,), budget - cost)

    yield from extend(0, (), points)


def best_weekly_decision(
    levels: Levels,
    points: int,
    available_time: float,
    timing: TimingFn,
    continuation: ContinuationFn,
    rules: LoungeRules = DEFAULT_RULES,
    max_time_level: int | None = None,
    should_abort: Callable[[], bool] | None = None,
) -> WeeklyDecision:
    """
    Score every affordable end vector as this week's best timing reward plus
    the best continuation, and keep the first candidate with the highest total.
    """
    if available_time < 0:
        raise InvalidInputError(f"available time must be non-negative, got {available_time}")
    cumulative = rules.cumulative_cost
    invested = sum(cumulative[level] for level in levels)

    best: WeeklyDecision | None = None
    candidates = 0
    for end_levels in iter_candidate_levels(levels, points, rules, max_time_level):
        if should_abort is not None and should_abort():
            raise OptimizationAborted(f"aborted after {candidates} candidates")
        candidates += 1
        cost = sum(cumulative[level] for level in end_levels) - invested
        plan = timing(levels, end_levels, available_time)
        total = plan.reward + continuation(end_levels, points - cost)
        if best is None or total > best.total_reward:
            best = WeeklyDecision(end_levels=end_levels, cost=cost, timing=plan, total_reward=total)

    logger.trace(f"{candidates} candidates from {levels} with {points} points")
    # The unchanged vector costs nothing, so at least one candidate always exists.
    return best
