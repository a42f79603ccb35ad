"""
Memoized recursion over the remaining event weeks.

solve(week, levels) is the best experience obtainable from the start of
`week` with skills at `levels` until the end of the event. The points
available in that state are

    initial points + grants of weeks (start, week] - points invested since the start

which depends only on (week, levels), so (week, levels) is a complete memo
key as long as grants are fixed per week index for the whole call.
"""

from __future__ import annotations

from typing import Callable, Sequence

from loguru import logger

from lounge.constants import DEFAULT_RULES, LoungeRules
from lounge.errors import InvalidInputError, InvariantError
from lounge.reward_model import Levels, multiplier_grid, session_length
from lounge.search import WeeklyDecision, best_weekly_decision
from lounge.timing import TimingPlan, optimize_timing

MemoKey = tuple[int, Levels]


class MemoTable:
    """Write-once map from (week, levels) to the best decision in that state."""

    def __init__(self) -> None:
        self._entries: dict[MemoKey, WeeklyDecision] = {}
        self.hits = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: MemoKey) -> bool:
        return key in self._entries

    def get(self, key: MemoKey) -> WeeklyDecision | None:
        decision = self._entries.get(key)
        if decision is not None:
            self.hits += 1
        return decision

    def store(self, key: MemoKey, decision: WeeklyDecision) -> None:
        existing = self._entries.get(key)
        if existing is not None and existing != decision:
            raise InvariantError(f"conflicting memo entries for {key}: {existing} vs {decision}")
        self._entries[key] = decision


class HorizonSolver:
    """
    One optimization call. Owns its memo table and timing cache; build a new
    solver for every request.
    """

    def __init__(
        self,
        start_week: int,
        start_levels: Levels,
        points: int,
        time_available: float,
        grants: Sequence[int],
        rules: LoungeRules = DEFAULT_RULES,
        max_time_level: int | None = None,
        should_abort: Callable[[], bool] | None = None,
    ) -> None:
        if not 1 <= start_week <= rules.total_weeks:
            raise InvalidInputError(f"week must be in [1, {rules.total_weeks}], got {start_week}")
        if points < 0:
            raise InvalidInputError(f"points must be non-negative, got {points}")
        if time_available < 0:
            raise InvalidInputError(f"time must be non-negative, got {time_available}")
        if len(grants) != rules.total_weeks:
            raise InvalidInputError(f"expected {rules.total_weeks} weekly grants, got {len(grants)}")

        self.rules = rules
        self.start_week = start_week
        self.start_levels = start_levels
        self.time_available = time_available
        self.grants = tuple(grants)
        self.max_time_level = max_time_level
        self.should_abort = should_abort
        self.memo = MemoTable()

        self._rates = multiplier_grid(rules).tolist()
        self._timing_cache: dict[tuple[int, Levels, float], TimingPlan] = {}

        # budget[week]: points granted up to `week`, counted from level zero.
        invested = self.invested(start_levels)
        self._budget = {start_week: points + invested}
        for week in range(start_week + 1, rules.total_weeks + 1):
            self._budget[week] = self._budget[week - 1] + self.grants[week - 1]

    def invested(self, levels: Levels) -> int:
        return sum(self.rules.cumulative_cost[level] for level in levels)

    def grant(self, week: int) -> int:
        return self.grants[week - 1]

    def points_at(self, week: int, levels: Levels) -> int:
        return self._budget[week] - self.invested(levels)

    def time_at(self, week: int, levels: Levels) -> float:
        if week == self.start_week:
            return self.time_available
        return session_length(levels[self.rules.time_skill], self.rules)

    def rate(self, levels: Levels) -> float:
        return self._rates[levels[0]][levels[1]][levels[2]]

    def timing(self, start_levels: Levels, end_levels: Levels, available_time: float) -> TimingPlan:
        key = (start_levels[self.rules.time_skill], end_levels, available_time)
        plan = self._timing_cache.get(key)
        if plan is None:
            plan = optimize_timing(start_levels, end_levels, available_time, self.rules, self.rate)
            self._timing_cache[key] = plan
        return plan

    def solve(self, week: int, levels: Levels) -> float:
        if not self.start_week <= week <= self.rules.total_weeks + 1:
            raise InvalidInputError(
                f"week must be in [{self.start_week}, {self.rules.total_weeks + 1}], got {week}"
            )
        if week > self.rules.total_weeks:
            return 0.0
        return self.decision(week, levels).total_reward

    def decision(self, week: int, levels: Levels) -> WeeklyDecision:
        key = (week, levels)
        cached = self.memo.get(key)
        if cached is not None:
            return cached

        def continuation(end_levels: Levels, remaining: int) -> float:
            if week < self.rules.total_weeks:
                carried = remaining + self.grant(week + 1)
                if carried != self.points_at(week + 1, end_levels):
                    raise InvariantError(
                        f"points carried into week {week + 1} ({carried}) do not match "
                        f"the budget for {end_levels} ({self.points_at(week + 1, end_levels)})"
                    )
            return self.solve(week + 1, end_levels)

        decision = best_weekly_decision(
            levels,
            self.points_at(week, levels),
            self.time_at(week, levels),
            timing=self.timing,
            continuation=continuation,
            rules=self.rules,
            max_time_level=self.max_time_level,
            should_abort=self.should_abort,
        )
        self.memo.store(key, decision)
        return decision

    def path(self) -> list[tuple[int, Levels, WeeklyDecision]]:
        """Winning (week, start levels, decision) triples from the start week to the end."""
        total = self.solve(self.start_week, self.start_levels)
        logger.debug(
            f"solved weeks {self.start_week}-{self.rules.total_weeks}: value={total:.4f}, "
            f"memo={len(self.memo)} states, hits={self.memo.hits}, timings={len(self._timing_cache)}"
        )
        steps = []
        levels = self.start_levels
        for week in range(self.start_week, self.rules.total_weeks + 1):
            decision = self.decision(week, levels)
            steps.append((week, levels, decision))
            levels = decision.end_levels
        return steps
