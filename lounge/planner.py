"""
Top-level lounge optimization: validate a request, run the horizon solver and
turn the winning path into per-week strategies the UIs can render.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Callable, Sequence

import pandas as pd
from loguru import logger

from lounge.constants import (
    DEFAULT_RULES,
    SAUNA_RATIO,
    SKILL_KEYS,
    SKILL_NAMES,
    BoostEffect,
    LoungeRules,
)
from lounge.costs import SkillUpgrade, invested_points, skill_upgrades, upgrade_cost
from lounge.errors import InvalidInputError
from lounge.horizon import HorizonSolver
from lounge.reward_model import Levels, active_boost, session_length, validate_levels
from lounge.timing import TimingPlan

EXHAUST_LABEL = "Exhaust time"


@dataclass(frozen=True)
class LoungeRequest:
    """What the player knows right now."""

    current_week: int
    levels: tuple[int, int, int]
    points: int
    time_available: float
    # Whole season (one entry per week) or only the weeks after current_week.
    weekly_points: tuple[int, ...] | None = None
    max_time_level: int | None = None


@dataclass(frozen=True)
class Action:
    """One step of a week's plan: buy a level, or spend the pooled hours."""

    kind: str  # "upgrade" | "exhaust"
    skill: str | None = None
    level: int | None = None

    @classmethod
    def upgrade(cls, skill: str, level: int) -> "Action":
        return cls("upgrade", skill, level)

    @classmethod
    def exhaust(cls) -> "Action":
        return cls("exhaust")


@dataclass(frozen=True)
class WeeklyStrategy:
    week: int
    start_levels: Levels
    end_levels: Levels
    upgrades: tuple[SkillUpgrade, ...]
    timing: TimingPlan
    actions: tuple[Action, ...]
    description: str
    reward: float
    # Hours actually spent this week, including a partial first week.
    session_time: float
    points_at_start: int
    remaining_points: int
    boost: BoostEffect | None

    @property
    def cost(self) -> int:
        return sum(upgrade.cost for upgrade in self.upgrades)


@dataclass(frozen=True)
class LoungePlan:
    request: LoungeRequest
    weeks: tuple[WeeklyStrategy, ...]
    total_reward: float
    total_time: float
    current_boost: BoostEffect | None
    recommendations: tuple[str, ...] = field(default=())
    weekly_max_hours: float | None = None

    @property
    def sauna_hours(self) -> float:
        return self.total_reward * SAUNA_RATIO

    def to_frame(self) -> pd.DataFrame:
        """One row per week, for tables and CSV-free display."""
        rows = []
        for week in self.weeks:
            rows.append(
                {
                    "week": week.week,
                    "start": "/".join(map(str, week.start_levels)),
                    "end": "/".join(map(str, week.end_levels)),
                    "plan": week.description,
                    "cost": week.cost,
                    "hours_spent": week.session_time,
                    "exp": week.reward,
                    "sauna_hours": week.reward * SAUNA_RATIO,
                    "points_start": week.points_at_start,
                    "points_left": week.remaining_points,
                    "boost": week.boost.name if week.boost else "-",
                }
            )
        return pd.DataFrame(rows)


def normalize_grants(request: LoungeRequest, rules: LoungeRules = DEFAULT_RULES) -> tuple[int, ...]:
    """Expand request.weekly_points into one grant per event week."""
    schedule = request.weekly_points
    if schedule is None:
        return (rules.weekly_points,) * rules.total_weeks

    schedule = tuple(schedule)
    remaining = rules.total_weeks - request.current_week
    if len(schedule) == rules.total_weeks:
        grants = schedule
    elif len(schedule) == remaining:
        grants = (rules.weekly_points,) * request.current_week + schedule
    else:
        raise InvalidInputError(
            f"weekly_points needs {rules.total_weeks} entries (whole event) "
            f"or {remaining} (weeks after week {request.current_week}), got {len(schedule)}"
        )
    for week, grant in enumerate(grants, start=1):
        if isinstance(grant, bool) or not isinstance(grant, int) or grant < 0:
            raise InvalidInputError(f"grant for week {week} must be a non-negative integer, got {grant!r}")
    return grants


def validate_request(request: LoungeRequest, rules: LoungeRules = DEFAULT_RULES) -> Levels:
    """Reject invalid input before any computation. Returns the level tuple."""
    week = request.current_week
    if isinstance(week, bool) or not isinstance(week, int) or not 1 <= week <= rules.total_weeks:
        raise InvalidInputError(f"current week must be in [1, {rules.total_weeks}], got {week!r}")
    levels = validate_levels(request.levels, rules)
    points = request.points
    if isinstance(points, bool) or not isinstance(points, int) or points < 0:
        raise InvalidInputError(f"points must be a non-negative integer, got {points!r}")
    time = request.time_available
    if isinstance(time, bool) or not isinstance(time, Real) or not math.isfinite(time) or time < 0:
        raise InvalidInputError(f"time available must be a finite non-negative number, got {time!r}")
    cap = request.max_time_level
    if cap is not None:
        if isinstance(cap, bool) or not isinstance(cap, int) or not 0 <= cap <= rules.max_level:
            raise InvalidInputError(f"time skill cap must be in [0, {rules.max_level}], got {cap!r}")
        if cap < levels[rules.time_skill]:
            raise InvalidInputError(
                f"time skill cap {cap} is below the current level {levels[rules.time_skill]}"
            )
    return levels


def validation_warnings(request: LoungeRequest, rules: LoungeRules = DEFAULT_RULES) -> list[str]:
    """Advisory checks for inputs that are legal but unlikely to be what the player meant."""
    warnings = []
    levels = validate_request(request, rules)
    total_points = invested_points(levels, rules) + request.points
    max_points = request.current_week * rules.weekly_points
    if total_points > max_points:
        warnings.append(
            f"Invested + available points ({total_points}) exceed the week "
            f"{request.current_week} maximum ({max_points})."
        )
    max_time = session_length(levels[rules.time_skill], rules)
    if request.time_available > max_time:
        warnings.append(
            f"Time available ({request.time_available}h) exceeds the {max_time}h session "
            f"of {SKILL_NAMES[SKILL_KEYS[rules.time_skill]]} level {levels[rules.time_skill]}."
        )
    return warnings


def build_actions(
    start_levels: Levels,
    end_levels: Levels,
    timing: TimingPlan,
    rules: LoungeRules = DEFAULT_RULES,
) -> tuple[Action, ...]:
    """
    Retroactive skills first, then the time skill one level at a time with an
    exhaust before each level-up the timing asks for, then a final exhaust.
    """
    actions = []
    for upgrade in skill_upgrades(start_levels, end_levels, rules):
        if SKILL_KEYS.index(upgrade.skill) == rules.time_skill:
            continue
        for level in range(upgrade.from_level + 1, upgrade.to_level + 1):
            actions.append(Action.upgrade(upgrade.skill, level))

    time_key = SKILL_KEYS[rules.time_skill]
    level = start_levels[rules.time_skill]
    for exhaust_first in timing.exhaust_first:
        if exhaust_first:
            actions.append(Action.exhaust())
        level += 1
        actions.append(Action.upgrade(time_key, level))

    if not actions or actions[-1].kind != "exhaust":
        actions.append(Action.exhaust())
    return tuple(actions)


def describe_actions(actions: Sequence[Action], start_levels: Levels) -> list[str]:
    """Readable steps; consecutive level-ups of one skill collapse into `a→b`."""
    current = dict(zip(SKILL_KEYS, start_levels))
    items = []
    i = 0
    while i < len(actions):
        action = actions[i]
        if action.kind == "exhaust":
            items.append(EXHAUST_LABEL)
            i += 1
            continue
        start = current[action.skill]
        end = action.level
        j = i + 1
        while (
            j < len(actions)
            and actions[j].kind == "upgrade"
            and actions[j].skill == action.skill
            and actions[j].level == end + 1
        ):
            end = actions[j].level
            j += 1
        current[action.skill] = end
        items.append(f"{SKILL_NAMES[action.skill]} {start}→{end}")
        i = j
    return items


def build_recommendations(weeks: Sequence[WeeklyStrategy], current_week: int) -> tuple[str, ...]:
    for week in weeks:
        if week.week != current_week:
            continue
        if week.upgrades:
            return (f"This week: {week.description}",)
        return ("No upgrades this week, just exhaust the session time",)
    return ()


def assemble_plan(
    request: LoungeRequest,
    solver: HorizonSolver,
    rules: LoungeRules = DEFAULT_RULES,
) -> LoungePlan:
    """Walk the solver's winning path and package it week by week."""
    weeks = []
    for week, start_levels, decision in solver.path():
        end_levels = decision.end_levels
        points_at_start = solver.points_at(week, start_levels)
        available = solver.time_at(week, start_levels)
        time_skill = rules.time_skill
        added_hours = session_length(end_levels[time_skill], rules) - session_length(
            start_levels[time_skill], rules
        )
        actions = build_actions(start_levels, end_levels, decision.timing, rules)
        weeks.append(
            WeeklyStrategy(
                week=week,
                start_levels=start_levels,
                end_levels=end_levels,
                upgrades=skill_upgrades(start_levels, end_levels, rules),
                timing=decision.timing,
                actions=actions,
                description=", ".join(describe_actions(actions, start_levels)),
                reward=decision.week_reward,
                session_time=available + added_hours,
                points_at_start=points_at_start,
                remaining_points=points_at_start - upgrade_cost(start_levels, end_levels, rules),
                boost=active_boost(end_levels, rules),
            )
        )

    cap = request.max_time_level
    return LoungePlan(
        request=request,
        weeks=tuple(weeks),
        total_reward=sum(week.reward for week in weeks),
        total_time=sum(week.session_time for week in weeks),
        current_boost=active_boost(solver.start_levels, rules),
        recommendations=build_recommendations(weeks, request.current_week),
        weekly_max_hours=None if cap is None else session_length(cap, rules),
    )


def optimize_lounge(
    request: LoungeRequest,
    rules: LoungeRules = DEFAULT_RULES,
    should_abort: Callable[[], bool] | None = None,
) -> LoungePlan:
    """Best weekly investment schedule from request.current_week to the end of the event."""
    levels = validate_request(request, rules)
    grants = normalize_grants(request, rules)
    solver = HorizonSolver(
        start_week=request.current_week,
        start_levels=levels,
        points=request.points,
        time_available=float(request.time_available),
        grants=grants,
        rules=rules,
        max_time_level=request.max_time_level,
        should_abort=should_abort,
    )
    plan = assemble_plan(request, solver, rules)
    logger.info(
        f"Lounge plan from week {request.current_week} at {levels}: "
        f"{plan.total_reward:.2f} exp over {plan.total_time:g}h"
    )
    return plan


def share_text(plan: LoungePlan) -> str:
    """Plain-text summary, one line per week."""
    request = plan.request
    lines = [
        f"Week {request.current_week}, {request.points} points, "
        f"{request.time_available:g}h left this week",
        f"Full participation: {plan.total_time:g}h in the lounge = "
        f"{plan.total_reward:.2f} exp ({plan.sauna_hours:.2f} sauna hours)",
    ]
    for week in plan.weeks:
        lines.append(
            f"Week {week.week} ({week.session_time:g}h spent, "
            f"{week.reward * SAUNA_RATIO:.2f} sauna): {week.description}"
        )
    return "\n".join(lines)
