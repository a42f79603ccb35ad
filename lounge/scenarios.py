"""
What-if scenarios shared across Streamlit and the CLI.
Each scenario is a full re-run of the optimizer with modified inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from loguru import logger

from lounge.constants import DEFAULT_RULES, SAUNA_RATIO, LoungeRules
from lounge.planner import LoungePlan, LoungeRequest, normalize_grants, optimize_lounge

CURRENT = "Current plan"
UNCAPPED = "No Long Rest cap"
MAX_POINTS = "Max points every week"


@dataclass(frozen=True)
class ScenarioConfig:
    """Scenario metadata to keep the UI labels + colors consistent."""

    name: str
    request: LoungeRequest
    description: str
    color: str


@dataclass(frozen=True)
class ScenarioComparison:
    name: str
    total_reward: float
    total_time: float
    # Experience the current plan gives up versus this scenario.
    reward_loss: float

    @property
    def sauna_hours_loss(self) -> float:
        return self.reward_loss * SAUNA_RATIO


def build_scenarios(request: LoungeRequest, rules: LoungeRules = DEFAULT_RULES) -> list[ScenarioConfig]:
    """
    The current request plus the comparisons that differ from it: lifting the
    Long Rest cap, and earning the full weekly grant in every later week.
    """
    scenarios = [
        ScenarioConfig(
            name=CURRENT,
            request=request,
            description="Your inputs as entered",
            color="#1f77b4",
        )
    ]
    if request.max_time_level is not None and request.max_time_level < rules.max_level:
        scenarios.append(
            ScenarioConfig(
                name=UNCAPPED,
                request=replace(request, max_time_level=None),
                description="Long Rest may go up to the max level",
                color="#2ca02c",
            )
        )
    grants = normalize_grants(request, rules)
    max_grants = grants[: request.current_week] + (rules.weekly_points,) * (
        rules.total_weeks - request.current_week
    )
    # Weeks up to the current one are already settled.
    if max_grants != grants:
        scenarios.append(
            ScenarioConfig(
                name=MAX_POINTS,
                request=replace(request, weekly_points=max_grants),
                description=f"{rules.weekly_points} points in every remaining week",
                color="#ff7f0e",
            )
        )
    return scenarios


def _cache_key(request: LoungeRequest, rules: LoungeRules) -> tuple:
    return (
        request.current_week,
        tuple(request.levels),
        request.points,
        float(request.time_available),
        normalize_grants(request, rules),
        request.max_time_level,
    )


def compare_scenarios(
    request: LoungeRequest,
    rules: LoungeRules = DEFAULT_RULES,
) -> tuple[dict[str, LoungePlan], list[ScenarioComparison]]:
    """
    Optimize every scenario and report how much the current plan gives up
    versus each alternative. Scenarios that normalize to the same inputs are
    solved once.
    """
    cache: dict[tuple, LoungePlan] = {}
    plans: dict[str, LoungePlan] = {}
    for scenario in build_scenarios(request, rules):
        key = _cache_key(scenario.request, rules)
        if key not in cache:
            cache[key] = optimize_lounge(scenario.request, rules)
        else:
            logger.debug(f"scenario '{scenario.name}' reuses an identical run")
        plans[scenario.name] = cache[key]

    current = plans[CURRENT]
    comparisons = [
        ScenarioComparison(
            name=name,
            total_reward=plan.total_reward,
            total_time=plan.total_time,
            reward_loss=plan.total_reward - current.total_reward,
        )
        for name, plan in plans.items()
        if name != CURRENT
    ]
    return plans, comparisons
