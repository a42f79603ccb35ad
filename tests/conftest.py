"""Shared fixtures for the lounge planner tests."""

import pytest

from lounge.constants import LoungeRules
from lounge.planner import LoungeRequest, optimize_lounge

FLAT = (1.0,) * 9


@pytest.fixture
def two_step_rules():
    """
    Hand-sized stand-in tables: Long Rest levels 0/1/2 earn at 1.0/2.0/0.5 and
    add 2 then 3 hours; the other skills and boosts are neutral.
    """
    return LoungeRules(
        base_hours=2.0,
        hours_increase=(0, 2, 5, 5, 5, 5, 5, 5, 5),
        skill_multipliers=((1.0, 2.0, 0.5, 0.5, 0.5, 0.5, 0.5, 0.5, 0.5), FLAT, FLAT),
        boosts=(),
    )


@pytest.fixture(scope="session")
def week_one_plan():
    """The fresh-start plan: week 1, nothing invested, 20 points, a full 2h session."""
    request = LoungeRequest(current_week=1, levels=(0, 0, 0), points=20, time_available=2.0)
    return optimize_lounge(request)
