"""Lounge event planner: optimal weekly skill investment by dynamic programming."""

from lounge.errors import InvalidInputError, InvariantError, LoungeError, OptimizationAborted
from lounge.planner import LoungePlan, LoungeRequest, WeeklyStrategy, optimize_lounge, share_text

__all__ = [
    "InvalidInputError",
    "InvariantError",
    "LoungeError",
    "LoungePlan",
    "LoungeRequest",
    "OptimizationAborted",
    "WeeklyStrategy",
    "optimize_lounge",
    "share_text",
]
