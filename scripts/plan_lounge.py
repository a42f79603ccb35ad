"""
Print the optimal lounge plan from the command line.

Examples:
    python scripts/plan_lounge.py --week 3 --levels 2 1 0 --points 25 --time 4
    python scripts/plan_lounge.py --levels 0 0 0 --points 20 --cap 5 --compare
    python scripts/plan_lounge.py --week 2 --points 20 --weekly-points 20 20 10 10 10 20 20 --share
"""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

# Ensure the repo root is on sys.path so `python scripts/plan_lounge.py` works anywhere.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import pandas as pd
from loguru import logger

from lounge.constants import MAX_LEVEL, SKILL_KEYS, SKILL_NAMES, WEEKLY_MAX_POINTS
from lounge.errors import InvalidInputError
from lounge.event import current_week
from lounge.logger import setup_logger
from lounge.planner import LoungeRequest, optimize_lounge, share_text, validation_warnings
from lounge.reward_model import session_length
from lounge.scenarios import CURRENT, compare_scenarios


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Optimal weekly skill plan for the lounge event.")
    parser.add_argument("--week", type=int, help="Current event week (default: from --date / today).")
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        help="Derive the week from this date (YYYY-MM-DD) instead of today.",
    )
    parser.add_argument(
        "--levels",
        nargs=len(SKILL_KEYS),
        type=int,
        default=[0] * len(SKILL_KEYS),
        metavar=tuple(key.upper() for key in SKILL_KEYS),
        help="Current levels: " + ", ".join(SKILL_NAMES[key] for key in SKILL_KEYS),
    )
    parser.add_argument("--points", type=int, default=WEEKLY_MAX_POINTS, help="Unspent points.")
    parser.add_argument(
        "--time",
        type=float,
        help="Hours left this week (default: a full session at the current Long Rest level).",
    )
    parser.add_argument(
        "--weekly-points",
        nargs="+",
        type=int,
        help="Points per week: every event week, or only the weeks after the current one.",
    )
    parser.add_argument("--cap", type=int, help="Highest Long Rest level you are willing to reach.")
    parser.add_argument("--compare", action="store_true", help="Compare against uncapped / max-points runs.")
    parser.add_argument("--share", action="store_true", help="Print the plain-text share summary.")
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--log-file", type=str, default=None)
    return parser


def build_request(args: argparse.Namespace) -> LoungeRequest:
    week = args.week if args.week is not None else current_week(args.date)
    levels = tuple(args.levels)
    time_available = args.time
    if time_available is None:
        # Out-of-range levels are rejected later by validate_request.
        time_available = session_length(min(max(levels[0], 0), MAX_LEVEL))
    return LoungeRequest(
        current_week=week,
        levels=levels,
        points=args.points,
        time_available=time_available,
        weekly_points=tuple(args.weekly_points) if args.weekly_points else None,
        max_time_level=args.cap,
    )


def main() -> None:
    args = build_parser().parse_args()
    setup_logger(level=args.log_level, log_file=args.log_file)

    try:
        request = build_request(args)
        for message in validation_warnings(request):
            logger.warning(message)
        if args.compare:
            plans, comparisons = compare_scenarios(request)
            plan = plans[CURRENT]
        else:
            plan = optimize_lounge(request)
            comparisons = []
    except InvalidInputError as exc:
        raise SystemExit(f"Invalid input: {exc}") from exc

    with pd.option_context("display.max_colwidth", None, "display.width", 200):
        print(plan.to_frame().set_index("week").round(2).to_string())
    print()
    print(f"Total exp: {plan.total_reward:.2f} ({plan.sauna_hours:.2f} sauna hours) over {plan.total_time:g}h")
    for line in plan.recommendations:
        print(line)

    for comparison in comparisons:
        print(
            f"{comparison.name}: {comparison.total_reward:.2f} exp "
            f"(+{comparison.reward_loss:.2f}, {comparison.sauna_hours_loss:.2f} sauna hours)"
        )

    if args.share:
        print()
        print(share_text(plan))


if __name__ == "__main__":
    main()
