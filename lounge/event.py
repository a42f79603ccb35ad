"""Event calendar helpers."""

from __future__ import annotations

from datetime import date

from lounge.constants import EVENT_END, EVENT_START, TOTAL_WEEKS


def current_week(
    today: date | None = None,
    start: date = EVENT_START,
    end: date = EVENT_END,
    total_weeks: int = TOTAL_WEEKS,
) -> int:
    """Event week for `today`: 1 before the event, the last week after it."""
    today = today or date.today()
    if today < start:
        return 1
    if today > end:
        return total_weeks
    return min((today - start).days // 7 + 1, total_weeks)
