"""Monday-start week helpers shared by the grid, the grocery list and the checklist."""
from datetime import date, timedelta
from typing import List, Optional, Tuple

DAYS_IN_WEEK = 7


def week_start_for(d: Optional[date] = None) -> date:
    """Monday of the week containing d (today when omitted)."""
    d = d or date.today()
    return d - timedelta(days=d.weekday())


def week_range(week_start: date) -> Tuple[date, date]:
    """Closed range [week_start, week_start + 6]."""
    return week_start, week_start + timedelta(days=DAYS_IN_WEEK - 1)


def week_days(week_start: date) -> List[date]:
    return [week_start + timedelta(days=i) for i in range(DAYS_IN_WEEK)]


def week_key(d: date) -> str:
    """Week identifier: ISO date of the week's Monday."""
    return week_start_for(d).isoformat()


def shift_week(week_start: date, weeks: int) -> date:
    return week_start + timedelta(weeks=weeks)


__all__ = ['DAYS_IN_WEEK', 'week_start_for', 'week_range', 'week_days', 'week_key', 'shift_week']
