"""Trailing activity windows and their balance deltas"""

from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence

from worth_gateway.domain.models import ActivityWindow


class ActivityPeriod(str, Enum):
    """Trailing windows shown next to each account"""

    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"


ACTIVITY_PERIOD_DAYS: Dict[str, int] = {
    ActivityPeriod.ONE_WEEK.value: 7,
    ActivityPeriod.ONE_MONTH.value: 30,
    ActivityPeriod.THREE_MONTHS.value: 90,
    ActivityPeriod.SIX_MONTHS.value: 180,
}

# Every window is a suffix of one series this long
FULL_WINDOW_DAYS = max(ACTIVITY_PERIOD_DAYS.values())


def first_known(values: Sequence[Optional[int]]) -> Optional[int]:
    return next((v for v in values if v is not None), None)


def last_known(values: Sequence[Optional[int]]) -> Optional[int]:
    return next((v for v in reversed(values) if v is not None), None)


def window_delta(values: Sequence[Optional[int]]) -> int:
    """
    Last known value minus first known value.

    Returns 0 when the window holds no known value, which is the normal
    state for an account opened after the window began.
    """
    first = first_known(values)
    last = last_known(values)
    if first is None or last is None:
        return 0
    return last - first


def slice_windows(
    series: Sequence[Optional[int]],
    windows: Mapping[str, int] = ACTIVITY_PERIOD_DAYS,
) -> Dict[str, ActivityWindow]:
    """
    Cut named trailing windows out of one already-built dense series.

    Overlapping windows share the same underlying values, so a shorter
    window always equals the tail of a longer one.

    Raises:
        ValueError: if a window is longer than the series
    """
    result: Dict[str, ActivityWindow] = {}
    for tag, count in windows.items():
        if count > len(series):
            raise ValueError(f"Window {tag} needs {count} days, series has {len(series)}")

        values: List[Optional[int]] = list(series[len(series) - count:]) if count > 0 else []
        result[tag] = ActivityWindow(tag=tag, values=values, delta_minor=window_delta(values))

    return result
