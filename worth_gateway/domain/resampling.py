"""Forward-fill resampling of sparse balance snapshots into dense daily series"""

from datetime import date, timedelta
from typing import Dict, Iterable, List, Mapping, Optional

from worth_gateway.domain.models import SnapshotRow


def resample(
    observations: Mapping[date, int],
    seed_before: Optional[int],
    range_start: date,
    length: int,
) -> List[Optional[int]]:
    """
    Build a dense "balance as of day N" series.

    Requirements:
    - One entry per day from range_start, `length` entries in total
    - A day with an observation takes that value, otherwise carries the last known one
    - seed_before primes the carry; None means nothing is known before the range
    - Unknown entries (None) can only form a prefix of the output

    Example:
        observations={day0: 100, day3: 130}, seed_before=None, length=5
        → [100, 100, 100, 130, 130]
    """
    last_known = seed_before
    series: List[Optional[int]] = []

    for i in range(max(length, 0)):
        day = range_start + timedelta(days=i)
        if day in observations:
            last_known = observations[day]
        series.append(last_known)

    return series


def observations_by_account(rows: Iterable[SnapshotRow]) -> Dict[int, Dict[date, int]]:
    """Group snapshot rows per account; a repeated (account, date) keeps the later row"""
    grouped: Dict[int, Dict[date, int]] = {}
    for row in rows:
        grouped.setdefault(row.account_id, {})[row.date] = row.balance_minor
    return grouped


def seeds_by_account(rows: Iterable[SnapshotRow]) -> Dict[int, int]:
    """Map each account to its last balance strictly before a range"""
    return {row.account_id: row.balance_minor for row in rows}
