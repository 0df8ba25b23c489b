"""Synthetic balance history generator for demo mode"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Union

from worth_gateway.domain.exceptions import ValidationError
from worth_gateway.domain.models import AccountCategory, SyntheticHistory
from worth_gateway.domain.prng import Mulberry32, account_seed

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")

# Amounts are signed 64-bit minor units
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
_INT64_MIN_MAJOR = INT64_MIN / 100
_INT64_MAX_MAJOR = INT64_MAX / 100


@dataclass(frozen=True)
class CategoryProfile:
    """Shape of a generated history for one account category"""

    min_days: int
    max_days: int
    volatility: float  # max daily move as a fraction of the balance
    min_scale_major: float  # floor on the balance used for scaling, in major units


CATEGORY_PROFILES: Dict[AccountCategory, CategoryProfile] = {
    AccountCategory.CURRENT: CategoryProfile(min_days=60, max_days=240, volatility=0.04, min_scale_major=50.0),
    AccountCategory.SAVINGS: CategoryProfile(min_days=180, max_days=540, volatility=0.01, min_scale_major=100.0),
    AccountCategory.CREDIT_CARD: CategoryProfile(min_days=60, max_days=365, volatility=0.05, min_scale_major=50.0),
    AccountCategory.ISA: CategoryProfile(min_days=365, max_days=1095, volatility=0.008, min_scale_major=200.0),
    AccountCategory.INVESTMENT: CategoryProfile(min_days=365, max_days=1095, volatility=0.015, min_scale_major=200.0),
    AccountCategory.PENSION: CategoryProfile(min_days=730, max_days=1825, volatility=0.005, min_scale_major=500.0),
    AccountCategory.CASH: CategoryProfile(min_days=30, max_days=180, volatility=0.03, min_scale_major=10.0),
    AccountCategory.LOAN: CategoryProfile(min_days=365, max_days=1460, volatility=0.004, min_scale_major=200.0),
}


def to_minor_units(value_major: float) -> int:
    """Round a major-unit amount to whole minor units, halves away from zero"""
    return int(Decimal(repr(value_major)).quantize(_CENT, rounding=ROUND_HALF_UP) * 100)


def clamp_to_sign(value_major: float, sign: int) -> float:
    """Keep assets non-negative and debts non-positive"""
    if sign >= 0:
        return max(value_major, 0.0)
    return min(value_major, 0.0)


def clamp_to_int64(value_minor: int) -> int:
    return max(INT64_MIN, min(value_minor, INT64_MAX))


def generate_history(
    account_id: int,
    category: Union[AccountCategory, str],
    target_final_balance_minor: int,
    sign: int,
    today: date,
) -> SyntheticHistory:
    """
    Generate a plausible dense history ending today at the target balance.

    Requirements:
    - Seeded from the account id only, so the same account always gets the same walk
    - Length drawn from the category's day range
    - Last value equals the target exactly
    - Walks backward, each step moving by noise * volatility * max(|balance|, floor)
    - Clamped by sign and to the 64-bit range, rounded half away from zero to minor units

    Raises:
        InvalidCategoryError: if category is not a known category tag
        ValidationError: if the target does not fit in a signed 64-bit integer
    """
    if not INT64_MIN <= target_final_balance_minor <= INT64_MAX:
        raise ValidationError(f"Target balance {target_final_balance_minor} is outside the 64-bit range")
    if not isinstance(category, AccountCategory):
        category = AccountCategory.parse(category)
    profile = CATEGORY_PROFILES[category]

    rng = Mulberry32(account_seed(account_id))
    length = rng.randint(profile.min_days, profile.max_days)

    values: List[int] = [0] * length
    values[-1] = target_final_balance_minor

    current_major = target_final_balance_minor / 100
    for i in range(length - 2, -1, -1):
        scale = max(abs(current_major), profile.min_scale_major)
        delta = rng.noise() * profile.volatility * scale
        current_major = clamp_to_sign(current_major - delta, sign)
        current_major = min(max(current_major, _INT64_MIN_MAJOR), _INT64_MAX_MAJOR)
        values[i] = clamp_to_int64(to_minor_units(current_major))

    start_date = today - timedelta(days=length - 1)
    logger.debug(
        "Generated synthetic history",
        extra={"account_id": account_id, "category": category.value, "days": length},
    )

    return SyntheticHistory(start_date=start_date, values=values)
