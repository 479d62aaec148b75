"""
Calculation utilities for Switch Evaluation.

Profile checks and the annual premium difference used by every
comparison.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from constants import MONTHS_PER_YEAR
from plan_comparison_types import PlanOffer, UserProfile
from utils import minimum_deductible


def month_index(now: date) -> int:
    """0-based month (January = 0)."""
    return now.month - 1


def is_lowest_deductible_tier(profile: UserProfile) -> bool:
    """
    True iff the profile's deductible is the minimum for its age bracket
    (0 for children, 300 for everyone else).
    """
    return profile.deductible == minimum_deductible(profile.age_bracket)


def has_mandatory_inputs(profile: UserProfile) -> bool:
    """
    Check whether the profile has enough to query premiums.

    Needs an age bracket, canton and region, and a deductible at or above
    the bracket minimum.
    """
    if not (profile.age_bracket and profile.canton and profile.region):
        return False
    return profile.deductible >= minimum_deductible(profile.age_bracket)


def annual_difference(current: PlanOffer, candidate: PlanOffer) -> Optional[Decimal]:
    """
    Raw signed annual difference (current - candidate) * 12.

    Positive means the candidate is cheaper. An exact zero is returned as
    None so it is never shown, as opposed to a small non-zero difference.
    """
    diff = (current.monthly_premium - candidate.monthly_premium) * MONTHS_PER_YEAR
    if diff == 0:
        return None
    return diff
