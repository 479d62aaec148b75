"""
Window Service for Switch Evaluation.

Decides which switching windows apply to the user's current plan and
whether they are open on the evaluation date.
"""

import logging
from datetime import date
from typing import List, Optional

from constants import (
    ANNUAL_SWITCH_MONTH_INDEX,
    MID_YEAR_MONTH_INDICES,
    MODEL_CHANGE_EXCLUDED_MONTH_INDEX,
)
from plan_comparison_types import PlanCategory
from switch_eval import WindowKind, EligibilityWindow
from switch_eval.services.deadline_service import window_deadline, days_until
from switch_eval.utils.calculations import month_index

logger = logging.getLogger(__name__)


def build_window(kind: WindowKind, is_open: bool, now: date) -> EligibilityWindow:
    """Attach the deadline (and, if open, the days left) to a window."""
    deadline = window_deadline(kind, now)
    days = days_until(now, deadline) if is_open else 0
    return EligibilityWindow(kind=kind, is_open=is_open, days_remaining=days, deadline=deadline)


def resolve_windows(
    category: Optional[PlanCategory],
    is_lowest_deductible_tier: bool,
    now: date,
) -> List[EligibilityWindow]:
    """
    Resolve the switching windows for the current plan.

    Rules, in order:
    1. Unresolved category (no insurer, or plan not in the catalog): no windows.
    2. MODEL_CHANGE is open for Standard plans in every month but November,
       and absent otherwise.
    3. Standard on the lowest deductible: MID_YEAR (open) from January to
       March, otherwise ANNUAL_CHANGE. Everyone else: ANNUAL_CHANGE.
       ANNUAL_CHANGE is open only in November.

    Args:
        category: Category of the user's current plan, or None
        is_lowest_deductible_tier: Deductible equals the bracket minimum
        now: Evaluation date

    Returns:
        Zero, one or two windows; MID_YEAR and ANNUAL_CHANGE never appear together
    """
    if category is None:
        return []

    month = month_index(now)
    is_standard = category == PlanCategory.STANDARD
    windows: List[EligibilityWindow] = []

    if is_standard and month != MODEL_CHANGE_EXCLUDED_MONTH_INDEX:
        windows.append(build_window(WindowKind.MODEL_CHANGE, True, now))

    annual_open = month == ANNUAL_SWITCH_MONTH_INDEX
    if is_standard and is_lowest_deductible_tier and month in MID_YEAR_MONTH_INDICES:
        windows.append(build_window(WindowKind.MID_YEAR, True, now))
    else:
        windows.append(build_window(WindowKind.ANNUAL_CHANGE, annual_open, now))

    logger.debug(
        f"WINDOWS: category={category.name} lowest_tier={is_lowest_deductible_tier} "
        f"month={month} -> {[(w.kind.name, w.is_open) for w in windows]}"
    )
    return windows
