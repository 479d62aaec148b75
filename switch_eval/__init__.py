"""
Switch Evaluation Module

Decides, for a given date, whether and how a policyholder may leave their
current mandatory health-insurance plan, and ranks the cheaper alternatives.

Three switching windows:
- Model change: same insurer, different coverage model; any month end except November
- Mid-year change: new insurer from July 1; Standard plans on the lowest deductible only
- Annual change: new insurer from January 1; notice by the end of November

All services are pure functions of (profile, offers, now). Nothing here reads
the system clock or touches the database.
"""

from enum import Enum
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from plan_comparison_types import (
    PlanCategory,
    PlanOffer,
    ComparisonEntry,
    ComparisonResult,
    DowngradeRow,
)


class WindowKind(Enum):
    """
    Switching opportunity type.

    The kind is what the UI renders a title for; whether it can be acted on
    right now is EligibilityWindow.is_open.
    """
    MODEL_CHANGE = "model_change"
    MID_YEAR = "mid_year"
    ANNUAL_CHANGE = "annual_change"


@dataclass(frozen=True)
class EligibilityWindow:
    """
    One switching window as of the evaluation date.

    days_remaining is only meaningful while the window is open and reads 0
    otherwise. deadline is kept for closed windows too, so the UI can say
    when the next one comes up.
    """
    kind: WindowKind
    is_open: bool
    days_remaining: int = 0
    deadline: Optional[date] = None

    def __post_init__(self):
        if not self.is_open or self.days_remaining < 0:
            object.__setattr__(self, 'days_remaining', 0)


@dataclass(frozen=True)
class SwitchEvaluation:
    """
    Snapshot result of one evaluation.

    Built fresh for every change in profile, offer set or date.
    """
    evaluated_on: date
    windows: List[EligibilityWindow]
    comparison: ComparisonResult
    downgrade_rows: List[DowngradeRow]
    category_overview: List[ComparisonEntry]
    categorized: Dict[PlanCategory, List[PlanOffer]] = field(default_factory=dict)
    current_offer: Optional[PlanOffer] = None

    @property
    def current_category(self) -> Optional[PlanCategory]:
        return self.current_offer.category if self.current_offer else None

    @property
    def open_windows(self) -> List[EligibilityWindow]:
        return [w for w in self.windows if w.is_open]
