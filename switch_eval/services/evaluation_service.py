"""
Evaluation Service for Switch Evaluation.

Runs the whole engine over one (profile, offers, now) snapshot.
"""

import logging
from datetime import date
from typing import Iterable, Optional

from constants import MODEL_CHANGE_EXCLUDED_MONTH_INDEX
from plan_comparison_types import PlanCategory, PlanOffer, UserProfile
from switch_eval import SwitchEvaluation
from switch_eval.services.comparison_service import (
    categorize_offers,
    find_current_offer,
    build_comparison,
    build_category_overview,
)
from switch_eval.services.downgrade_service import build_downgrade_alternatives
from switch_eval.services.window_service import resolve_windows
from switch_eval.utils.calculations import is_lowest_deductible_tier, month_index

logger = logging.getLogger(__name__)


def evaluate_switch_options(profile: UserProfile,
                            offers: Optional[Iterable[PlanOffer]],
                            now: date) -> SwitchEvaluation:
    """
    Evaluate switching windows and premium comparisons for a snapshot.

    The window resolver, comparison builder and category overview run
    independently on the same categorized offers; the downgrade list is only
    built for a Standard current plan outside November. Calling this twice
    with the same inputs gives equal results.

    Args:
        profile: User's current situation
        offers: Complete offer set from the pricing catalog
        now: Evaluation date (injected; never read from the system clock here)

    Returns:
        SwitchEvaluation snapshot
    """
    categorized = categorize_offers(offers)
    current_offer = find_current_offer(categorized, profile)
    category = current_offer.category if current_offer else None

    windows = resolve_windows(category, is_lowest_deductible_tier(profile), now)
    comparison = build_comparison(categorized, profile, current_offer)
    overview = build_category_overview(categorized)

    # Model alternatives are shown only while the model-change window is open
    downgrade_rows = []
    if category == PlanCategory.STANDARD and month_index(now) != MODEL_CHANGE_EXCLUDED_MONTH_INDEX:
        downgrade_rows = build_downgrade_alternatives(categorized, current_offer)

    offer_count = sum(len(v) for v in categorized.values())
    logger.debug(
        f"EVALUATE: {offer_count} offers, current={'found' if current_offer else 'none'}, "
        f"windows={len(windows)}, downgrade_rows={len(downgrade_rows)}, on {now.isoformat()}"
    )

    return SwitchEvaluation(
        evaluated_on=now,
        windows=windows,
        comparison=comparison,
        downgrade_rows=downgrade_rows,
        category_overview=overview,
        categorized=categorized,
        current_offer=current_offer,
    )
