"""
Comparison Service for Switch Evaluation.

Groups catalog offers by coverage category and builds the four-slot
comparison of the current plan against the cheapest alternatives.
"""

import logging
from typing import Dict, Iterable, List, Optional

from plan_comparison_types import (
    PlanCategory,
    CATEGORY_ORDER,
    PlanOffer,
    UserProfile,
    ComparisonEntry,
    ComparisonResult,
    CURRENT_PLAN_HEADING,
    CHEAPEST_OPTION_HEADING,
)
from switch_eval.utils.calculations import annual_difference

logger = logging.getLogger(__name__)

CategorizedOffers = Dict[PlanCategory, List[PlanOffer]]


def categorize_offers(offers: Optional[Iterable[PlanOffer]]) -> CategorizedOffers:
    """
    Partition offers into the four categories, cheapest first.

    Args:
        offers: Offers in catalog order (None is treated as empty)

    Returns:
        Dict with all four categories as keys. Each list is sorted by
        monthly premium with a stable sort, so equal premiums keep their
        input order.
    """
    grouped: CategorizedOffers = {category: [] for category in CATEGORY_ORDER}
    for offer in offers or []:
        grouped[PlanCategory.from_code(offer.category)].append(offer)

    for category in CATEGORY_ORDER:
        grouped[category] = sorted(grouped[category], key=lambda o: o.monthly_premium)
    return grouped


def find_current_offer(categorized: CategorizedOffers,
                       profile: UserProfile) -> Optional[PlanOffer]:
    """
    Locate the profile's current plan among the offers.

    Searches Standard, Family doctor, HMO, Other in that order and stops at
    the first (insurer_name, plan_identifier) match.

    Returns:
        The matching offer, or None when the profile has no insurer/plan or
        the plan is not in the offer set
    """
    if not profile.has_current_plan:
        return None

    for category in CATEGORY_ORDER:
        for offer in categorized.get(category, []):
            if offer.matches(profile.current_insurer_name, profile.current_plan_identifier):
                return offer
    return None


def _placeholder_result() -> ComparisonResult:
    slots = [
        ComparisonEntry.placeholder(
            CURRENT_PLAN_HEADING if idx == 0 else CHEAPEST_OPTION_HEADING,
            category,
        )
        for idx, category in enumerate(CATEGORY_ORDER)
    ]
    return ComparisonResult(*slots)


def build_comparison(categorized: CategorizedOffers,
                     profile: UserProfile,
                     current_offer: Optional[PlanOffer] = None) -> ComparisonResult:
    """
    Build the ranked comparison: current, cheapest same-category, and the
    two cheapest offers from the other categories.

    Args:
        categorized: Output of categorize_offers()
        profile: User profile naming the current insurer/plan
        current_offer: Pre-resolved current offer (looked up when omitted)

    Returns:
        ComparisonResult with exactly four slots. If the current plan can't
        be resolved, all four are placeholders labelled by category.
    """
    current = current_offer or find_current_offer(categorized, profile)
    if current is None:
        return _placeholder_result()

    current_entry = ComparisonEntry.from_offer(CURRENT_PLAN_HEADING, current)

    same_category = next(
        (o for o in categorized.get(current.category, []) if not o.is_same_plan(current)),
        None,
    )
    if same_category is None:
        same_entry = ComparisonEntry.placeholder(CHEAPEST_OPTION_HEADING, current.category)
    else:
        same_entry = ComparisonEntry.from_offer(
            CHEAPEST_OPTION_HEADING, same_category, annual_difference(current, same_category)
        )

    other_cheapest = [
        categorized[category][0]
        for category in CATEGORY_ORDER
        if category != current.category and categorized.get(category)
    ]
    other_cheapest.sort(key=lambda o: o.monthly_premium)

    other_entries = [
        ComparisonEntry.from_offer(CHEAPEST_OPTION_HEADING, offer, annual_difference(current, offer))
        for offer in other_cheapest[:2]
    ]
    while len(other_entries) < 2:
        other_entries.append(ComparisonEntry.placeholder(CHEAPEST_OPTION_HEADING))

    return ComparisonResult(current_entry, same_entry, other_entries[0], other_entries[1])


def build_category_overview(categorized: CategorizedOffers) -> List[ComparisonEntry]:
    """
    Cheapest offer per category, for users without a current plan.

    Returns:
        Four entries in fixed category order; empty categories become
        placeholders
    """
    overview = []
    for category in CATEGORY_ORDER:
        offers = categorized.get(category, [])
        if offers:
            overview.append(ComparisonEntry.from_offer(CHEAPEST_OPTION_HEADING, offers[0]))
        else:
            overview.append(ComparisonEntry.placeholder(CHEAPEST_OPTION_HEADING, category))
    return overview


def build_plan_table(offers: List[PlanOffer],
                     current_offer: Optional[PlanOffer] = None) -> List[ComparisonEntry]:
    """
    Rows for one category table, in the order given.

    Each row carries the annual difference to the current plan when one is
    known; the current plan itself shows no difference.
    """
    rows = []
    for offer in offers:
        savings = None
        if current_offer is not None and not offer.is_same_plan(current_offer):
            savings = annual_difference(current_offer, offer)
        heading = CURRENT_PLAN_HEADING if (
            current_offer is not None and offer.is_same_plan(current_offer)
        ) else ""
        rows.append(ComparisonEntry.from_offer(heading, offer, savings))
    return rows
