"""
Downgrade Service for Switch Evaluation.

Lists the other coverage models the current insurer offers to someone on
a Standard plan. A model change keeps the insurer, so only that insurer's
offers are candidates.
"""

from typing import List, Optional

from plan_comparison_types import PlanCategory, PlanOffer, DowngradeRow
from switch_eval.services.comparison_service import CategorizedOffers
from switch_eval.utils.calculations import annual_difference

# Categories a Standard policyholder can move to, in display order
DOWNGRADE_CATEGORY_ORDER = (
    PlanCategory.FAMILY_DOCTOR,
    PlanCategory.HMO,
    PlanCategory.OTHER,
)


def build_downgrade_alternatives(categorized: CategorizedOffers,
                                 current_offer: Optional[PlanOffer]) -> List[DowngradeRow]:
    """
    Build the model-alternatives list for a Standard policyholder.

    Args:
        categorized: Output of categorize_offers()
        current_offer: The user's current plan, if resolved

    Returns:
        Empty unless the current plan is Standard. Otherwise the current
        plan first, then the insurer's Family doctor, HMO and Other offers,
        each group cheapest first, with the annual difference per row.
    """
    if current_offer is None or current_offer.category != PlanCategory.STANDARD:
        return []

    rows = [DowngradeRow(
        category=current_offer.category,
        insurer_name=current_offer.insurer_name,
        plan_label=current_offer.display_label,
        monthly_premium=current_offer.monthly_premium,
        is_current=True,
    )]

    for category in DOWNGRADE_CATEGORY_ORDER:
        group = [
            o for o in categorized.get(category, [])
            if o.insurer_name == current_offer.insurer_name
        ]
        for offer in sorted(group, key=lambda o: o.monthly_premium):
            rows.append(DowngradeRow(
                category=category,
                insurer_name=offer.insurer_name,
                plan_label=offer.display_label,
                monthly_premium=offer.monthly_premium,
                annual_savings=annual_difference(current_offer, offer),
            ))
    return rows
