"""
Test Suite for Downgrade Service - Premium Switch Advisor
Same-insurer model alternatives for Standard policyholders

Run with: python -m unittest tests/test_downgrade_service.py
"""

import unittest
from decimal import Decimal

from plan_comparison_types import PlanCategory, PlanOffer
from switch_eval.services.comparison_service import categorize_offers
from switch_eval.services.downgrade_service import build_downgrade_alternatives
from switch_eval.utils.formatting import downgrade_rows_to_dataframe


def make_offer(category, insurer, plan, premium, label=None):
    return PlanOffer(
        category=category,
        insurer_name=insurer,
        plan_identifier=plan,
        plan_label=label or "",
        monthly_premium=premium,
    )


# =============================================================================
# Downgrade Builder
# "Given the current plan is Standard, Then the list starts with the current
# plan followed by the same insurer's Family doctor, HMO and Other offers"
# =============================================================================

class TestBuildDowngradeAlternatives(unittest.TestCase):
    """Tests for build_downgrade_alternatives()"""

    def setUp(self):
        self.current = make_offer(PlanCategory.STANDARD, "Helvetia", "STD", "400", "Basic")
        self.offers = [
            self.current,
            make_offer(PlanCategory.HMO, "Helvetia", "HMO-2", "350", "HMO Plus"),
            make_offer(PlanCategory.OTHER, "Helvetia", "TEL", "400", "Telmed"),
            make_offer(PlanCategory.FAMILY_DOCTOR, "Helvetia", "HAM", "360", "Family"),
            make_offer(PlanCategory.HMO, "Helvetia", "HMO-1", "340", "HMO Light"),
            make_offer(PlanCategory.FAMILY_DOCTOR, "Rival", "HAM-R", "300", "Rival Family"),
            make_offer(PlanCategory.STANDARD, "Helvetia", "STD-2", "410", "Basic Plus"),
        ]
        self.grouped = categorize_offers(self.offers)

    def test_current_plan_first(self):
        rows = build_downgrade_alternatives(self.grouped, self.current)
        self.assertTrue(rows[0].is_current)
        self.assertEqual(rows[0].plan_label, "Basic")
        self.assertIsNone(rows[0].annual_savings)

    def test_category_order_then_premium(self):
        rows = build_downgrade_alternatives(self.grouped, self.current)
        self.assertEqual(
            [r.plan_label for r in rows[1:]],
            ["Family", "HMO Light", "HMO Plus", "Telmed"],
        )

    def test_other_insurers_and_standard_offers_excluded(self):
        rows = build_downgrade_alternatives(self.grouped, self.current)
        self.assertTrue(all(r.insurer_name == "Helvetia" for r in rows))
        self.assertNotIn("Basic Plus", [r.plan_label for r in rows])

    def test_annual_differences(self):
        rows = build_downgrade_alternatives(self.grouped, self.current)
        self.assertEqual(rows[1].annual_savings, Decimal("480"))
        self.assertEqual(rows[2].annual_savings, Decimal("720"))

    def test_zero_difference_is_suppressed(self):
        rows = build_downgrade_alternatives(self.grouped, self.current)
        telmed = rows[-1]
        self.assertIsNone(telmed.annual_savings)
        df = downgrade_rows_to_dataframe(rows)
        self.assertEqual(df.iloc[-1]['Annual savings'], "")
        self.assertEqual(df.iloc[0]['Annual savings'], "Current plan")
        self.assertEqual(df.iloc[1]['Annual savings'], "-480 CHF/year")

    def test_insurer_without_other_models(self):
        lonely = make_offer(PlanCategory.STANDARD, "Solo", "STD-S", "390")
        grouped = categorize_offers(self.offers + [lonely])
        rows = build_downgrade_alternatives(grouped, lonely)
        self.assertEqual(len(rows), 1)
        self.assertTrue(rows[0].is_current)

    def test_label_falls_back_to_identifier(self):
        unlabelled = make_offer(PlanCategory.STANDARD, "Solo", "STD-S", "390")
        rows = build_downgrade_alternatives(categorize_offers([unlabelled]), unlabelled)
        self.assertEqual(rows[0].plan_label, "STD-S")

    def test_non_standard_current_plan(self):
        hmo = self.offers[1]
        self.assertEqual(build_downgrade_alternatives(self.grouped, hmo), [])

    def test_no_current_plan(self):
        self.assertEqual(build_downgrade_alternatives(self.grouped, None), [])


if __name__ == '__main__':
    unittest.main(verbosity=2)
