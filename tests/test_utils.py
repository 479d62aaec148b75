"""
Test Suite for Utilities - Premium Switch Advisor
Premium parsing, age brackets, deductibles and profile checks

Run with: python -m unittest tests/test_utils.py
"""

import os
import unittest
from unittest.mock import patch
from datetime import date
from decimal import Decimal

from plan_comparison_types import PlanCategory, PlanOffer, UserProfile
from switch_eval.utils.calculations import (
    month_index,
    is_lowest_deductible_tier,
    has_mandatory_inputs,
    annual_difference,
)
from utils import (
    ValidationError,
    parse_premium,
    parse_deductible,
    get_reference_year,
    compute_age_bracket,
    get_deductible_options,
    minimum_deductible,
)


# =============================================================================
# Catalog value parsing
# =============================================================================

class TestParsePremium(unittest.TestCase):
    """Tests for parse_premium()"""

    def test_string(self):
        self.assertEqual(parse_premium("412.35"), Decimal("412.35"))

    def test_float_keeps_short_repr(self):
        self.assertEqual(parse_premium(412.35), Decimal("412.35"))

    def test_int_and_decimal(self):
        self.assertEqual(parse_premium(300), Decimal("300"))
        self.assertEqual(parse_premium(Decimal("0")), Decimal("0"))

    def test_swiss_formatting(self):
        self.assertEqual(parse_premium("CHF 1'012.50"), Decimal("1012.50"))
        self.assertEqual(parse_premium("1,012.50"), Decimal("1012.50"))

    def test_non_numeric_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            parse_premium("abc")
        self.assertEqual(ctx.exception.field, "monthly_premium")

    def test_missing_values_rejected(self):
        for value in (None, "", "  ", float('nan'), True):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    parse_premium(value)

    def test_negative_rejected(self):
        with self.assertRaises(ValidationError):
            parse_premium("-1")

    def test_infinite_rejected(self):
        with self.assertRaises(ValidationError):
            parse_premium("Infinity")

    def test_field_name_in_message(self):
        with self.assertRaises(ValidationError) as ctx:
            parse_premium("x", field="praemie")
        self.assertTrue(str(ctx.exception).startswith("praemie:"))

    def test_validation_error_is_value_error(self):
        self.assertTrue(issubclass(ValidationError, ValueError))

    def test_plan_offer_rejects_bad_premium(self):
        with self.assertRaises(ValidationError):
            PlanOffer(PlanCategory.STANDARD, "Alpha", "STD", "", "n/a")


class TestParseDeductible(unittest.TestCase):
    """Tests for parse_deductible()"""

    def test_whole_numbers(self):
        self.assertEqual(parse_deductible(300), 300)
        self.assertEqual(parse_deductible(2500.0), 2500)
        self.assertEqual(parse_deductible("300.0"), 300)
        self.assertEqual(parse_deductible(" 0 "), 0)

    def test_missing_reads_as_zero(self):
        self.assertEqual(parse_deductible(None), 0)
        self.assertEqual(parse_deductible(float('nan')), 0)

    def test_invalid_values_rejected(self):
        for value in ("abc", "", "300.5", -100, True, "Infinity"):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError) as ctx:
                    parse_deductible(value, field="franchise")
                self.assertEqual(ctx.exception.field, "franchise")


# =============================================================================
# Age brackets and deductibles
# =============================================================================

class TestAgeBracket(unittest.TestCase):
    """Tests for compute_age_bracket()"""

    def test_child_up_to_18(self):
        self.assertEqual(compute_age_bracket(2010, 2026), "AKL-KIN")
        self.assertEqual(compute_age_bracket(2008, 2026), "AKL-KIN")

    def test_young_adult_19_to_25(self):
        self.assertEqual(compute_age_bracket(2007, 2026), "AKL-JUG")
        self.assertEqual(compute_age_bracket(2001, 2026), "AKL-JUG")

    def test_adult_from_26(self):
        self.assertEqual(compute_age_bracket(2000, 2026), "AKL-ERW")

    def test_invalid_year(self):
        self.assertEqual(compute_age_bracket(None, 2026), "")
        self.assertEqual(compute_age_bracket(0, 2026), "")
        self.assertEqual(compute_age_bracket(1850, 2026), "")


class TestReferenceYear(unittest.TestCase):
    """Tests for get_reference_year()"""

    def test_env_override(self):
        with patch.dict(os.environ, {'REF_YEAR': '2025'}):
            self.assertEqual(get_reference_year(date(2026, 10, 19)), 2025)

    def test_invalid_env_ignored(self):
        with patch.dict(os.environ, {'REF_YEAR': 'next'}):
            self.assertEqual(get_reference_year(date(2026, 10, 19)), 2026)

    def test_defaults_to_today(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(get_reference_year(date(2026, 10, 19)), 2026)


class TestDeductibles(unittest.TestCase):

    def test_child_options(self):
        self.assertEqual(get_deductible_options("AKL-KIN"), [0, 100, 200, 300, 400, 500, 600])
        self.assertEqual(minimum_deductible("AKL-KIN"), 0)

    def test_young_adult_uses_adult_scale(self):
        self.assertEqual(get_deductible_options("AKL-JUG"), [300, 500, 1000, 1500, 2000, 2500])
        self.assertEqual(minimum_deductible("AKL-ERW"), 300)

    def test_options_are_a_copy(self):
        options = get_deductible_options("AKL-ERW")
        options.append(9999)
        self.assertNotIn(9999, get_deductible_options("AKL-ERW"))


# =============================================================================
# Profile checks and annual difference
# =============================================================================

class TestCalculations(unittest.TestCase):

    def test_month_index(self):
        self.assertEqual(month_index(date(2026, 1, 1)), 0)
        self.assertEqual(month_index(date(2026, 11, 30)), 10)

    def test_lowest_tier(self):
        self.assertTrue(is_lowest_deductible_tier(UserProfile(age_bracket="AKL-KIN", deductible=0)))
        self.assertTrue(is_lowest_deductible_tier(UserProfile(age_bracket="AKL-ERW", deductible=300)))
        self.assertFalse(is_lowest_deductible_tier(UserProfile(age_bracket="AKL-ERW", deductible=500)))
        self.assertFalse(is_lowest_deductible_tier(UserProfile(age_bracket="AKL-KIN", deductible=300)))

    def test_mandatory_inputs(self):
        complete = UserProfile(age_bracket="AKL-ERW", canton="ZH", region="1", deductible=300)
        self.assertTrue(has_mandatory_inputs(complete))
        self.assertFalse(has_mandatory_inputs(UserProfile(age_bracket="AKL-ERW", canton="ZH", deductible=300)))
        self.assertFalse(has_mandatory_inputs(
            UserProfile(age_bracket="AKL-ERW", canton="ZH", region="1", deductible=0)
        ))

    def test_annual_difference(self):
        current = PlanOffer(PlanCategory.STANDARD, "A", "S", "", "180.05")
        cheaper = PlanOffer(PlanCategory.HMO, "A", "H", "", "150")
        same = PlanOffer(PlanCategory.HMO, "B", "H", "", "180.05")
        self.assertEqual(annual_difference(current, cheaper), Decimal("360.60"))
        self.assertIsNone(annual_difference(current, same))

    def test_tiny_difference_is_not_zero(self):
        current = PlanOffer(PlanCategory.STANDARD, "A", "S", "", "180.00")
        candidate = PlanOffer(PlanCategory.HMO, "A", "H", "", "179.99")
        self.assertEqual(annual_difference(current, candidate), Decimal("0.12"))


if __name__ == '__main__':
    unittest.main(verbosity=2)
