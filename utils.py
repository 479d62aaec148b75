"""
Utility functions for the Premium Switch Advisor
Includes parsing of catalog values and age-bracket / deductible helpers
"""

import os
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Union
from datetime import date

import pandas as pd

from constants import (
    AGE_BRACKET_CHILD,
    AGE_BRACKET_YOUNG_ADULT,
    AGE_BRACKET_ADULT,
    CHILD_MAX_AGE,
    YOUNG_ADULT_MAX_AGE,
    MIN_VALID_BIRTH_YEAR,
    CHILD_DEDUCTIBLE_OPTIONS,
    ADULT_DEDUCTIBLE_OPTIONS,
)


class ValidationError(ValueError):
    """Raised when a caller hands the engine a malformed value."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


def parse_premium(value: Union[str, int, float, Decimal, None],
                  field: str = "monthly_premium") -> Decimal:
    """
    Parse a premium value from the pricing catalog to a Decimal.

    Args:
        value: Premium as number or string (e.g., "412.35", "CHF 1'012.50", 412.35)
        field: Field name reported in the ValidationError

    Returns:
        Non-negative Decimal premium

    Raises:
        ValidationError: If the value is missing, non-numeric or negative

    Examples:
        >>> parse_premium('412.35')
        Decimal('412.35')
        >>> parse_premium("CHF 1'012.50")
        Decimal('1012.50')
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(field, f"expected a numeric premium, got {value!r}")

    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float)):
        if pd.isna(value):
            raise ValidationError(field, "premium is NaN")
        # str() keeps the float's shortest repr (412.35, not 412.3499999...)
        parsed = Decimal(str(value))
    else:
        cleaned = str(value).strip()
        if cleaned.upper().startswith('CHF'):
            cleaned = cleaned[3:]
        cleaned = cleaned.replace("'", '').replace(',', '').strip()
        if cleaned == '':
            raise ValidationError(field, f"expected a numeric premium, got {value!r}")
        try:
            parsed = Decimal(cleaned)
        except InvalidOperation:
            raise ValidationError(field, f"expected a numeric premium, got {value!r}")

    if not parsed.is_finite():
        raise ValidationError(field, f"premium must be finite, got {value!r}")
    if parsed < 0:
        raise ValidationError(field, f"premium must not be negative, got {value!r}")
    return parsed


def parse_deductible(value: Union[str, int, float, Decimal, None],
                     field: str = "deductible") -> int:
    """
    Parse a deductible (franchise) from the pricing catalog to whole CHF.

    Missing values read as 0. Whole-number floats and strings such as
    300.0 or "300.0" are accepted.

    Raises:
        ValidationError: If the value is non-numeric, fractional or negative

    Examples:
        >>> parse_deductible('300.0')
        300
    """
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return 0
    if isinstance(value, bool):
        raise ValidationError(field, f"expected a whole CHF amount, got {value!r}")

    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(field, f"expected a whole CHF amount, got {value!r}")

    if not parsed.is_finite() or parsed != parsed.to_integral_value():
        raise ValidationError(field, f"expected a whole CHF amount, got {value!r}")
    if parsed < 0:
        raise ValidationError(field, f"deductible must not be negative, got {value!r}")
    return int(parsed)


def get_reference_year(today: date) -> int:
    """
    Reference year for age-bracket calculation.

    Uses the REF_YEAR environment variable when it holds an integer so a
    deployment can pin the premium year; otherwise the year of `today`.
    """
    ref_year = os.environ.get('REF_YEAR', '').strip()
    if ref_year:
        try:
            return int(ref_year)
        except ValueError:
            pass
    return today.year


def compute_age_bracket(year_of_birth: Optional[int], reference_year: int) -> str:
    """
    Determine the catalog age bracket from the year of birth.

    Args:
        year_of_birth: Four-digit year of birth
        reference_year: Premium year the age is measured against

    Returns:
        "AKL-KIN" (up to 18), "AKL-JUG" (19-25), "AKL-ERW" (26+),
        or "" for a missing or invalid year

    Examples:
        >>> compute_age_bracket(2010, 2026)
        'AKL-KIN'
        >>> compute_age_bracket(2003, 2026)
        'AKL-JUG'
    """
    if not year_of_birth or year_of_birth < MIN_VALID_BIRTH_YEAR:
        return ''

    age = reference_year - year_of_birth
    if age <= CHILD_MAX_AGE:
        return AGE_BRACKET_CHILD
    elif age <= YOUNG_ADULT_MAX_AGE:
        return AGE_BRACKET_YOUNG_ADULT
    else:
        return AGE_BRACKET_ADULT


def get_deductible_options(age_bracket: str) -> List[int]:
    """Deductible options in CHF; children have their own scale."""
    if age_bracket == AGE_BRACKET_CHILD:
        return list(CHILD_DEDUCTIBLE_OPTIONS)
    # Young adults use the adult scale
    return list(ADULT_DEDUCTIBLE_OPTIONS)


def minimum_deductible(age_bracket: str) -> int:
    """Lowest deductible tier for the bracket (0 for children, 300 otherwise)"""
    return get_deductible_options(age_bracket)[0]
