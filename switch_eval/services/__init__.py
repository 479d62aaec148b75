"""
Services for Switch Evaluation module.

These services hold the eligibility and comparison logic, keeping the
Streamlit page focused on presentation.
"""

from .deadline_service import (
    SystemClock,
    FixedClock,
    last_business_day_on_or_before,
    days_until,
    window_deadline,
)
from .window_service import resolve_windows
from .comparison_service import (
    categorize_offers,
    find_current_offer,
    build_comparison,
    build_category_overview,
    build_plan_table,
)
from .downgrade_service import build_downgrade_alternatives
from .evaluation_service import evaluate_switch_options

__all__ = [
    'SystemClock',
    'FixedClock',
    'last_business_day_on_or_before',
    'days_until',
    'window_deadline',
    'resolve_windows',
    'categorize_offers',
    'find_current_offer',
    'build_comparison',
    'build_category_overview',
    'build_plan_table',
    'build_downgrade_alternatives',
    'evaluate_switch_options',
]
