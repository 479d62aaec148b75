"""
Utility functions for Switch Evaluation module.
"""

from .calculations import (
    month_index,
    is_lowest_deductible_tier,
    has_mandatory_inputs,
    annual_difference,
)

from .formatting import (
    WindowDisplay,
    category_label,
    category_description,
    format_monthly,
    format_premium,
    format_cost_diff,
    format_deadline_label,
    describe_window,
    format_entry,
    comparison_to_dataframe,
    downgrade_rows_to_dataframe,
    plan_table_to_dataframe,
)

__all__ = [
    'month_index',
    'is_lowest_deductible_tier',
    'has_mandatory_inputs',
    'annual_difference',
    'WindowDisplay',
    'category_label',
    'category_description',
    'format_monthly',
    'format_premium',
    'format_cost_diff',
    'format_deadline_label',
    'describe_window',
    'format_entry',
    'comparison_to_dataframe',
    'downgrade_rows_to_dataframe',
    'plan_table_to_dataframe',
]
