"""
Formatting utilities for Switch Evaluation.

Maps engine values to display text. The services never produce strings;
swap this module to change wording or language.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Tuple

import pandas as pd

from constants import (
    CATEGORY_LABELS,
    CATEGORY_DESCRIPTIONS,
    CURRENCY,
    SHORT_DEADLINE_DAYS,
)
from plan_comparison_types import PlanCategory, ComparisonEntry, ComparisonResult, DowngradeRow
from switch_eval import WindowKind, EligibilityWindow

NO_DATA_TEXT = "(no data)"
CURRENT_PLAN_SAVINGS_TEXT = "Current plan"

WINDOW_TITLES = {
    WindowKind.MODEL_CHANGE: "Insurance Model Change",
    WindowKind.MID_YEAR: "Mid-Year Change",
    WindowKind.ANNUAL_CHANGE: "Annual Change",
}

WINDOW_SUBTITLES = {
    WindowKind.MODEL_CHANGE: "Switch to family doctor, HMO or telemedicine (same insurer).",
    WindowKind.MID_YEAR: "Switch provider with new policy starting July 1",
    WindowKind.ANNUAL_CHANGE: "Switch provider for next year",
}

LOCKED_MESSAGE = "Savings locked: new premiums will be available beginning of October."
OPEN_MESSAGE = "Savings unlocked: Act to change the insurance plan."
URGENT_MESSAGE = (
    "Savings unlocked: Less than {days} days remaining. "
    "Consider express mail or calling the insurance company."
)


@dataclass(frozen=True)
class WindowDisplay:
    """Display text for one switching window."""
    title: str
    subtitle: str
    days_text: str
    deadline_caption: str
    message: str
    tone: str  # 'locked', 'urgent' or 'open'


def _round_chf(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(Decimal('1'), rounding=ROUND_HALF_UP)


def category_label(category: Optional[PlanCategory]) -> str:
    """Display label for a category; empty for an unlabelled placeholder."""
    if category is None:
        return ""
    return CATEGORY_LABELS[category.value]


def category_description(category: PlanCategory) -> str:
    return CATEGORY_DESCRIPTIONS[category.value]


def format_monthly(premium: Optional[Decimal]) -> str:
    """Format a monthly premium as e.g. "120 CHF/month"."""
    if premium is None:
        return ""
    return f"{_round_chf(premium)} {CURRENCY}/month"


def format_premium(premium: Optional[Decimal]) -> str:
    """Two-decimal premium for tables. Rounding only happens here."""
    if premium is None:
        return ""
    return f"{Decimal(premium).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)}"


def format_cost_diff(annual_savings: Optional[Decimal]) -> Tuple[str, str]:
    """
    Format a raw annual difference (current - candidate) * 12.

    The sign shown is inverted from the raw value: a cheaper candidate
    (raw positive) reads as a negative cost, a dearer one as a surcharge.

    Args:
        annual_savings: Raw signed difference, or None when not shown

    Returns:
        Tuple of (text, tone)
        - Cheaper: ("-240 CHF/year", "favorable")
        - More expensive: ("+240 CHF/year", "unfavorable")
        - None: ("", "neutral")
    """
    if annual_savings is None:
        return ("", "neutral")

    amount = _round_chf(abs(annual_savings))
    if annual_savings > 0:
        return (f"-{amount} {CURRENCY}/year", "favorable")
    return (f"+{amount} {CURRENCY}/year", "unfavorable")


def format_deadline_label(day: Optional[date]) -> str:
    """Deadline as "March 31"."""
    if day is None:
        return ""
    return f"{day:%B} {day.day}"


def describe_window(window: EligibilityWindow) -> WindowDisplay:
    """
    Display text for a switching window.

    Closed windows show a locked message and no day count. Open windows
    with SHORT_DEADLINE_DAYS or fewer days left are flagged urgent.
    """
    deadline_label = format_deadline_label(window.deadline)
    caption = f"Days until {deadline_label}" if deadline_label else ""

    if not window.is_open:
        message = LOCKED_MESSAGE
        tone = 'locked'
        days_text = ""
    elif window.days_remaining <= SHORT_DEADLINE_DAYS:
        message = URGENT_MESSAGE.format(days=window.days_remaining)
        tone = 'urgent'
        days_text = str(window.days_remaining)
    else:
        message = OPEN_MESSAGE
        tone = 'open'
        days_text = str(window.days_remaining)

    return WindowDisplay(
        title=WINDOW_TITLES[window.kind],
        subtitle=WINDOW_SUBTITLES[window.kind],
        days_text=days_text,
        deadline_caption=caption,
        message=message,
        tone=tone,
    )


def format_entry(entry: ComparisonEntry) -> dict:
    """Display fields for one comparison slot or table row."""
    if entry.is_placeholder:
        return {
            'heading': entry.heading,
            'plan_type': category_label(entry.category),
            'insurer': NO_DATA_TEXT if entry.category is not None else "",
            'plan_name': "",
            'monthly': "",
            'annual_diff': "",
        }
    diff_text, _ = format_cost_diff(entry.annual_savings)
    return {
        'heading': entry.heading,
        'plan_type': category_label(entry.category),
        'insurer': entry.insurer_name or "(??)",
        'plan_name': entry.plan_label,
        'monthly': format_monthly(entry.monthly_premium),
        'annual_diff': diff_text,
    }


def comparison_to_dataframe(result: ComparisonResult) -> pd.DataFrame:
    """Four comparison slots as a DataFrame, one row per slot."""
    return pd.DataFrame([format_entry(slot) for slot in result.slots])


def downgrade_rows_to_dataframe(rows: List[DowngradeRow]) -> pd.DataFrame:
    """Model alternatives table; zero differences show as an empty cell."""
    records = []
    for row in rows:
        if row.is_current:
            savings_text = CURRENT_PLAN_SAVINGS_TEXT
        else:
            savings_text, _ = format_cost_diff(row.annual_savings)
        records.append({
            'Plan type': category_label(row.category),
            'Plan name': row.plan_label,
            'Monthly premium': format_monthly(row.monthly_premium),
            'Annual savings': savings_text,
        })
    return pd.DataFrame(records, columns=['Plan type', 'Plan name', 'Monthly premium', 'Annual savings'])


def plan_table_to_dataframe(rows: List[ComparisonEntry], show_difference: bool) -> pd.DataFrame:
    """One category table; the difference column only when a current plan is known."""
    columns = ['Insurer', 'Plan', 'Monthly Premium']
    if show_difference:
        columns.append('Year Diff')

    records = []
    for row in rows:
        record = {
            'Insurer': row.insurer_name,
            'Plan': row.plan_label,
            'Monthly Premium': format_premium(row.monthly_premium),
        }
        if show_difference:
            record['Year Diff'] = format_cost_diff(row.annual_savings)[0]
        records.append(record)
    return pd.DataFrame(records, columns=columns)
