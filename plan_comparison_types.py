"""
Plan Comparison Types
Dataclasses for the premium comparison: catalog offers, the user's profile
and the ranked comparison slots
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional, List, Union

from constants import (
    CATEGORY_CODE_STANDARD,
    CATEGORY_CODE_FAMILY_DOCTOR,
    CATEGORY_CODE_HMO,
    CATEGORY_CODE_OTHER,
    ACCIDENT_INCLUDED,
    NO_INSURER,
    REGION_CODE_PREFIX,
)
from utils import ValidationError, parse_premium

__all__ = [
    'PlanCategory',
    'CATEGORY_ORDER',
    'PlanOffer',
    'UserProfile',
    'ComparisonEntry',
    'ComparisonResult',
    'DowngradeRow',
    'PostalLocation',
    'ValidationError',
    'CURRENT_PLAN_HEADING',
    'CHEAPEST_OPTION_HEADING',
]

CURRENT_PLAN_HEADING = "Current plan"
CHEAPEST_OPTION_HEADING = "Cheapest option"


class PlanCategory(Enum):
    """
    Coverage model of a plan.

    STANDARD: free choice of doctor
    FAMILY_DOCTOR: family doctor is the first point of contact
    HMO: care coordinated through an HMO practice
    OTHER: telemedicine and anything the catalog does not classify
    """
    STANDARD = CATEGORY_CODE_STANDARD
    FAMILY_DOCTOR = CATEGORY_CODE_FAMILY_DOCTOR
    HMO = CATEGORY_CODE_HMO
    OTHER = CATEGORY_CODE_OTHER

    @classmethod
    def from_code(cls, code: Union[str, 'PlanCategory', None]) -> 'PlanCategory':
        """Map a catalog code to a category; unknown or missing codes are OTHER."""
        if isinstance(code, cls):
            return code
        if code is None:
            return cls.OTHER
        try:
            return cls(str(code).strip())
        except ValueError:
            return cls.OTHER


# Fixed order used for searching, grouping and placeholder labels
CATEGORY_ORDER = (
    PlanCategory.STANDARD,
    PlanCategory.FAMILY_DOCTOR,
    PlanCategory.HMO,
    PlanCategory.OTHER,
)


@dataclass(frozen=True)
class PlanOffer:
    """
    One quoted plan/price combination from the pricing catalog.

    Identity for the engine is (insurer_name, plan_identifier); offer_id is
    the catalog row id and does not take part in equality.
    """
    category: PlanCategory
    insurer_name: str
    plan_identifier: str
    plan_label: str
    monthly_premium: Decimal
    age_bracket: str = ""
    deductible: int = 0
    accident_coverage: str = ACCIDENT_INCLUDED
    offer_id: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, 'category', PlanCategory.from_code(self.category))
        object.__setattr__(self, 'monthly_premium', parse_premium(self.monthly_premium))
        object.__setattr__(self, 'insurer_name', self.insurer_name or "")
        object.__setattr__(self, 'plan_identifier', self.plan_identifier or "")
        object.__setattr__(self, 'plan_label', self.plan_label or "")

    def matches(self, insurer_name: Optional[str], plan_identifier: Optional[str]) -> bool:
        """Structural identity check against an insurer/plan pair."""
        return self.insurer_name == insurer_name and self.plan_identifier == plan_identifier

    def is_same_plan(self, other: 'PlanOffer') -> bool:
        return self.matches(other.insurer_name, other.plan_identifier)

    @property
    def display_label(self) -> str:
        return self.plan_label or self.plan_identifier


@dataclass(frozen=True)
class UserProfile:
    """
    The consumer's current situation, as entered in the wizard.
    Owned by the caller; the engine only reads it.
    """
    age_bracket: str = ""
    canton: str = ""
    region: str = ""
    deductible: int = 0
    accident_coverage: str = ACCIDENT_INCLUDED
    current_insurer_name: str = NO_INSURER
    current_plan_identifier: Optional[str] = None

    @property
    def has_current_insurer(self) -> bool:
        return bool(self.current_insurer_name) and self.current_insurer_name != NO_INSURER

    @property
    def has_current_plan(self) -> bool:
        """True when both a real insurer and a plan identifier are known."""
        return self.has_current_insurer and bool(self.current_plan_identifier)


@dataclass(frozen=True)
class ComparisonEntry:
    """
    One comparison slot (or plan-table row).

    annual_savings is the raw signed (current - candidate) * 12. It is None
    for the current plan, for placeholders, and when the raw difference is
    exactly zero.
    """
    heading: str
    category: Optional[PlanCategory] = None
    insurer_name: str = ""
    plan_label: str = ""
    monthly_premium: Optional[Decimal] = None
    annual_savings: Optional[Decimal] = None
    is_placeholder: bool = False

    @classmethod
    def placeholder(cls, heading: str,
                    category: Optional[PlanCategory] = None) -> 'ComparisonEntry':
        """'No data' slot, labelled with a category only."""
        return cls(heading=heading, category=category, is_placeholder=True)

    @classmethod
    def from_offer(cls, heading: str, offer: PlanOffer,
                   annual_savings: Optional[Decimal] = None) -> 'ComparisonEntry':
        return cls(
            heading=heading,
            category=offer.category,
            insurer_name=offer.insurer_name,
            plan_label=offer.display_label,
            monthly_premium=offer.monthly_premium,
            annual_savings=annual_savings,
        )


@dataclass(frozen=True)
class ComparisonResult:
    """Four ranked slots, always emitted in this order."""
    current: ComparisonEntry
    cheapest_same_category: ComparisonEntry
    cheapest_other_1: ComparisonEntry
    cheapest_other_2: ComparisonEntry

    @property
    def slots(self) -> List[ComparisonEntry]:
        return [
            self.current,
            self.cheapest_same_category,
            self.cheapest_other_1,
            self.cheapest_other_2,
        ]

    @property
    def has_current(self) -> bool:
        return not self.current.is_placeholder


@dataclass(frozen=True)
class DowngradeRow:
    """One row of the same-insurer model alternatives list."""
    category: PlanCategory
    insurer_name: str
    plan_label: str
    monthly_premium: Decimal
    annual_savings: Optional[Decimal] = None
    is_current: bool = False


@dataclass(frozen=True)
class PostalLocation:
    """
    One postal-code record. Resolves a PLZ to the canton and premium region
    the catalog is filtered by; a PLZ can map to several localities.
    """
    postal_id: int
    plz: str
    municipality: str
    locality: str
    canton: str
    region_number: str

    @property
    def region_code(self) -> str:
        """Catalog region code, e.g. "PR-REG CH1"."""
        return f"{REGION_CODE_PREFIX}{self.region_number}"

    @property
    def display_label(self) -> str:
        return f"{self.plz} {self.locality or self.municipality} ({self.canton})"
