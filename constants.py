"""
Constants and reference data for the Premium Switch Advisor
Includes catalog codes, the switching calendar and app configuration
"""

# ==============================================================================
# PREMIUM CATALOG CODES
# ==============================================================================
# Codes as stored in the FOPH premium catalog (premiums.tariftyp)

CATEGORY_CODE_STANDARD = "TAR-BASE"
CATEGORY_CODE_FAMILY_DOCTOR = "TAR-HAM"
CATEGORY_CODE_HMO = "TAR-HMO"
CATEGORY_CODE_OTHER = "TAR-DIV"

CATEGORY_LABELS = {
    CATEGORY_CODE_STANDARD: "Standard",
    CATEGORY_CODE_FAMILY_DOCTOR: "Family doctor",
    CATEGORY_CODE_HMO: "HMO",
    CATEGORY_CODE_OTHER: "Other plan types",
}

CATEGORY_DESCRIPTIONS = {
    CATEGORY_CODE_STANDARD: "A simple mandatory coverage with free doctor choice.",
    CATEGORY_CODE_FAMILY_DOCTOR: "Requires you to see your family doctor first.",
    CATEGORY_CODE_HMO: "Coordinates care via an HMO network.",
    CATEGORY_CODE_OTHER: "Alternative coverage beyond standard, family, or HMO.",
}

# Age brackets (premiums.altersklasse)
AGE_BRACKET_CHILD = "AKL-KIN"        # 0-18
AGE_BRACKET_YOUNG_ADULT = "AKL-JUG"  # 19-25
AGE_BRACKET_ADULT = "AKL-ERW"        # 26+

CHILD_MAX_AGE = 18
YOUNG_ADULT_MAX_AGE = 25
MIN_VALID_BIRTH_YEAR = 1900

# Accident coverage (premiums.unfalleinschluss)
ACCIDENT_INCLUDED = "MIT-UNF"
ACCIDENT_EXCLUDED = "OHN-UNF"
ACCIDENT_OPTIONS = {
    ACCIDENT_INCLUDED: "With accident coverage",
    ACCIDENT_EXCLUDED: "Without accident coverage",
}

# Deductible (franchise) options in CHF, by age bracket
CHILD_DEDUCTIBLE_OPTIONS = [0, 100, 200, 300, 400, 500, 600]
ADULT_DEDUCTIBLE_OPTIONS = [300, 500, 1000, 1500, 2000, 2500]

# Sentinel for "uninsured / unknown" in the current-insurer picker
NO_INSURER = "I have no insurer"

# ==============================================================================
# SWITCHING CALENDAR
# ==============================================================================
# Source: KVG Art. 7 (change of insurer) and the insurers' model-change terms.
# Month indices are 0-based (January = 0).

# Annual provider switch: notice must reach the insurer by November 30
ANNUAL_DEADLINE_MONTH = 11
ANNUAL_DEADLINE_DAY = 30
ANNUAL_SWITCH_MONTH_INDEX = 10

# Mid-year switch (effective July 1) for lowest-deductible Standard plans:
# notice by March 31, admission window January through March
MID_YEAR_DEADLINE_MONTH = 3
MID_YEAR_DEADLINE_DAY = 31
MID_YEAR_MONTH_INDICES = (0, 1, 2)

# Model change within the same insurer: any month end except November
MODEL_CHANGE_EXCLUDED_MONTH_INDEX = ANNUAL_SWITCH_MONTH_INDEX

# Python weekday() values for Saturday and Sunday
WEEKEND_DAYS = (5, 6)

# Deadlines this close are flagged as urgent in the UI
SHORT_DEADLINE_DAYS = 5

MONTHS_PER_YEAR = 12

# ==============================================================================
# DATABASE / QUERY SETTINGS
# ==============================================================================

PREMIUM_QUERY_LIMIT = 300
INSURER_PLAN_QUERY_LIMIT = 200
POSTAL_QUERY_LIMIT = 20

DATABASE_TABLES = {
    'premiums': 'premiums',
    'insurers': 'insurers',
    'postal_mappings': 'postal_mappings',
}

# Premium regions are stored as e.g. "PR-REG CH1"; postal_mappings only holds the number
REGION_CODE_PREFIX = "PR-REG CH"

# ==============================================================================
# APP CONFIGURATION
# ==============================================================================

APP_CONFIG = {
    'title': 'Premium Switch Advisor',
    'icon': '🩺',
    'layout': 'wide',
    'initial_sidebar_state': 'expanded'
}

# Rows shown per category table before "show more"
PLAN_TABLE_PREVIEW_ROWS = 5

CURRENCY = "CHF"

if __name__ == "__main__":
    # Display constants for verification
    print("Premium Switch Advisor Constants")
    print("=" * 50)
    print(f"\nCategories: {', '.join(CATEGORY_LABELS.values())}")
    print(f"Child deductibles: {CHILD_DEDUCTIBLE_OPTIONS}")
    print(f"Adult deductibles: {ADULT_DEDUCTIBLE_OPTIONS}")
    print(f"\nAnnual deadline: {ANNUAL_DEADLINE_DAY}.{ANNUAL_DEADLINE_MONTH}.")
    print(f"Mid-year deadline: {MID_YEAR_DEADLINE_DAY}.{MID_YEAR_DEADLINE_MONTH}.")

    print("\n✓ All constants loaded successfully!")
