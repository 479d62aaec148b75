"""
SQL queries for the Premium Switch Advisor
All queries against the premium catalog PostgreSQL database
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from constants import (
    ACCIDENT_INCLUDED,
    PREMIUM_QUERY_LIMIT,
    INSURER_PLAN_QUERY_LIMIT,
    POSTAL_QUERY_LIMIT,
    DATABASE_TABLES,
)
from database import DatabaseConnection
from plan_comparison_types import PlanOffer, PostalLocation, UserProfile
from utils import ValidationError, parse_deductible, parse_premium

logger = logging.getLogger(__name__)

# Filter name -> catalog column
FILTER_COLUMNS = {
    'bag_code': 'bag_code',
    'canton': 'kanton',
    'region': 'region',
    'age_bracket': 'altersklasse',
    'deductible': 'franchise',
    'accident_coverage': 'unfalleinschluss',
}

PREMIUM_FILTERS = ['canton', 'region', 'age_bracket', 'deductible', 'accident_coverage']
INSURER_PLAN_FILTERS = ['bag_code'] + PREMIUM_FILTERS

POSTAL_COLUMNS = ['id', 'plz', 'gemeinde', 'ort_localite', 'kanton', 'region_int']


def build_where_clause(params: Dict[str, Any], table_alias: str,
                       allowed_fields: Sequence[str]) -> Tuple[str, List[Any]]:
    """
    Build a parameterized WHERE clause from filter values.

    Empty values are skipped, as is a deductible that is not a whole number.

    Args:
        params: Filter name -> value
        table_alias: Alias of the premiums table in the query
        allowed_fields: Filters to consider, in clause order

    Returns:
        Tuple of (where_clause, values); where_clause is "" when nothing applies

    Examples:
        >>> build_where_clause({'canton': 'ZH', 'deductible': '300'}, 'p', ['canton', 'deductible'])
        ('WHERE p.kanton = %s AND p.franchise = %s', ['ZH', 300])
    """
    where_parts = []
    values = []

    for field_name in allowed_fields:
        column = FILTER_COLUMNS.get(field_name)
        value = params.get(field_name)
        if column is None or value is None or value == '':
            continue

        if field_name == 'deductible':
            try:
                value = int(value)
            except (TypeError, ValueError):
                continue

        where_parts.append(f"{table_alias}.{column} = %s")
        values.append(value)

    where_clause = f"WHERE {' AND '.join(where_parts)}" if where_parts else ""
    return where_clause, values


def profile_filters(profile: UserProfile) -> Dict[str, Any]:
    """Catalog filters for a profile (accident coverage defaults to included)."""
    return {
        'canton': profile.canton,
        'region': profile.region,
        'age_bracket': profile.age_bracket,
        'deductible': profile.deductible,
        'accident_coverage': profile.accident_coverage or ACCIDENT_INCLUDED,
    }


class PremiumQueries:
    """SQL queries for premium catalog retrieval"""

    @staticmethod
    def get_premiums(db: DatabaseConnection, profile: UserProfile) -> pd.DataFrame:
        """
        Get premium rows matching the profile's location, age bracket,
        deductible and accident coverage.

        Args:
            db: Database connection
            profile: User profile supplying the filters

        Returns:
            DataFrame of premium rows, cheapest first
        """
        where_clause, values = build_where_clause(profile_filters(profile), 'p', PREMIUM_FILTERS)

        query = f"""
        SELECT
            p.id,
            p.tarif,
            p.tariftyp,
            p.tarifbezeichnung,
            p.franchise,
            p.unfalleinschluss,
            p.altersklasse,
            p.praemie,
            i.name AS insurer_name,
            COALESCE(NULLIF(p.tarifbezeichnung, ''), p.tarif) AS plan_label
        FROM {DATABASE_TABLES['premiums']} p
        LEFT JOIN {DATABASE_TABLES['insurers']} i ON p.bag_code = i.bag_code
        {where_clause}
        ORDER BY p.praemie ASC
        LIMIT {PREMIUM_QUERY_LIMIT}
        """
        return db.execute_query(query, tuple(values) if values else None)

    @staticmethod
    def get_insurers(db: DatabaseConnection) -> pd.DataFrame:
        """Get insurers with a name, alphabetically"""
        query = f"""
        SELECT id, bag_code, name
        FROM {DATABASE_TABLES['insurers']}
        WHERE name IS NOT NULL
        ORDER BY name ASC
        """
        return pd.read_sql(query, db.engine)

    @staticmethod
    def get_insurer_plans(db: DatabaseConnection, bag_code: str,
                          profile: UserProfile) -> pd.DataFrame:
        """
        Get the distinct plans an insurer offers for the profile's filters.

        Args:
            db: Database connection
            bag_code: Insurer's FOPH code
            profile: User profile supplying the remaining filters

        Returns:
            DataFrame with columns: plan_identifier, plan_label, tariftyp
        """
        params = dict(profile_filters(profile), bag_code=bag_code)
        where_clause, values = build_where_clause(params, 'p', INSURER_PLAN_FILTERS)

        query = f"""
        SELECT DISTINCT ON (COALESCE(NULLIF(p.tarifbezeichnung, ''), p.tarif))
            p.tarif AS plan_identifier,
            COALESCE(NULLIF(p.tarifbezeichnung, ''), p.tarif) AS plan_label,
            p.tariftyp
        FROM {DATABASE_TABLES['premiums']} p
        {where_clause}
        ORDER BY COALESCE(NULLIF(p.tarifbezeichnung, ''), p.tarif) ASC
        LIMIT {INSURER_PLAN_QUERY_LIMIT}
        """
        return db.execute_query(query, tuple(values) if values else None)

    @staticmethod
    def search_postal(db: DatabaseConnection, search_text: Optional[str]) -> pd.DataFrame:
        """
        Find postal-code records whose PLZ starts with the given text.

        Args:
            db: Database connection
            search_text: Leading digits of a postal code

        Returns:
            DataFrame with columns: id, plz, gemeinde, ort_localite, kanton,
            region_int (empty when the search text is blank)
        """
        search = (search_text or '').strip()
        if not search:
            return pd.DataFrame(columns=POSTAL_COLUMNS)

        query = f"""
        SELECT {', '.join(POSTAL_COLUMNS)}
        FROM {DATABASE_TABLES['postal_mappings']}
        WHERE plz ILIKE %s
        ORDER BY plz
        LIMIT {POSTAL_QUERY_LIMIT}
        """
        return db.execute_query(query, (f"{search}%",))

    @staticmethod
    def get_postal_by_id(db: DatabaseConnection, postal_id: Any) -> pd.DataFrame:
        """Get one postal-code record by id; empty for an unknown or invalid id"""
        try:
            postal_id = int(postal_id)
        except (TypeError, ValueError):
            return pd.DataFrame(columns=POSTAL_COLUMNS)
        if postal_id <= 0:
            return pd.DataFrame(columns=POSTAL_COLUMNS)

        query = f"""
        SELECT {', '.join(POSTAL_COLUMNS)}
        FROM {DATABASE_TABLES['postal_mappings']}
        WHERE id = %s
        """
        return db.execute_query(query, (postal_id,))


def _text(value: Any, default: str = "") -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return default
    return str(value)


def offers_from_dataframe(premiums_df: pd.DataFrame) -> List[PlanOffer]:
    """
    Convert premium rows (from PremiumQueries.get_premiums) to PlanOffers.

    Row order is preserved. A missing category becomes Other, a missing
    label falls back to the plan identifier.

    Raises:
        ValidationError: If a row's premium is not numeric or its deductible
            is not a whole CHF amount
    """
    if premiums_df is None or premiums_df.empty:
        return []

    offers = []
    for idx, row in premiums_df.iterrows():
        plan_identifier = _text(row.get('tarif'))
        try:
            premium = parse_premium(row.get('praemie'), field='praemie')
        except ValidationError as e:
            logger.error(f"CATALOG: Row {idx} ({plan_identifier}) has an invalid premium: {e}")
            raise ValidationError(f"praemie[{idx}]", str(e))

        try:
            deductible = parse_deductible(row.get('franchise'), field='franchise')
        except ValidationError as e:
            logger.error(f"CATALOG: Row {idx} ({plan_identifier}) has an invalid deductible: {e}")
            raise ValidationError(f"franchise[{idx}]", str(e))

        offers.append(PlanOffer(
            category=_text(row.get('tariftyp')) or None,
            insurer_name=_text(row.get('insurer_name')),
            plan_identifier=plan_identifier,
            plan_label=_text(row.get('plan_label')) or _text(row.get('tarifbezeichnung')) or plan_identifier,
            monthly_premium=premium,
            age_bracket=_text(row.get('altersklasse')),
            deductible=deductible,
            accident_coverage=_text(row.get('unfalleinschluss'), ACCIDENT_INCLUDED),
            offer_id=int(row['id']) if 'id' in row and not pd.isna(row['id']) else None,
        ))

    logger.info(f"CATALOG: Loaded {len(offers)} offers")
    return offers


def postal_locations_from_dataframe(postal_df: pd.DataFrame) -> List[PostalLocation]:
    """Convert postal_mappings rows (search_postal / get_postal_by_id) to PostalLocations."""
    if postal_df is None or postal_df.empty:
        return []

    locations = []
    for _, row in postal_df.iterrows():
        region = row.get('region_int')
        # region_int may arrive as a float when the column has gaps
        if region is not None and not isinstance(region, str) and not pd.isna(region):
            region = int(region)
        locations.append(PostalLocation(
            postal_id=int(row['id']),
            plz=_text(row.get('plz')),
            municipality=_text(row.get('gemeinde')),
            locality=_text(row.get('ort_localite')),
            canton=_text(row.get('kanton')),
            region_number=_text(region),
        ))
    return locations
