"""
Premium Switch Advisor - Main Application
Streamlit app that compares mandatory health-insurance premiums against the
current plan and shows which switching windows are open today
"""

import logging
from dataclasses import replace
from typing import Tuple

# Configure logging BEFORE importing streamlit
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)s: %(message)s',
    datefmt='%H:%M:%S',
    force=True  # Override any existing config
)
logging.info("APP STARTUP: Logging initialized")

import psycopg2
import streamlit as st

from constants import (
    APP_CONFIG,
    ACCIDENT_OPTIONS,
    ACCIDENT_INCLUDED,
    NO_INSURER,
    PLAN_TABLE_PREVIEW_ROWS,
)
from database import get_database_connection, test_connection
from plan_comparison_types import CATEGORY_ORDER, UserProfile
from queries import PremiumQueries, offers_from_dataframe, postal_locations_from_dataframe
from switch_eval.services import SystemClock, evaluate_switch_options, build_plan_table
from switch_eval.utils import (
    has_mandatory_inputs,
    describe_window,
    format_entry,
    category_label,
    category_description,
    downgrade_rows_to_dataframe,
    plan_table_to_dataframe,
)
from utils import ValidationError, compute_age_bracket, get_deductible_options, get_reference_year

logger = logging.getLogger(__name__)

st.set_page_config(
    page_title=APP_CONFIG['title'],
    page_icon=APP_CONFIG['icon'],
    layout=APP_CONFIG['layout'],
    initial_sidebar_state=APP_CONFIG['initial_sidebar_state']
)

TONE_RENDERERS = {
    'locked': st.info,
    'urgent': st.error,
    'open': st.success,
}


def initialize_session_state():
    """Initialize session state variables"""
    if 'db' not in st.session_state:
        try:
            st.session_state.db = get_database_connection()
        except psycopg2.Error as e:
            # Pages can retry the connection
            logger.error(f"Failed to initialize database connection: {type(e).__name__}")
            st.session_state.db = None


def render_postal_input(db) -> Tuple[str, str]:
    """Postal-code search; returns the canton and premium region of the chosen locality."""
    if db is None:
        return "", ""

    # A shared link (?postal_id=...) pre-fills the search once per session
    linked_id = st.query_params.get('postal_id')
    if 'postal_search' not in st.session_state:
        linked = postal_locations_from_dataframe(PremiumQueries.get_postal_by_id(db, linked_id))
        st.session_state.postal_search = linked[0].plz if linked else ""

    search = st.sidebar.text_input("Postal code", key='postal_search', max_chars=4)
    locations = postal_locations_from_dataframe(PremiumQueries.search_postal(db, search))
    if not locations:
        if search.strip():
            st.sidebar.warning("No locality found for this postal code.")
        return "", ""

    ids = [location.postal_id for location in locations]
    index = 0
    if linked_id and linked_id.isdigit() and int(linked_id) in ids:
        index = ids.index(int(linked_id))
    location = st.sidebar.selectbox("Locality", locations, index=index,
                                    format_func=lambda loc: loc.display_label)
    st.query_params['postal_id'] = str(location.postal_id)
    return location.canton, location.region_code


def render_profile_inputs(db, today) -> UserProfile:
    """Sidebar inputs; returns the profile they describe."""
    st.sidebar.title(f"{APP_CONFIG['icon']} {APP_CONFIG['title']}")
    st.sidebar.markdown("---")

    year_of_birth = st.sidebar.number_input("Year of birth", min_value=0, max_value=today.year,
                                            value=0, step=1)
    age_bracket = compute_age_bracket(int(year_of_birth), get_reference_year(today))

    deductible_options = get_deductible_options(age_bracket)
    deductible = st.sidebar.selectbox("Deductible (CHF)", deductible_options)

    accident = st.sidebar.radio(
        "Accident coverage",
        list(ACCIDENT_OPTIONS.keys()),
        format_func=lambda code: ACCIDENT_OPTIONS[code],
    )
    canton, region = render_postal_input(db)

    profile = UserProfile(
        age_bracket=age_bracket,
        canton=canton,
        region=region,
        deductible=int(deductible),
        accident_coverage=accident or ACCIDENT_INCLUDED,
    )

    insurer_name = NO_INSURER
    plan_identifier = None
    if db is not None:
        insurers_df = PremiumQueries.get_insurers(db)
        names = [NO_INSURER] + insurers_df['name'].tolist() if not insurers_df.empty else [NO_INSURER]
        insurer_name = st.sidebar.selectbox("Current insurer", names)

        if insurer_name != NO_INSURER and has_mandatory_inputs(profile):
            bag_code = insurers_df.loc[insurers_df['name'] == insurer_name, 'bag_code'].iloc[0]
            plans_df = PremiumQueries.get_insurer_plans(db, bag_code, profile)
            if not plans_df.empty:
                labels = dict(zip(plans_df['plan_identifier'], plans_df['plan_label']))
                plan_identifier = st.sidebar.selectbox(
                    "Current plan", list(labels.keys()), format_func=lambda key: labels[key]
                )

    st.sidebar.markdown("---")
    if st.sidebar.button("🔌 Test Database Connection"):
        with st.sidebar:
            with st.spinner("Testing connection..."):
                if test_connection():
                    st.success("Database connected!")
                else:
                    st.error("Connection failed")

    return replace(profile, current_insurer_name=insurer_name, current_plan_identifier=plan_identifier)


def render_windows(evaluation):
    """One box per switching window"""
    for window in evaluation.windows:
        display = describe_window(window)
        with st.container(border=True):
            st.subheader(display.title)
            st.markdown(display.subtitle)
            if display.days_text:
                st.markdown(f"## {display.days_text}")
                st.caption(display.deadline_caption)
            TONE_RENDERERS[display.tone](display.message)


def render_comparison_boxes(entries):
    """Four comparison boxes side by side"""
    columns = st.columns(4)
    for column, entry in zip(columns, entries):
        fields = format_entry(entry)
        with column:
            with st.container(border=True):
                st.markdown(f"**{fields['heading']}**  \n{fields['plan_type']}")
                st.markdown(f"### {fields['insurer']}")
                st.caption(fields['plan_name'])
                st.markdown(fields['monthly'])
                if fields['annual_diff']:
                    st.markdown(f"**{fields['annual_diff']}**")


def render_category_tables(evaluation):
    """Per-category plan tables with a 'show more' expander"""
    show_difference = evaluation.current_offer is not None
    for category in CATEGORY_ORDER:
        offers = evaluation.categorized.get(category, [])
        if not offers:
            continue
        rows = build_plan_table(offers, evaluation.current_offer)
        st.subheader(category_label(category))
        st.caption(category_description(category))
        st.dataframe(plan_table_to_dataframe(rows[:PLAN_TABLE_PREVIEW_ROWS], show_difference),
                     hide_index=True)
        if len(rows) > PLAN_TABLE_PREVIEW_ROWS:
            with st.expander("Show more"):
                st.dataframe(plan_table_to_dataframe(rows[PLAN_TABLE_PREVIEW_ROWS:], show_difference),
                             hide_index=True)


def main():
    """Main application entry point"""
    initialize_session_state()
    db = st.session_state.db
    today = SystemClock().today()

    st.title(APP_CONFIG['title'])

    if db is None:
        st.error("✗ Database Connection Failed")

    profile = render_profile_inputs(db, today)

    if not has_mandatory_inputs(profile):
        st.info("Please pick location, bracket, and a valid franchise.")
        return

    offers = []
    if db is not None:
        try:
            offers = offers_from_dataframe(PremiumQueries.get_premiums(db, profile))
        except (psycopg2.Error, ValidationError) as e:
            logger.error(f"CATALOG: Could not load premiums: {e}")
            offers = []

    evaluation = evaluate_switch_options(profile, offers, today)

    render_windows(evaluation)

    if evaluation.comparison.has_current or profile.has_current_plan:
        render_comparison_boxes(evaluation.comparison.slots)
    else:
        render_comparison_boxes(evaluation.category_overview)

    if evaluation.downgrade_rows:
        st.subheader(f"Other plan models from {evaluation.current_offer.insurer_name or 'this insurer'}")
        st.dataframe(downgrade_rows_to_dataframe(evaluation.downgrade_rows), hide_index=True)

    if not offers:
        st.info("No plans found for these filters.")
        return

    render_category_tables(evaluation)


if __name__ == "__main__":
    main()
