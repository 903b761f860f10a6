import streamlit as st

from loancap.presets import (
    DEFAULT_DURATION_YEARS,
    DEFAULT_INCOME,
    DEFAULT_RATE,
    DURATION_MARKS,
    RATE_MODES,
)
from ui.components import parse_number, t
from ui.periods import render_period_editor


def _init_form_state() -> None:
    st.session_state.setdefault("monthly_income", f"{DEFAULT_INCOME:g}")
    st.session_state.setdefault("annual_rate_value", f"{DEFAULT_RATE:g}")
    st.session_state.setdefault("duration_years", DEFAULT_DURATION_YEARS)
    st.session_state.setdefault("rate_mode", "single")
    st.session_state.setdefault("rate_periods", [])


def _render_rate_input() -> str:
    # the widget is not drawn in multi mode and Streamlit forgets its state,
    # so the typed text lives under a plain key and re-seeds the widget
    if "annual_rate" not in st.session_state:
        st.session_state["annual_rate"] = st.session_state["annual_rate_value"]
    rate = st.text_input(t("form.annual_rate"), key="annual_rate", placeholder="3.8")
    st.session_state["annual_rate_value"] = rate
    return rate


def render_loan_form():
    """Render the loan inputs and return ``(values, mode)``.

    ``values`` holds raw form values keyed like ``LoanInputs``; validation
    happens afterwards so that field messages can be shown together.
    """
    _init_form_state()
    c1, c2 = st.columns(2)
    income = c1.text_input(t("form.monthly_income"), key="monthly_income", placeholder="3000")
    duration = c2.select_slider(
        t("form.duration_years"), options=DURATION_MARKS, key="duration_years"
    )

    mode = st.radio(
        t("form.rate_mode"),
        RATE_MODES,
        format_func=lambda m: t(f"form.mode.{m}"),
        horizontal=True,
        key="rate_mode",
    )

    values = {
        "monthly_income": parse_number(income),
        "annual_rate": parse_number(st.session_state["annual_rate_value"]),
        "duration_years": duration,
    }
    if mode == "multi":
        values["rate_periods"] = render_period_editor(duration)
    else:
        values["annual_rate"] = parse_number(_render_rate_input())
    return values, mode
