import streamlit as st

from loancap.calculators import periods_mismatch, sum_period_years
from loancap.periods import add_period, autofill_last_period, remove_period
from ui.components import t


def _years_key(i: int) -> str:
    return f"period_{i}_years"


def _rate_key(i: int) -> str:
    return f"period_{i}_rate"


def _reset_period_widgets() -> None:
    """Drop widget state so the next run re-seeds inputs from ``rate_periods``."""
    for key in [k for k in st.session_state.keys() if str(k).startswith("period_")]:
        del st.session_state[key]


def render_period_editor(duration_years: int) -> list:
    """Editable list of rate periods; the last period absorbs the remaining years."""
    st.session_state.setdefault("rate_periods", [])
    periods = st.session_state["rate_periods"]

    c1, c2 = st.columns([3, 1])
    c1.markdown(f"**{t('form.periods')}**")
    if c2.button(t("form.add_period"), key="add_period"):
        st.session_state["rate_periods"] = add_period(periods, duration_years)
        _reset_period_widgets()
        st.rerun()

    edited = []
    remove_idx = None
    last = len(periods) - 1
    for i, p in enumerate(periods):
        if i == last:
            target = autofill_last_period(edited + [dict(p)], duration_years)[-1]["years"]
            st.session_state[_years_key(i)] = target
        else:
            st.session_state.setdefault(_years_key(i), max(int(p.get("years", 1)), 1))
        st.session_state.setdefault(_rate_key(i), float(p.get("rate", 0.0)))

        cols = st.columns([2, 2, 1])
        years = cols[0].number_input(
            t("form.period_years"),
            min_value=0 if i == last else 1,
            step=1,
            key=_years_key(i),
            disabled=i == last,
        )
        rate = cols[1].number_input(
            t("form.period_rate"),
            min_value=0.0,
            step=0.1,
            format="%.2f",
            key=_rate_key(i),
        )
        if cols[2].button(t("form.remove_period"), key=f"remove_period_{i}"):
            remove_idx = i
        edited.append({"years": int(years), "rate": float(rate)})

    st.session_state["rate_periods"] = edited
    if remove_idx is not None:
        st.session_state["rate_periods"] = remove_period(edited, remove_idx)
        _reset_period_widgets()
        st.rerun()

    if edited:
        used = sum_period_years(edited)
        msg = t("form.periods_total", used=int(used), duration=duration_years)
        if periods_mismatch("multi", edited, duration_years):
            st.error(f"{msg}. {t('form.periods_mismatch')}")
        else:
            st.caption(msg)
    return edited
