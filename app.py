import logging

import streamlit as st

from core.i18n import t
from core.rules import evaluate_rules
from core.validation import validate_inputs
from core.version import __version__
from loancap.calculators import compute_capacity
from loancap.presets import DEFAULT_LANGUAGE, DISCLAIMER, LANGUAGES
from ui.form import render_loan_form
from ui.results import render_results

logger = logging.getLogger(__name__)


def render_language_picker() -> str:
    prefs = st.session_state.setdefault("ui_prefs", {"language": DEFAULT_LANGUAGE})
    codes = list(LANGUAGES)
    current = prefs.get("language", DEFAULT_LANGUAGE)
    lang = st.sidebar.selectbox(
        t("form.language", current),
        codes,
        index=codes.index(current) if current in codes else 0,
        format_func=lambda c: LANGUAGES[c],
    )
    st.session_state["ui_prefs"] = {**prefs, "language": lang}
    return lang


def render_rules(rules, lang: str) -> None:
    for r in rules:
        text = t(f"rule.{r.code}", lang)
        if text == f"rule.{r.code}":
            text = r.message
        if r.severity == "critical":
            st.error(text)
        elif r.severity == "warn":
            st.warning(text)
        else:
            st.info(text)


def render_calculator() -> None:
    """Form, validation messages, rule warnings and results for one run."""
    lang = render_language_picker()
    st.title(t("app.title", lang))
    values, mode = render_loan_form()

    inputs, errors = validate_inputs(values, lang)
    if errors:
        for msg in errors.values():
            st.error(msg)
        return

    result = compute_capacity(inputs, mode)
    render_rules(evaluate_rules(result, inputs), lang)
    render_results(result, inputs)


def main() -> None:
    st.set_page_config(page_title="Capacité d'emprunt", layout="centered")
    render_calculator()
    st.caption(DISCLAIMER)
    st.caption(f"v{__version__}")


if __name__ == "__main__":
    main()
