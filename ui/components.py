import streamlit as st

from core import i18n
from loancap.presets import DEFAULT_LANGUAGE


def current_language() -> str:
    return st.session_state.get("ui_prefs", {}).get("language", DEFAULT_LANGUAGE)


def t(key: str, **params) -> str:
    """Translate a key based on current language preference."""
    return i18n.t(key, current_language(), **params)


def parse_number(text):
    """Accept both ``3.8`` and the French ``3,8`` from free-text inputs."""
    if isinstance(text, str):
        return text.strip().replace(" ", "").replace("\u00a0", "").replace("\u202f", "").replace(",", ".")
    return text
