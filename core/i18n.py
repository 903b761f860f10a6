"""Label lookup for the French and English translations.

Translations are flat JSON files under ``translations/`` keyed by dotted
names (``form.annual_rate``, ``error.monthly_income.range``).  A key missing
from the requested language is looked up in French before falling back to
the key itself, so an incomplete translation still renders a sensible label.
"""
from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict

from loancap.presets import DEFAULT_LANGUAGE, LANGUAGES

logger = logging.getLogger(__name__)

TRANSLATIONS_DIR = Path(__file__).resolve().parents[1] / "translations"


@lru_cache()
def load_translations(lang: str) -> Dict[str, str]:
    if lang not in LANGUAGES:
        logger.warning("unsupported language %r, using %s", lang, DEFAULT_LANGUAGE)
        lang = DEFAULT_LANGUAGE
    with (TRANSLATIONS_DIR / f"{lang}.json").open("r", encoding="utf-8") as f:
        return json.load(f)


def t(key: str, lang: str = DEFAULT_LANGUAGE, **params) -> str:
    """Translated label for ``key``, with ``{name}`` placeholders filled from ``params``."""
    text = load_translations(lang).get(key)
    if text is None:
        text = load_translations(DEFAULT_LANGUAGE).get(key, key)
    return text.format(**params) if params else text
