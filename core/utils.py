"""Assorted display helpers."""

from loancap.presets import CURRENCY_SYMBOL

# fr-FR groups thousands with a narrow no-break space
THOUSANDS_SEP = "\u202f"
# and keeps the unit on the same line as the number
NBSP = "\u00a0"


def _fr_number(value, decimals: int) -> str:
    s = f"{value:,.{decimals}f}"
    return s.replace(",", THOUSANDS_SEP).replace(".", ",")


def format_currency(value) -> str:
    """Render an amount the way fr-FR shows euros, e.g. ``148 065,35 €``."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        v = 0.0
    return f"{_fr_number(v, 2)}{NBSP}{CURRENCY_SYMBOL}"


def format_rate(value) -> str:
    """Render a percentage with a comma decimal, e.g. ``3,8 %``."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        v = 0.0
    text = f"{v:g}".replace(".", ",")
    return f"{text}{NBSP}%"
