"""Form validation on top of the pydantic input models."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from core.i18n import t
from loancap.models import LoanInputs
from loancap.presets import DEFAULT_LANGUAGE, MAX_LOAN_DURATION_YEARS

logger = logging.getLogger(__name__)

# pydantic error types raised when a value is not a usable number
_NOT_A_NUMBER = {
    "missing",
    "float_type",
    "float_parsing",
    "int_type",
    "int_parsing",
    "int_from_float",
    "finite_number",
}


def _message_key(loc: tuple, err_type: str) -> str:
    field = str(loc[0]) if loc else ""
    if field == "rate_periods":
        sub = str(loc[-1]) if len(loc) >= 3 else "years"
        return f"error.rate_periods.{sub}"
    kind = "number" if err_type in _NOT_A_NUMBER else "range"
    return f"error.{field}.{kind}"


def field_errors(exc: ValidationError, lang: str = DEFAULT_LANGUAGE) -> Dict[str, str]:
    """Map a ``ValidationError`` to one message per form field.

    Only the first error of each field is kept, matching how the form shows a
    single message under each input.
    """

    out: Dict[str, str] = {}
    for err in exc.errors():
        loc = tuple(err.get("loc", ()))
        field = str(loc[0]) if loc else "__root__"
        if field in out:
            continue
        key = _message_key(loc, err.get("type", ""))
        out[field] = t(key, lang, max_years=MAX_LOAN_DURATION_YEARS)
    return out


def validate_inputs(
    values: Dict[str, Any], lang: str = DEFAULT_LANGUAGE
) -> Tuple[Optional[LoanInputs], Dict[str, str]]:
    """Build ``LoanInputs`` from raw form values.

    Returns the model and an empty dict, or ``None`` and the field messages.
    """

    try:
        return LoanInputs(**values), {}
    except ValidationError as exc:
        errors = field_errors(exc, lang)
        logger.info("loan form rejected: %s", ", ".join(sorted(errors)))
        return None, errors
