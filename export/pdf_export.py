"""PDF rendering of a capacity result."""
from __future__ import annotations
import io

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from core.i18n import t
from core.utils import format_currency, format_rate
from loancap.calculators import SCHEDULE_COLUMNS, amortization_frame
from loancap.models import CapacityResult, LoanInputs
from loancap.presets import DEFAULT_LANGUAGE, DISCLAIMER


# standard PDF fonts have no glyph for the narrow no-break space
def _amount(value) -> str:
    return format_currency(value).replace("\u202f", "\u00a0")


GRID_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("BOX", (0, 0), (-1, -1), 1, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]
)


def _summary_rows(result: CapacityResult, inputs: LoanInputs, lang: str) -> list[list[str]]:
    rows = [
        [t("pdf.monthly_income", lang), _amount(inputs.monthly_income)],
        [t("pdf.duration", lang), t("pdf.duration_value", lang, years=inputs.duration_years)],
    ]
    if result.effective_mode == "single":
        rows.append([t("pdf.rate", lang), format_rate(inputs.annual_rate)])
    rows += [
        [t("results.max_installment", lang), _amount(result.max_monthly_installment)],
        [t("results.max_principal", lang), _amount(result.max_loan_principal)],
    ]
    return rows


def build_schedule_pdf(
    result: CapacityResult, inputs: LoanInputs, lang: str = DEFAULT_LANGUAGE
) -> bytes:
    """Render the summary, periods used and amortization table as PDF bytes.

    Raises ``ValueError`` when the result has no amortization rows, since
    there is nothing to print.
    """

    if not result.amortization_table:
        raise ValueError("cannot export an empty amortization table")

    styles = getSampleStyleSheet()
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=36)
    story = [Paragraph(f"<b>{t('pdf.title', lang)}</b>", styles["Title"]), Spacer(1, 6)]

    summary = Table(
        [[t("pdf.summary", lang), ""]] + _summary_rows(result, inputs, lang),
        hAlign="LEFT",
        colWidths=[220, 200],
    )
    summary.setStyle(GRID_STYLE)
    story += [summary, Spacer(1, 12)]

    if result.effective_mode == "multi":
        story.append(Paragraph(t("results.periods_used", lang), styles["Heading3"]))
        for p in inputs.rate_periods:
            item = t("results.period_item", lang, years=p.years, rate=format_rate(p.rate))
            story.append(Paragraph(f"• {item}", styles["Normal"]))
        story.append(Spacer(1, 12))

    df = amortization_frame(result.amortization_table)
    header = [t(f"col.{c}", lang) for c in SCHEDULE_COLUMNS]
    body = [
        [str(int(r.Month))] + [_amount(getattr(r, c)) for c in SCHEDULE_COLUMNS[1:]]
        for r in df.itertuples(index=False)
    ]
    schedule = Table([header] + body, hAlign="LEFT", repeatRows=1)
    schedule.setStyle(GRID_STYLE)
    story += [
        Paragraph(f"<b>{t('results.amortization', lang)}</b>", styles["Heading3"]),
        Spacer(1, 6),
        schedule,
        Spacer(1, 12),
        Paragraph(f"<font size=8>{DISCLAIMER}</font>", styles["Normal"]),
    ]
    doc.build(story)
    return buf.getvalue()
