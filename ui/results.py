import streamlit as st

from core.utils import format_currency, format_rate
from export.csv_export import schedule_csv
from export.pdf_export import build_schedule_pdf
from loancap.calculators import amortization_frame, total_interest, yearly_summary
from loancap.models import CapacityResult, LoanInputs
from ui.components import current_language, t


def _display_frame(df):
    """Format amounts for display and translate column headers."""
    out = df.copy()
    for col in out.columns:
        if col not in ("Month", "Year"):
            out[col] = out[col].map(format_currency)
    return out.rename(columns={c: t(f"col.{c}") for c in out.columns})


def render_results(result: CapacityResult, inputs: LoanInputs):
    """Results block: headline figures, periods used and the schedule."""
    if result.max_loan_principal <= 0:
        return
    st.header(t("results.title"))
    cols = st.columns(3)
    cols[0].metric(t("results.max_installment"), format_currency(result.max_monthly_installment))
    cols[1].metric(t("results.max_principal"), format_currency(result.max_loan_principal))
    cols[2].metric(t("results.total_interest"), format_currency(total_interest(result.amortization_table)))

    if result.effective_mode == "multi":
        st.caption(t("results.periods_used"))
        st.markdown(
            "\n".join(
                "- " + t("results.period_item", years=p.years, rate=format_rate(p.rate))
                for p in inputs.rate_periods
            )
        )

    with st.expander(t("results.amortization")):
        st.dataframe(
            _display_frame(amortization_frame(result.amortization_table)),
            hide_index=True,
        )
    with st.expander(t("results.yearly")):
        st.dataframe(
            _display_frame(yearly_summary(result.amortization_table)),
            hide_index=True,
        )

    lang = current_language()
    c1, c2 = st.columns(2)
    c1.download_button(
        t("results.download_csv"),
        data=schedule_csv(result.amortization_table, lang),
        file_name="tableau_amortissement.csv",
        mime="text/csv",
    )
    c2.download_button(
        t("results.download_pdf"),
        data=build_schedule_pdf(result, inputs, lang),
        file_name="tableau_amortissement.pdf",
        mime="application/pdf",
    )
